"""
models for autovenv.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import final

from .filesystem import Filesystem, LocalFilesystem


@final
@dataclass(frozen=True)
class VenvInfo:
    """
    description of a resolved virtual environment.

    attributes:
        `venv_path: Path`
            path to the virtual environment directory
        `python_executable: Path | None`
            path to the python executable, if it exists
        `pyvenv_cfg: Path | None`
            path to pyvenv.cfg, if it exists
    """

    venv_path: Path
    python_executable: Path | None
    pyvenv_cfg: Path | None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "venv_path": str(self.venv_path),
            "python_executable": str(self.python_executable)
            if self.python_executable
            else None,
            "pyvenv_cfg": str(self.pyvenv_cfg) if self.pyvenv_cfg else None,
        }


def get_python_executable(venv_path: Path, filesystem: Filesystem | None = None) -> Path | None:
    """
    get the python executable path for a virtual environment.

    handles cross-platform differences between windows and unix.

    arguments:
        `venv_path: Path`
            path to the virtual environment
        `filesystem: Filesystem | None`
            query primitives (default: the local filesystem)

    returns: `Path | None`
        path to python executable, or none if not found
    """
    filesystem = filesystem or LocalFilesystem()

    if sys.platform == "win32":
        python_exe = venv_path.joinpath("Scripts", "python.exe")
    else:
        python_exe = venv_path.joinpath("bin", "python")

    if filesystem.exists(python_exe):
        return python_exe

    return None


def describe_venv(venv_path: Path, filesystem: Filesystem | None = None) -> VenvInfo:
    """
    describe a virtual environment using existence checks only.

    arguments:
        `venv_path: Path`
            path to the virtual environment
        `filesystem: Filesystem | None`
            query primitives (default: the local filesystem)

    returns: `VenvInfo`
        description of the environment
    """
    filesystem = filesystem or LocalFilesystem()
    pyvenv_cfg = venv_path.joinpath("pyvenv.cfg")

    return VenvInfo(
        venv_path=venv_path,
        python_executable=get_python_executable(venv_path, filesystem),
        pyvenv_cfg=pyvenv_cfg if filesystem.is_file(pyvenv_cfg) else None,
    )
