"""
tests for the models module.
"""

from __future__ import annotations

import sys
from pathlib import Path

from autovenv.models import describe_venv, get_python_executable


class TestDescribeVenv:
    """tests for describe_venv."""

    def test_with_interpreter(self, tmp_path: Path, make_venv) -> None:
        """test describing an environment with an interpreter."""
        venv = make_venv(tmp_path / "venv")
        if sys.platform == "win32":
            python_exe = venv / "Scripts" / "python.exe"
        else:
            python_exe = venv / "bin" / "python"
        python_exe.parent.mkdir(parents=True, exist_ok=True)
        python_exe.write_text("")

        info = describe_venv(venv)

        assert info.venv_path == venv
        assert info.python_executable == python_exe
        assert info.pyvenv_cfg == venv / "pyvenv.cfg"

    def test_without_interpreter(self, tmp_path: Path, make_venv) -> None:
        """test describing an environment without an interpreter."""
        venv = make_venv(tmp_path / "venv")

        info = describe_venv(venv)

        assert info.python_executable is None
        assert info.to_dict() == {
            "venv_path": str(venv),
            "python_executable": None,
            "pyvenv_cfg": str(venv / "pyvenv.cfg"),
        }

    def test_get_python_executable_missing(self, tmp_path: Path) -> None:
        """test that a missing interpreter yields none."""
        assert get_python_executable(tmp_path) is None
