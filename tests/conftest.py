"""
conftest for autovenv tests.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest
from typing_extensions import override

from autovenv.filesystem import LocalFilesystem


class CountingFilesystem(LocalFilesystem):
    """local filesystem that counts every query it answers."""

    calls: Counter[str]

    def __init__(self) -> None:
        self.calls = Counter()

    @property
    def total(self) -> int:
        return sum(self.calls.values())

    @override
    def exists(self, path: Path) -> bool:
        self.calls["exists"] += 1
        return super().exists(path)

    @override
    def is_dir(self, path: Path) -> bool:
        self.calls["is_dir"] += 1
        return super().is_dir(path)

    @override
    def is_file(self, path: Path) -> bool:
        self.calls["is_file"] += 1
        return super().is_file(path)

    @override
    def list_dir(self, path: Path, pattern: str | None = None) -> list[str]:
        self.calls["list_dir"] += 1
        return super().list_dir(path, pattern)


def _make_venv(path: Path, cfg: bool = True, bin_dir: bool = True, lib_dir: bool = True) -> Path:
    """create a directory with the markers of a virtual environment.

    arguments:
        `path: Path`
            environment directory to create
        `cfg: bool`
            whether to write pyvenv.cfg
        `bin_dir: bool`
            whether to create bin/
        `lib_dir: bool`
            whether to create lib/

    returns: `Path`
        the environment directory
    """
    path.mkdir(parents=True, exist_ok=True)
    if cfg:
        (path / "pyvenv.cfg").write_text("home = /usr/bin\n")
    if bin_dir:
        (path / "bin").mkdir(exist_ok=True)
    if lib_dir:
        (path / "lib").mkdir(exist_ok=True)
    return path


@pytest.fixture
def make_venv():
    """factory building virtual environment trees."""
    return _make_venv


@pytest.fixture
def counting_fs() -> CountingFilesystem:
    """a query-counting local filesystem."""
    return CountingFilesystem()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """create an empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def dotvenv_project(project: Path) -> Path:
    """create a project with a valid .venv."""
    _make_venv(project / ".venv")
    return project


@pytest.fixture(autouse=True)
def clear_autovenv_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """keep AUTOVENV_* variables from the outer shell out of the tests."""
    for name in (
        "AUTOVENV_COMMON_NAMES",
        "AUTOVENV_SEARCH_PARENTS",
        "AUTOVENV_MAX_PARENT_DEPTH",
        "AUTOVENV_AUTO_ACTIVATE",
        "AUTOVENV_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
