"""
tests for the filesystem query primitives.
"""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest

from autovenv.filesystem import Filesystem, LocalFilesystem


class TestLocalFilesystem:
    """tests for the LocalFilesystem class."""

    def test_existence_queries(self, tmp_path: Path) -> None:
        """test basic existence queries."""
        fs = LocalFilesystem()
        (tmp_path / "file").write_text("")
        (tmp_path / "dir").mkdir()

        assert fs.exists(tmp_path / "file")
        assert fs.is_file(tmp_path / "file")
        assert not fs.is_dir(tmp_path / "file")
        assert fs.is_dir(tmp_path / "dir")
        assert not fs.is_file(tmp_path / "dir")
        assert not fs.exists(tmp_path / "missing")

    def test_list_dir(self, tmp_path: Path) -> None:
        """test listing with and without a pattern."""
        fs = LocalFilesystem()
        for name in ("a.py", "b.py", "c.txt"):
            (tmp_path / name).write_text("")

        assert sorted(fs.list_dir(tmp_path)) == ["a.py", "b.py", "c.txt"]
        assert sorted(fs.list_dir(tmp_path, "*.py")) == ["a.py", "b.py"]

    def test_list_missing_dir(self, tmp_path: Path) -> None:
        """test that an unreadable directory lists as empty."""
        assert LocalFilesystem().list_dir(tmp_path / "missing") == []

    def test_oserror_is_negative(self, tmp_path: Path) -> None:
        """test that query errors are reported as negative answers."""
        fs = LocalFilesystem()

        with mock.patch.object(Path, "is_dir", side_effect=OSError("i/o error")):
            assert fs.is_dir(tmp_path) is False
        with mock.patch.object(Path, "exists", side_effect=PermissionError("access denied")):
            assert fs.exists(tmp_path) is False
        with mock.patch("os.listdir", side_effect=PermissionError("access denied")):
            assert fs.list_dir(tmp_path) == []


class TestFilesystemInterface:
    """tests for the abstract interface."""

    def test_base_class_not_instantiable(self) -> None:
        """test that the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            _ = Filesystem()  # pyright: ignore[reportAbstractUsage]

    def test_incomplete_subclass_not_instantiable(self) -> None:
        """test that a subclass missing a query cannot be instantiated."""

        class ExistsOnly(Filesystem):
            def exists(self, path: Path) -> bool:
                return True

        with pytest.raises(TypeError):
            _ = ExistsOnly()  # pyright: ignore[reportAbstractUsage]
