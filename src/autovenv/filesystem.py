"""
filesystem query primitives for autovenv.

the resolver only ever asks four questions of the filesystem: does a path
exist, is it a directory, is it a regular file, and what are the immediate
entries of a directory. all of them go through a `Filesystem` object so
hosts (and tests) can substitute their own.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from fnmatch import fnmatch
from pathlib import Path

from typing_extensions import override


class Filesystem(ABC):
    """
    abstract filesystem query interface.

    methods:
        `def exists(path: Path) -> bool`
            whether the path exists
        `def is_dir(path: Path) -> bool`
            whether the path is a directory
        `def is_file(path: Path) -> bool`
            whether the path is a regular file
        `def list_dir(path: Path, pattern: str | None = None) -> list[str]`
            names of the immediate entries of a directory
    """

    @abstractmethod
    def exists(self, path: Path) -> bool: ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool: ...

    @abstractmethod
    def is_file(self, path: Path) -> bool: ...

    @abstractmethod
    def list_dir(self, path: Path, pattern: str | None = None) -> list[str]: ...


class LocalFilesystem(Filesystem):
    """
    the real, local filesystem.

    any `OSError` raised while querying (permission denied, transient i/o
    failure) is reported as a negative answer for that single query.
    """

    @override
    def exists(self, path: Path) -> bool:
        try:
            return path.exists()
        except OSError:
            return False

    @override
    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError:
            return False

    @override
    def is_file(self, path: Path) -> bool:
        try:
            return path.is_file()
        except OSError:
            return False

    @override
    def list_dir(self, path: Path, pattern: str | None = None) -> list[str]:
        """
        list immediate entry names of a directory.

        arguments:
            `path: Path`
                directory to list
            `pattern: str | None`
                optional fnmatch-style pattern the names must match

        returns: `list[str]`
            entry names, or an empty list if the directory cannot be read
        """
        try:
            names = os.listdir(path)
        except OSError:
            return []

        if pattern is not None:
            names = [name for name in names if fnmatch(name, pattern)]

        return names
