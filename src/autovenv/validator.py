"""
structural validation of virtual environment directories.
"""

from __future__ import annotations

from pathlib import Path

from .config import ResolverConfig
from .filesystem import Filesystem


def is_valid_env(path: Path, config: ResolverConfig, filesystem: Filesystem) -> bool:
    """
    check whether a directory looks like a virtual environment.

    a directory qualifies when every configured marker file is a regular
    file directly under it and every configured marker directory is a
    directory directly under it. nothing is read or parsed.

    arguments:
        `path: Path`
            candidate environment directory
        `config: ResolverConfig`
            supplies the required marker names
        `filesystem: Filesystem`
            query primitives to use

    returns: `bool`
        true if all markers are present
    """
    if not filesystem.is_dir(path):
        return False

    for name in config.required_files:
        if not filesystem.is_file(path.joinpath(name)):
            return False

    for name in config.required_dirs:
        if not filesystem.is_dir(path.joinpath(name)):
            return False

    return True
