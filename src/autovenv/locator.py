"""
two-pass virtual environment lookup within a single directory.
"""

from __future__ import annotations

from pathlib import Path

from .config import ResolverConfig
from .filesystem import Filesystem
from .validator import is_valid_env


def locate_in_directory(
    base_dir: Path, config: ResolverConfig, filesystem: Filesystem
) -> Path | None:
    """
    find a virtual environment directly inside `base_dir`.

    the first pass tries each configured common name in order. the second
    pass, reached only when the first finds nothing, validates every
    non-hidden subdirectory in lexicographic order. hidden directories are
    only ever found through an explicit common name.

    arguments:
        `base_dir: Path`
            directory to search in
        `config: ResolverConfig`
            names and markers to search with
        `filesystem: Filesystem`
            query primitives to use

    returns: `Path | None`
        path to the first valid environment, or none
    """
    if not filesystem.is_dir(base_dir):
        return None

    for name in config.common_names:
        candidate = base_dir.joinpath(name)
        if is_valid_env(candidate, config, filesystem):
            return candidate

    for name in sorted(filesystem.list_dir(base_dir)):
        if name.startswith("."):
            continue

        candidate = base_dir.joinpath(name)
        if is_valid_env(candidate, config, filesystem):
            return candidate

    return None
