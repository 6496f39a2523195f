"""
autovenv: nearest virtual environment resolver.

autovenv finds the virtual environment that belongs to a directory by
trying conventional names first, then any subdirectory that has the
markers of a virtual environment, walking up ancestor directories when
configured. outcomes are memoised per starting directory.

classes:
    `VenvResolver`
        resolves directories to virtual environments, with a cache
    `ResolverConfig`
        recognised options
functions:
    `def find_venv(start_dir: str | PathLike[str], config: ResolverConfig | None = None) -> Path | None`
        one-off resolution without a long-lived cache
"""

from __future__ import annotations

from .cache import CacheLookup, ResolutionCache
from .config import ConfigurationError, LogLevel, ResolverConfig
from .core import VenvResolver, find_venv
from .filesystem import Filesystem, LocalFilesystem
from .locator import locate_in_directory
from .models import VenvInfo, describe_venv
from .validator import is_valid_env

__version__ = "0.1.0"
__all__ = [
    "CacheLookup",
    "ConfigurationError",
    "Filesystem",
    "LocalFilesystem",
    "LogLevel",
    "ResolutionCache",
    "ResolverConfig",
    "VenvInfo",
    "VenvResolver",
    "describe_venv",
    "find_venv",
    "is_valid_env",
    "locate_in_directory",
]
