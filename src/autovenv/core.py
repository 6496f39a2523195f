"""
core resolution logic for autovenv.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import final

from .cache import ResolutionCache
from .config import LogLevel, ResolverConfig
from .filesystem import Filesystem, LocalFilesystem
from .locator import locate_in_directory

logger = logging.getLogger(__name__)


def normalise_directory(start_dir: str | os.PathLike[str]) -> Path:
    """
    turn a caller-supplied directory into an absolute, normalised path.

    `~` is expanded and `..` segments are collapsed lexically; the
    filesystem is not consulted.

    arguments:
        `start_dir: str | os.PathLike[str]`
            directory to normalise

    returns: `Path`
        absolute path

    raises:
        `TypeError`
            if `start_dir` is not a path-like value
    """
    if not isinstance(start_dir, (str, os.PathLike)):
        raise TypeError(f"expected a path, got {type(start_dir).__name__}")

    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(os.fspath(start_dir)))))


@final
class VenvResolver:
    """
    finds the nearest virtual environment for a directory.

    a resolution tries the directory itself, then (when configured) each
    ancestor up to `max_parent_depth` levels, and memoises the outcome
    under the starting directory.

    attributes:
        `filesystem: Filesystem`
            query primitives in use
        `cache: ResolutionCache`
            memoised outcomes owned by this resolver
        `_config: ResolverConfig`
            active configuration
    """

    filesystem: Filesystem
    cache: ResolutionCache
    _config: ResolverConfig

    def __init__(
        self,
        config: ResolverConfig | None = None,
        filesystem: Filesystem | None = None,
        cache: ResolutionCache | None = None,
    ) -> None:
        """
        initialise the resolver.

        arguments:
            `config: ResolverConfig | None`
                configuration (default: built-in defaults)
            `filesystem: Filesystem | None`
                query primitives (default: the local filesystem)
            `cache: ResolutionCache | None`
                cache to use (default: a fresh, empty one)
        """
        self._config = config or ResolverConfig()
        self.filesystem = filesystem or LocalFilesystem()
        self.cache = cache if cache is not None else ResolutionCache()

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def set_configuration(self, config: ResolverConfig) -> None:
        """
        Replace the active configuration.

        already cached outcomes are kept; call `clear_cache` as well if the
        new names or markers should apply to directories resolved before.

        arguments:
            `config: ResolverConfig`
                new configuration

        raises:
            `TypeError`
                if `config` is not a `ResolverConfig`
        """
        if not isinstance(config, ResolverConfig):
            raise TypeError(f"expected ResolverConfig, got {type(config).__name__}")
        self._config = config

    def clear_cache(self) -> None:
        """Forget every memoised outcome."""
        self.cache.clear()
        self._emit(LogLevel.VERBOSE, "cache cleared")

    def cache_stats(self) -> dict[str, int]:
        return self.cache.get_stats()

    def resolve(self, start_dir: str | os.PathLike[str]) -> Path | None:
        """
        Resolve the virtual environment for a directory.

        arguments:
            `start_dir: str | os.PathLike[str]`
                directory to start from; the caller passes a directory,
                not a file

        returns: `Path | None`
            path to the environment, or none if nothing was found

        raises:
            `TypeError`
                if `start_dir` is not a path-like value
        """
        start = normalise_directory(start_dir)
        key = str(start)

        cached = self.cache.lookup(key)
        if cached.hit:
            self._emit(LogLevel.VERBOSE, "cache hit for %s: %s", key, cached.venv_path)
            return cached.venv_path

        config = self._config
        self._emit(LogLevel.VERBOSE, "searching %s", start)
        venv_path = locate_in_directory(start, config, self.filesystem)

        if venv_path is None and config.search_parents:
            venv_path = self._walk_parents(start, config)

        self.cache.store(key, venv_path)

        if venv_path is not None:
            self._emit(LogLevel.INFO, "found virtual environment for %s: %s", key, venv_path)
        else:
            self._emit(LogLevel.INFO, "no virtual environment found for %s", key)

        return venv_path

    def _walk_parents(self, start: Path, config: ResolverConfig) -> Path | None:
        current = start
        depth = 0

        while depth < config.max_parent_depth:
            parent = current.parent
            if parent == current:
                self._emit(LogLevel.VERBOSE, "reached filesystem root at %s", current)
                break

            current = parent
            depth += 1
            self._emit(LogLevel.VERBOSE, "searching parent %s (depth %d)", current, depth)

            if venv_path := locate_in_directory(current, config, self.filesystem):
                return venv_path

        return None

    def _emit(self, level: LogLevel, message: str, *args: object) -> None:
        configured = self._config.log_level
        if configured is LogLevel.SILENT:
            return

        if level is LogLevel.INFO:
            logger.info(message, *args)
        elif configured is LogLevel.VERBOSE:
            logger.debug(message, *args)


def find_venv(
    start_dir: str | os.PathLike[str], config: ResolverConfig | None = None
) -> Path | None:
    """
    resolve a directory once, without keeping a cache around.

    arguments:
        `start_dir: str | os.PathLike[str]`
            directory to start from
        `config: ResolverConfig | None`
            configuration (default: built-in defaults)

    returns: `Path | None`
        path to the environment, or none if nothing was found
    """
    return VenvResolver(config).resolve(start_dir)
