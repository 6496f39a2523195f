"""
memoisation of resolution outcomes for autovenv.

entries are keyed by the normalised directory a resolution started from
and never expire on their own. the cache is safe to read, write and clear
from several threads.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import final


@final
@dataclass(frozen=True)
class CacheLookup:
    """
    result of a cache lookup.

    attributes:
        `hit: bool`
            whether the directory has been resolved before
        `venv_path: Path | None`
            the recorded outcome; none on a miss, or on a hit recorded as
            "searched, not found"
    """

    hit: bool
    venv_path: Path | None = None


@final
class ResolutionCache:
    """
    per-resolver mapping of directory to resolved environment.

    attributes:
        `_entries: dict[str, Path | None]`
            recorded outcomes
        `_lock: threading.Lock`
            guards `_entries` and the counters
        `_hits: int`
            number of lookups answered from the cache
        `_misses: int`
            number of lookups that were not
    """

    _entries: dict[str, Path | None]
    _lock: threading.Lock
    _hits: int
    _misses: int

    def __init__(self) -> None:
        self._entries = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def lookup(self, key: str) -> CacheLookup:
        """
        Look up the recorded outcome for a directory.

        arguments:
            `key: str`
                normalised directory path

        returns: `CacheLookup`
            hit flag and recorded outcome
        """
        with self._lock:
            if key in self._entries:
                self._hits += 1
                return CacheLookup(hit=True, venv_path=self._entries[key])

            self._misses += 1
            return CacheLookup(hit=False)

    def store(self, key: str, venv_path: Path | None) -> None:
        """
        record an outcome for a directory.

        arguments:
            `key: str`
                normalised directory path
            `venv_path: Path | None`
                resolved environment, or none if nothing was found
        """
        with self._lock:
            self._entries[key] = venv_path

    def clear(self) -> None:
        """Drop every recorded outcome."""
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> dict[str, int]:
        """
        Get cache statistics.

        returns: `dict[str, int]`
            dictionary with cache statistics
        """
        with self._lock:
            found = sum(1 for venv_path in self._entries.values() if venv_path is not None)
            return {
                "entries": len(self._entries),
                "found_entries": found,
                "not_found_entries": len(self._entries) - found,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
