"""
configuration loading for autovenv.

this module holds the resolver configuration and handles loading it from
pyproject.toml, .autovenv.toml, and environment variables.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_COMMON_NAMES = ("env", "venv", ".env", ".venv", "virtualenv")
DEFAULT_REQUIRED_FILES = frozenset({"pyvenv.cfg"})
DEFAULT_REQUIRED_DIRS = frozenset({"bin", "lib"})
DEFAULT_MAX_PARENT_DEPTH = 3

_TRUTHY = ("true", "1", "yes", "on")


class ConfigurationError(ValueError):
    """raised when a configuration value is malformed."""


class LogLevel(Enum):
    """
    how chatty the resolver is.

    attributes:
        `SILENT: str`
            emit nothing
        `INFO: str`
            emit resolution outcomes
        `VERBOSE: str`
            emit outcomes and every search step
    """

    SILENT = "silent"
    INFO = "info"
    VERBOSE = "verbose"


def _as_name_collection(value: object, option: str) -> tuple[str, ...]:
    # a bare string is iterable but never what the caller meant
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"'{option}' must be a list of names, got {value!r}")

    names: list[str] = []
    for name in value:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(name, str):
            raise ConfigurationError(f"'{option}' contains a non-string entry: {name!r}")
        if not name or name in (".", ".."):
            raise ConfigurationError(f"'{option}' contains an empty or relative name: {name!r}")
        if "/" in name or "\\" in name:
            raise ConfigurationError(f"'{option}' entries must be plain names: {name!r}")
        names.append(name)

    return tuple(names)


@dataclass(frozen=True)
class ResolverConfig:
    """
    recognised options for virtual environment resolution.

    attributes:
        `common_names: tuple[str, ...]`
            conventional environment directory names, in priority order
        `required_files: frozenset[str]`
            files that must exist directly under a valid environment
        `required_dirs: frozenset[str]`
            directories that must exist directly under a valid environment
        `search_parents: bool`
            whether to walk up ancestor directories when nothing is found
        `max_parent_depth: int`
            how many ancestor levels to visit at most
        `auto_activate: bool`
            whether hosts should activate a found environment
        `log_level: LogLevel`
            resolver message verbosity
    """

    common_names: tuple[str, ...] = DEFAULT_COMMON_NAMES
    required_files: frozenset[str] = DEFAULT_REQUIRED_FILES
    required_dirs: frozenset[str] = DEFAULT_REQUIRED_DIRS
    search_parents: bool = True
    max_parent_depth: int = DEFAULT_MAX_PARENT_DEPTH
    auto_activate: bool = True
    log_level: LogLevel = field(default=LogLevel.INFO)

    def __post_init__(self) -> None:
        """Validate and normalise option values."""
        object.__setattr__(
            self, "common_names", _as_name_collection(self.common_names, "common_names")
        )
        object.__setattr__(
            self,
            "required_files",
            frozenset(_as_name_collection(self.required_files, "required_files")),
        )
        object.__setattr__(
            self,
            "required_dirs",
            frozenset(_as_name_collection(self.required_dirs, "required_dirs")),
        )

        depth = self.max_parent_depth
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise ConfigurationError(f"'max_parent_depth' must be an integer, got {depth!r}")
        if depth < 0:
            raise ConfigurationError(f"'max_parent_depth' must not be negative, got {depth}")

        if not isinstance(self.log_level, LogLevel):
            try:
                level = LogLevel(str(self.log_level).lower())
            except ValueError:
                choices = ", ".join(level.value for level in LogLevel)
                raise ConfigurationError(
                    f"'log_level' must be one of {choices}, got {self.log_level!r}"
                ) from None
            object.__setattr__(self, "log_level", level)

    @classmethod
    def from_pyproject_toml(cls, project_root: str | Path) -> ResolverConfig | None:
        """
        Load configuration from the [tool.autovenv] table of pyproject.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing pyproject.toml

        returns: `ResolverConfig | None`
            configuration object if the file and table exist, none otherwise

        raises:
            `ConfigurationError`
                if the table holds invalid values
        """
        options = _pyproject_options(Path(project_root))
        if options is None:
            return None

        return cls.from_dict(options)

    @classmethod
    def from_autovenv_toml(cls, project_root: str | Path) -> ResolverConfig | None:
        """
        Load configuration from .autovenv.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing .autovenv.toml

        returns: `ResolverConfig | None`
            configuration object if found, none otherwise

        raises:
            `ConfigurationError`
                if the file holds invalid values
        """
        options = _read_toml(Path(project_root).joinpath(".autovenv.toml"))
        if options is None:
            return None

        return cls.from_dict(options)

    @classmethod
    def from_environment(cls) -> ResolverConfig:
        """
        Load configuration from AUTOVENV_* environment variables.

        returns: `ResolverConfig`
            configuration with values from environment

        raises:
            `ConfigurationError`
                if a variable holds an invalid value
        """
        return cls.from_dict(_environment_options())

    @classmethod
    def load(cls, project_root: str | Path = ".") -> ResolverConfig:
        """
        Load configuration from all available sources.

        sources are loaded in order of priority (later overrides earlier):
        1. default values
        2. pyproject.toml
        3. .autovenv.toml
        4. environment variables

        only the options a source actually sets are applied, so a later
        source may also set an option back to its default value.

        arguments:
            `project_root: str | Path`
                project root directory

        returns: `ResolverConfig`
            merged configuration from all sources

        raises:
            `ConfigurationError`
                if any source holds invalid values
        """
        project_path = Path(project_root).resolve()
        config = cls()

        if pyproject_options := _pyproject_options(project_path):
            config = config.merge(pyproject_options)

        if autovenv_options := _read_toml(project_path.joinpath(".autovenv.toml")):
            config = config.merge(autovenv_options)

        return config.merge(_environment_options())

    def merge(self, options: Mapping[str, Any]) -> ResolverConfig:
        """
        apply a set of options on top of this configuration.

        every recognised key present in `options` takes precedence, even
        when its value equals the default. unknown keys are ignored.

        arguments:
            `options: Mapping[str, Any]`
                option values, as read from a configuration source

        returns: `ResolverConfig`
            new merged configuration

        raises:
            `ConfigurationError`
                if a value is malformed
        """
        return replace(self, **_known_options(options))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResolverConfig:
        """
        Create configuration from a dictionary, ignoring unknown keys.

        arguments:
            `data: Mapping[str, Any]`
                configuration dictionary

        returns: `ResolverConfig`
            configuration object

        raises:
            `ConfigurationError`
                if a value is malformed
        """
        return cls(**_known_options(data))


def _known_options(data: Mapping[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(ResolverConfig)}
    options = {key: value for key, value in data.items() if key in known}  # pyright: ignore[reportAny]

    for flag in ("search_parents", "auto_activate"):
        if flag in options and not isinstance(options[flag], bool):
            raise ConfigurationError(f"'{flag}' must be a boolean, got {options[flag]!r}")

    return options


def _pyproject_options(project_root: Path) -> dict[str, Any] | None:
    data = _read_toml(project_root.joinpath("pyproject.toml"))
    if data is None:
        return None

    tool_config = data.get("tool", {}).get("autovenv")  # pyright: ignore[reportAny]
    if not isinstance(tool_config, dict):
        return None

    return tool_config  # pyright: ignore[reportUnknownVariableType]


def _environment_options() -> dict[str, Any]:
    options: dict[str, Any] = {}

    if common_names := os.environ.get("AUTOVENV_COMMON_NAMES"):
        options["common_names"] = [
            name.strip() for name in common_names.split(",") if name.strip()
        ]

    if search_parents := os.environ.get("AUTOVENV_SEARCH_PARENTS"):
        options["search_parents"] = search_parents.lower() in _TRUTHY

    if depth := os.environ.get("AUTOVENV_MAX_PARENT_DEPTH"):
        try:
            options["max_parent_depth"] = int(depth)
        except ValueError:
            raise ConfigurationError(
                f"AUTOVENV_MAX_PARENT_DEPTH must be an integer, got {depth!r}"
            ) from None

    if auto_activate := os.environ.get("AUTOVENV_AUTO_ACTIVATE"):
        options["auto_activate"] = auto_activate.lower() in _TRUTHY

    if log_level := os.environ.get("AUTOVENV_LOG_LEVEL"):
        options["log_level"] = log_level

    return options


def _read_toml(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return None
