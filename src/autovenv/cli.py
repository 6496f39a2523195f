"""
command-line interface for autovenv.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from .config import ConfigurationError, LogLevel, ResolverConfig
from .core import VenvResolver
from .models import VenvInfo, describe_venv


def create_parser() -> argparse.ArgumentParser:
    """
    create the argument parser for autovenv.

    returns: `argparse.ArgumentParser`
        configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="autovenv",
        description="find the nearest python virtual environment for a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  autovenv                              # resolve for the current directory
  autovenv src/pkg                      # resolve for another directory
  autovenv src/pkg --max-depth 5        # look further up
  autovenv --no-parents --json          # this directory only, as json
  autovenv --name .tox --name env       # custom common names
  autovenv --lsp                        # start lsp server
        """,
    )

    _ = parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="directory to resolve for (default: current directory)",
    )

    _ = parser.add_argument(
        "--no-parents",
        action="store_true",
        help="do not search ancestor directories",
    )

    _ = parser.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        help="visit at most N ancestor directories",
    )

    _ = parser.add_argument(
        "--name",
        action="append",
        dest="names",
        metavar="NAME",
        help="common environment directory name, in priority order (repeatable)",
    )

    _ = parser.add_argument(
        "--json",
        action="store_true",
        help="output as json",
    )

    verbosity = parser.add_mutually_exclusive_group()
    _ = verbosity.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="report every directory searched",
    )
    _ = verbosity.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="suppress resolver messages",
    )

    _ = parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging for troubleshooting",
    )

    _ = parser.add_argument(
        "--lsp",
        action="store_true",
        help="start the language server over stdio",
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    return parser


def format_output(info: VenvInfo | None, json_output: bool = False) -> str:
    """
    format venvinfo for output.

    arguments:
        `info: VenvInfo | None`
            environment description, or none if nothing was found
        `json_output: bool`
            whether to output as json

    returns: `str`
        formatted output string
    """
    if info is None:
        return "null" if json_output else "no virtual environment found"

    if json_output:
        return json.dumps(info.to_dict(), indent=2)

    lines = [f"venv_path: {info.venv_path}"]
    if info.python_executable:
        lines.append(f"python_executable: {info.python_executable}")
    if info.pyvenv_cfg:
        lines.append(f"pyvenv_cfg: {info.pyvenv_cfg}")

    return "\n".join(lines)


def build_config(args: argparse.Namespace, base: ResolverConfig) -> ResolverConfig:
    """
    apply command line overrides to a loaded configuration.

    arguments:
        `args: argparse.Namespace`
            parsed arguments
        `base: ResolverConfig`
            configuration loaded from files and environment

    returns: `ResolverConfig`
        configuration with overrides applied

    raises:
        `ConfigurationError`
            if an override is invalid
    """
    config = base

    if bool(getattr(args, "no_parents", False)):
        config = replace(config, search_parents=False)

    max_depth_raw = getattr(args, "max_depth", None)
    if max_depth_raw is not None:
        config = replace(config, max_parent_depth=int(max_depth_raw))  # pyright: ignore[reportAny]

    names_raw = getattr(args, "names", None)
    if names_raw:
        config = replace(config, common_names=tuple(str(n) for n in names_raw))  # pyright: ignore[reportAny]

    if bool(getattr(args, "verbose", False)) or bool(getattr(args, "debug", False)):
        config = replace(config, log_level=LogLevel.VERBOSE)
    elif bool(getattr(args, "quiet", False)):
        config = replace(config, log_level=LogLevel.SILENT)

    return config


def main(argv: Sequence[str] | None = None) -> int:
    """
    main entry point for the autovenv cli.

    arguments:
        `argv: Sequence[str] | None`
            command line arguments. if None, uses sys.argv.

    returns: `int`
        exit code (0 for success, 1 for a missing directory, 2 for a
        configuration error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    directory = Path(str(getattr(args, "directory", ".")))
    json_output = bool(getattr(args, "json", False))

    if bool(getattr(args, "debug", False)):
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(name)s] %(message)s",
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="autovenv: %(message)s",
        )

    try:
        config = build_config(args, ResolverConfig.load(Path.cwd()))
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if bool(getattr(args, "lsp", False)):
        from .lsp_server import run_server_stdio

        run_server_stdio(config)
        return 0

    if not directory.exists():
        print(f"error: path not found: {directory}", file=sys.stderr)
        return 1

    if directory.is_file():
        directory = directory.parent

    resolver = VenvResolver(config)
    venv_path = resolver.resolve(directory)
    info = describe_venv(venv_path, resolver.filesystem) if venv_path else None

    print(format_output(info, json_output=json_output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
