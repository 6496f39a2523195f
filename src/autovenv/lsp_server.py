"""
language server protocol host for autovenv.

resolves the virtual environment for every opened document and keeps
track of the environment the editor should treat as active.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, final
from urllib.parse import unquote

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from .config import ConfigurationError, ResolverConfig
from .core import VenvResolver, normalise_directory

COMMAND_RESOLVE = "autovenv.resolve"
COMMAND_CLEAR_CACHE = "autovenv.clearCache"
COMMAND_ACTIVE_ENVIRONMENT = "autovenv.activeEnvironment"
COMMAND_IS_ACTIVE = "autovenv.isActive"


def uri_to_path(uri: str) -> Path | None:
    """
    convert a file uri to a filesystem path.

    arguments:
        `uri: str`
            document uri

    returns: `Path | None`
        local path, or none for non-file uris
    """
    if not uri.startswith("file://"):
        return None

    file_path = unquote(uri[7:])

    # file:///C:/path -> C:/path
    if (
        len(file_path) >= 3
        and file_path[0] == "/"
        and file_path[1].isalpha()
        and file_path[2] == ":"
    ):
        file_path = file_path[1:]

    return Path(file_path)


@final
class AutoVenvLanguageServer(LanguageServer):
    """
    lsp server that resolves virtual environments for open documents.

    attributes:
        `config: ResolverConfig`
            configuration settings
        `resolver: VenvResolver`
            resolution engine
        `explicit_config: ResolverConfig | None`
            configuration handed to the constructor; when set it replaces
            the project files as the base layer on reload
        `project_root: Path`
            directory configuration files are loaded from
        `active_environment: Path | None`
            environment selected after the last activating resolution
    """

    config: ResolverConfig
    explicit_config: ResolverConfig | None
    resolver: VenvResolver
    project_root: Path
    active_environment: Path | None

    def __init__(self, config: ResolverConfig | None = None) -> None:
        """
        initialise the lsp server.

        arguments:
            `config: ResolverConfig | None`
                configuration settings (default: auto-load from workspace)
        """
        super().__init__("autovenv", "0.1.0")  # pyright: ignore[reportUnknownMemberType]

        self.project_root = Path.cwd()
        self.explicit_config = config
        self.config = config or ResolverConfig.load(self.project_root)
        self.resolver = VenvResolver(self.config)
        self.active_environment = None

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register lsp method handlers and commands."""

        @self.feature(types.INITIALIZED)
        def on_initialized(params: types.InitializedParams) -> None:
            """Load configuration from the workspace root."""
            if self.explicit_config is not None:
                return
            if root_path := self.workspace.root_path:
                self.project_root = Path(root_path)
                self.reload_configuration()

        _ = on_initialized  # registered via decorator

        @self.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def on_open(params: types.DidOpenTextDocumentParams) -> None:
            """Handle document open."""
            _ = self.resolve_document(params.text_document.uri)

        _ = on_open  # registered via decorator

        @self.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
        def on_change_configuration(params: types.DidChangeConfigurationParams) -> None:
            """Reload configuration and forget stale outcomes."""
            self.reload_configuration(params.settings)

        _ = on_change_configuration  # registered via decorator

        @self.command(COMMAND_RESOLVE)
        def resolve_command(*args: Any) -> str | None:
            """Resolve the environment for a directory."""
            if not args:
                return None
            venv_path = self.resolver.resolve(str(args[0]))  # pyright: ignore[reportAny]
            return str(venv_path) if venv_path else None

        _ = resolve_command  # registered via decorator

        @self.command(COMMAND_CLEAR_CACHE)
        def clear_cache_command(*args: Any) -> None:
            """Drop every memoised outcome."""
            self.resolver.clear_cache()

        _ = clear_cache_command  # registered via decorator

        @self.command(COMMAND_ACTIVE_ENVIRONMENT)
        def active_environment_command(*args: Any) -> str | None:
            """Report the active environment."""
            return str(self.active_environment) if self.active_environment else None

        _ = active_environment_command  # registered via decorator

        @self.command(COMMAND_IS_ACTIVE)
        def is_active_command(*args: Any) -> bool:
            """Check whether a path is the active environment."""
            return bool(args) and self.is_active(str(args[0]))  # pyright: ignore[reportAny]

        _ = is_active_command  # registered via decorator

    def resolve_document(self, uri: str) -> Path | None:
        """
        resolve the environment for a document and activate it if configured.

        arguments:
            `uri: str`
                document uri

        returns: `Path | None`
            resolved environment, or none
        """
        file_path = uri_to_path(uri)
        if file_path is None:
            return None

        directory = file_path.parent
        venv_path = self.resolver.resolve(directory)

        if venv_path is None:
            self._log(f"autovenv: no virtual environment found for {directory}")
            return None

        self._log(f"autovenv: found {venv_path} for {directory}")

        if self.config.auto_activate and venv_path != self.active_environment:
            self.active_environment = venv_path
            self._log(f"autovenv: activated {venv_path}")

        return venv_path

    def _log(self, message: str) -> None:
        self.window_log_message(
            types.LogMessageParams(type=types.MessageType.Info, message=message)
        )

    def is_active(self, path: str | Path) -> bool:
        """
        Check whether a path is the currently active environment.

        arguments:
            `path: str | Path`
                environment path to check

        returns: `bool`
            true if `path` is the active environment
        """
        if self.active_environment is None:
            return False
        return normalise_directory(path) == self.active_environment

    def reload_configuration(self, settings: Any = None) -> None:
        """
        reload configuration from the project and editor settings.

        the cache is cleared so the new names and markers take effect for
        directories that were already resolved. invalid settings are
        reported to the editor and the previous configuration is kept.

        arguments:
            `settings: Any`
                editor settings; an "autovenv" table inside is applied on
                top of the explicit or project configuration
        """
        try:
            if self.explicit_config is not None:
                config = self.explicit_config
            else:
                config = ResolverConfig.load(self.project_root)
            if isinstance(settings, dict) and isinstance(
                editor_settings := settings.get("autovenv"),  # pyright: ignore[reportUnknownMemberType]
                dict,
            ):
                config = config.merge(editor_settings)  # pyright: ignore[reportUnknownArgumentType]
        except ConfigurationError as e:
            self.window_show_message(
                types.ShowMessageParams(
                    type=types.MessageType.Error,
                    message=f"autovenv: invalid configuration: {e}",
                )
            )
            return

        self.config = config
        self.resolver.set_configuration(config)
        self.resolver.clear_cache()


def create_server(config: ResolverConfig | None = None) -> AutoVenvLanguageServer:
    """
    create and configure the lsp server.

    arguments:
        `config: ResolverConfig | None`
            configuration settings

    returns: `AutoVenvLanguageServer`
        configured lsp server
    """
    return AutoVenvLanguageServer(config)


def run_server_stdio(config: ResolverConfig | None = None) -> None:
    """
    run the lsp server over stdio.

    arguments:
        `config: ResolverConfig | None`
            configuration settings
    """
    server = create_server(config)
    server.start_io()
