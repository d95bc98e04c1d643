# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Configuration loading for a headerauth-protected application.

Config precedence (later overrides earlier):
    1. Built-in DEFAULTS
    2. Config file: ./config.yaml, or the file given with --config
    3. Environment variables: HEADERAUTH_* (HEADERAUTH_PORT=9000)
    4. Command line arguments (--port 9000)
    5. Explicit constructor parameters

Example config.yaml::

    server:
      host: 127.0.0.1
      port: 8000
      app: "myapp.main:app"

    middleware:
      bearer: on

    bearer_middleware:
      verifier: "myapp.auth:TokenVerifier"
      strict_scheme: false

    errors_middleware:
      debug: false
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

from .exceptions import ConfigError
from .middleware import middleware_chain
from .utils import import_string

if TYPE_CHECKING:
    from .types import ASGIApp

__all__ = ["AuthConfig", "DEFAULTS"]

DEFAULTS = {"host": "127.0.0.1", "port": 8000}

DEFAULT_CONFIG_FILE = "config.yaml"


def _auth_opts_spec(config: str, host: str, port: int, app: str) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class AuthConfig:
    """Loads server and middleware options and builds the protected app."""

    __slots__ = ("_opts",)

    def __init__(
        self,
        config: str | Path | None = None,
        host: str | None = None,
        port: int | None = None,
        app: str | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self._opts = self._build_config(
            config=config, host=host, port=port, app=app, argv=argv or []
        )

    def _build_config(
        self,
        config: str | Path | None,
        host: str | None,
        port: int | None,
        app: str | None,
        argv: list[str],
    ) -> SmartOptions:
        env_argv_opts = SmartOptions(_auth_opts_spec, env="HEADERAUTH", argv=argv)
        caller_opts = SmartOptions(dict(host=host, port=port, app=app), ignore_none=True)

        explicit_file = config or env_argv_opts["config"]
        config_path = Path(explicit_file or DEFAULT_CONFIG_FILE)
        if config_path.exists():
            file_config = SmartOptions(str(config_path))
        elif explicit_file:
            raise ConfigError(f"Configuration file not found: {config_path}")
        else:
            file_config = SmartOptions({})

        server_opts = (
            SmartOptions(DEFAULTS)
            + (file_config["server"] or SmartOptions({}))
            + env_argv_opts
            + caller_opts
        )
        file_config["server"] = server_opts
        return file_config

    @property
    def server(self) -> SmartOptions:
        """Server options (host, port, app)."""
        result: SmartOptions = self._opts["server"]
        return result

    @property
    def middleware(self) -> Any:
        """Middleware on/off configuration ({} means defaults only)."""
        return self._opts["middleware"] or {}

    def build_app(self, app: ASGIApp | None = None) -> ASGIApp:
        """Wrap app (default: server.app import string) with the configured chain.

        Raises:
            ConfigError: If no app is given and server.app is not configured.
        """
        if app is None:
            app_path = self.server["app"]
            if not app_path:
                raise ConfigError("No application configured: set server.app or pass --app")
            app = import_string(app_path)
        return middleware_chain(self.middleware, app, self)

    def __getitem__(self, name: str) -> Any:
        """Proxy bracket access to underlying opts."""
        return self._opts[name]


if __name__ == "__main__":
    cfg = AuthConfig()
    print(f"Server: {cfg.server['host']}:{cfg.server['port']}")
    print(f"Middleware: {cfg.middleware}")
