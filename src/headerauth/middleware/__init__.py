# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Middleware package - ASGI middleware for headerauth."""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..exceptions import ConfigError

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

MIDDLEWARE_REGISTRY: dict[str, type["BaseMiddleware"]] = {}


class BaseMiddleware(ABC):
    """Base class for all middleware. Subclasses auto-register via __init_subclass__.

    Class attributes:
        middleware_name: Registry key (default: class name).
        middleware_order: Order in chain (lower = earlier). Ranges:
            100: Core (errors)
            400-499: Authentication (bearer, basic)
            500-800: Business logic (custom)
        middleware_default: Default on/off state. Default: False.
    """

    middleware_name: str = ""
    middleware_order: int = 500
    middleware_default: bool = False

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp, **kwargs: Any) -> None:
        """Initialize middleware with wrapped app.

        Args:
            app: The ASGI app to wrap (next in chain).
            **kwargs: Middleware-specific configuration.
        """
        self.app = app

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.middleware_name or cls.__name__
        if name in MIDDLEWARE_REGISTRY:
            raise ValueError(f"Middleware name '{name}' already registered")
        cls.middleware_name = name
        MIDDLEWARE_REGISTRY[name] = cls

    @abstractmethod
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None: ...


def _autodiscover() -> None:
    """Import all middleware modules in this package to trigger registration."""
    package_dir = Path(__file__).parent
    for py_file in package_dir.glob("*.py"):
        if py_file.name.startswith("_"):
            continue
        importlib.import_module(f".{py_file.stem}", __package__)


def middleware_chain(
    middleware_config: str | list[str] | dict[str, Any] | None,
    app: ASGIApp,
    full_config: Any = None,
) -> ASGIApp:
    """Build middleware chain from config with automatic ordering.

    Uses middleware_order class attribute for sorting (lower = earlier in chain).
    Uses middleware_default class attribute for default on/off state.

    YAML format:
        middleware:
          bearer: on
          errors: on  # default=True, so usually omitted

        bearer_middleware:
          verifier: "myapp.auth:TokenVerifier"
          strict_scheme: true

    Args:
        middleware_config: Dict {name: on/off}, comma-separated string, or list.
        app: The innermost ASGI app.
        full_config: Mapping (or SmartOptions) to lookup {name}_middleware sections.

    Returns:
        Wrapped ASGI app with middleware chain.

    Raises:
        ConfigError: If an enabled name is not a registered middleware.
    """
    config_dict: dict[str, bool] = {}

    if isinstance(middleware_config, str):
        # "errors, bearer" -> all enabled
        for name in middleware_config.split(","):
            name = name.strip()
            if name:
                config_dict[name] = True
    elif hasattr(middleware_config, "as_dict"):
        # SmartOptions
        for name, value in middleware_config.as_dict().items():  # type: ignore[union-attr]
            config_dict[name] = _parse_enabled(value)
    elif isinstance(middleware_config, dict):
        for name, value in middleware_config.items():
            config_dict[name] = _parse_enabled(value)
    elif middleware_config:
        for name in middleware_config:
            config_dict[name] = True

    unknown = [name for name, on in config_dict.items() if on and name not in MIDDLEWARE_REGISTRY]
    if unknown:
        raise ConfigError(f"Unknown middleware: {', '.join(sorted(unknown))}")

    enabled: list[tuple[int, str, type[BaseMiddleware]]] = []
    for name, cls in MIDDLEWARE_REGISTRY.items():
        is_enabled = config_dict.get(name, cls.middleware_default)
        if is_enabled:
            enabled.append((cls.middleware_order, name, cls))

    enabled.sort(key=lambda x: x[0])

    # Build chain (reversed: first in order = outermost wrapper)
    for _order, name, cls in reversed(enabled):
        config: Any = {}
        if full_config is not None:
            mw_config = _section(full_config, f"{name}_middleware")
            if mw_config is not None:
                config = mw_config.as_dict() if hasattr(mw_config, "as_dict") else dict(mw_config)
        app = cls(app, **config)

    return app


def _section(full_config: Any, key: str) -> Any:
    """Return a config section from a dict or SmartOptions (None if missing)."""
    if isinstance(full_config, dict):
        return full_config.get(key)
    return full_config[key]


def _parse_enabled(value: Any) -> bool:
    """Parse on/off/true/false value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("on", "true", "yes", "1")
    return bool(value)


_autodiscover()

from .authentication import (  # noqa: E402
    BASIC_TOKEN,
    BEARER_TOKEN,
    BasicAuthMiddleware,
    BearerAuthMiddleware,
    basic_handler,
    bearer_handler,
)
from .errors import ErrorMiddleware  # noqa: E402

__all__ = [
    "BaseMiddleware",
    "MIDDLEWARE_REGISTRY",
    "middleware_chain",
    "BASIC_TOKEN",
    "BEARER_TOKEN",
    "BasicAuthMiddleware",
    "BearerAuthMiddleware",
    "ErrorMiddleware",
    "basic_handler",
    "bearer_handler",
]
