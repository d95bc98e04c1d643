# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Utility helpers for headerauth.

Exports:
    import_string: Resolve a "module:attribute" string to the object it names.
    resolve_object: Accept an object, a class, or an import string.
"""

from __future__ import annotations

import importlib
from typing import Any

from ..exceptions import ConfigError


def import_string(path: str) -> Any:
    """Import the object named by a "module:attribute" string.

    The attribute part may be dotted ("pkg.mod:Outer.inner").

    Examples:
        import_string("myapp.auth:TokenVerifier")  # the class
        import_string("myapp.main:app")            # the ASGI app

    Raises:
        ConfigError: If the string is malformed, the module cannot be
            imported, or the attribute does not exist.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Invalid import string '{path}': expected 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module '{module_name}': {e}") from e
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"Module '{module_name}' has no attribute '{attr_path}'") from e
    return obj


def resolve_object(value: Any) -> Any:
    """Turn a config value into an object.

    Strings are imported with import_string. Classes are instantiated
    without arguments. Anything else is returned unchanged.
    """
    if isinstance(value, str):
        value = import_string(value)
    if isinstance(value, type):
        value = value()
    return value


__all__ = ["import_string", "resolve_object"]
