# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Per-request context backed by the ASGI ``scope["state"]`` dict.

Purpose
=======
The authentication filters hand the verified identity to downstream
handlers through the request context. In ASGI that is the ``state`` entry
of the scope: created by the server for each request, shared by every
middleware and handler of that request, and discarded when it completes.

``RequestContext`` is a view, not a copy: writes land in ``scope["state"]``
so that any other framework reading the same dict (``request.state`` in
Starlette and friends) sees them.

ASGI Mapping::

    scope["state"] = {}  →  RequestContext (get/set by key)

Example::

    ctx = RequestContext.from_scope(scope)
    ctx.set("BearerToken", identity)

    # later, in a handler
    identity = identity_from_scope(scope, "BearerToken")
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

__all__ = ["RequestContext", "identity_from_scope"]


class RequestContext:
    """
    Mutable key/value store scoped to a single request.

    Attributes:
        data: The underlying ``scope["state"]`` mapping.
    """

    __slots__ = ("data",)

    def __init__(self, data: MutableMapping[str, Any]) -> None:
        self.data = data

    @classmethod
    def from_scope(cls, scope: MutableMapping[str, Any]) -> RequestContext:
        """Return the context of scope, creating ``scope["state"]`` if absent."""
        state = scope.get("state")
        if state is None:
            state = scope["state"] = {}
        return cls(state)

    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        self.data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        return self.data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __repr__(self) -> str:
        return f"RequestContext({dict(self.data)!r})"


def identity_from_scope(scope: MutableMapping[str, Any], key: str, default: Any = None) -> Any:
    """
    Return the identity a filter stored under key, or default.

    Does not create ``scope["state"]`` when it is missing.
    """
    state = scope.get("state")
    if state is None:
        return default
    return state.get(key, default)
