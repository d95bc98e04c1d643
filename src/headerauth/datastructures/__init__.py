# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Data structures over raw ASGI scope entries.

Mapping from ASGI to headerauth classes::

    ASGI Raw Data                          headerauth Classes
    ─────────────────                      ──────────────────
    scope["headers"] = [(b"...", b"...")]  →  Headers (case-insensitive, read-only)
    scope["state"] = {}                    →  RequestContext (per-request key/value store)
"""

from .headers import Headers, headers_from_scope
from .state import RequestContext, identity_from_scope

__all__ = [
    "Headers",
    "RequestContext",
    "headers_from_scope",
    "identity_from_scope",
]
