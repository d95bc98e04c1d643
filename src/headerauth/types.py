# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI type definitions for headerauth.

The authentication filters are plain ASGI middleware, so the only types
they exchange with the hosting pipeline are the ones defined by the ASGI
specification:

Scope : MutableMapping[str, Any]
    Connection metadata. For HTTP: type="http", method, path, headers
    (``list[tuple[bytes, bytes]]``) and the per-request ``state`` dict where
    verified identities are stored.

Message : MutableMapping[str, Any]
    Messages exchanged with the server ("http.response.start", ...).

Receive / Send
    Async callables to receive and send messages.

ASGIApp : Callable[[Scope, Receive, Send], Awaitable[None]]
    Any ASGI application, including every middleware in the chain.

MiddlewareFactory : Callable[[ASGIApp], ASGIApp]
    What ``bearer_handler`` and ``basic_handler`` return: given the next
    application, build the filter that wraps it.

References:
    https://asgi.readthedocs.io/en/latest/specs/main.html
"""

from typing import Any, Awaitable, Callable, MutableMapping

__all__ = ["Scope", "Message", "Receive", "Send", "ASGIApp", "MiddlewareFactory"]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

# ASGI Receive - callable to receive messages
Receive = Callable[[], Awaitable[Message]]

# ASGI Send - callable to send messages
Send = Callable[[Message], Awaitable[None]]

# ASGI Application - the main callable
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

# Filter factory - wraps the next app in the chain
MiddlewareFactory = Callable[[ASGIApp], ASGIApp]
