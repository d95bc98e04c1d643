# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Error handling middleware for ASGI applications.

Turns the aborts raised further down the chain into HTTP responses, which
is how a request rejected by the authentication filters becomes a 401 with
its WWW-Authenticate challenge.

Exception handling:
    - HTTPException: Returns status code, exception headers and detail body.
      The chained cause (e.g. the verifier error) is logged, never sent.
    - Exception: Returns 500 Internal Server Error and logs the traceback.

Config:
    debug (bool): If True, include traceback in 500 responses. Default: False.

Note:
    This middleware is enabled by default (middleware_default=True) and
    runs early in the chain (middleware_order=100) to catch all errors.
    If the response has already started, the exception is re-raised to
    the server since no new status line can be sent.

Example:
    Middleware is auto-enabled, but can be configured::

        errors_middleware:
          debug: true  # Show tracebacks in development
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any, MutableMapping

from . import BaseMiddleware, _parse_enabled
from ..exceptions import HTTPException

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["ErrorMiddleware"]

logger = logging.getLogger(__name__)


class ErrorMiddleware(BaseMiddleware):
    """Error handling middleware for HTTP requests.

    Attributes:
        debug: If True, include stack traces in 500 error responses.

    Class Attributes:
        middleware_name: "errors" - identifier for config.
        middleware_order: 100 - runs early to catch all errors.
        middleware_default: True - enabled by default.
    """

    middleware_name = "errors"
    middleware_order = 100
    middleware_default = True

    __slots__ = ("debug",)

    def __init__(
        self,
        app: ASGIApp,
        debug: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize error middleware.

        Args:
            app: Next ASGI application in the middleware chain.
            debug: Show tracebacks in 500 responses. Defaults to False.
            **kwargs: Additional arguments passed to BaseMiddleware.
        """
        super().__init__(app, **kwargs)
        self.debug = _parse_enabled(debug)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process request with error handling.

        Non-HTTP requests (WebSocket, lifespan) pass through without error
        handling.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: MutableMapping[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except HTTPException as e:
            if response_started:
                raise
            self._log_http_error(scope, e)
            await self._send_http_error(send, e)
        except Exception as e:
            logger.exception(f"Unhandled error on {scope.get('method', '?')} {scope.get('path', '/')}")
            if response_started:
                raise
            await self._send_server_error(send, e)

    def _log_http_error(self, scope: Scope, exc: HTTPException) -> None:
        request_info = f"{scope.get('method', '?')} {scope.get('path', '/')}"
        if exc.cause is not None:
            logger.warning(
                f"{request_info} aborted with {exc.status_code}: "
                f"{type(exc.cause).__name__}: {exc.cause}"
            )
        else:
            logger.info(f"{request_info} aborted with {exc.status_code}: {exc.detail}")

    async def _send_http_error(self, send: Send, exc: HTTPException) -> None:
        """Send HTTP error response from HTTPException.

        Note:
            Content-Type: text/plain; charset=utf-8
            Body contains exc.detail message.
            Additional headers from exc.headers are appended.
        """
        body_bytes = (exc.detail or "").encode("utf-8")

        headers: list[tuple[bytes, bytes]] = [
            (b"content-type", b"text/plain; charset=utf-8"),
            (b"content-length", str(len(body_bytes)).encode()),
        ]
        if exc.headers:
            headers.extend((k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in exc.headers)

        await send({"type": "http.response.start", "status": exc.status_code, "headers": headers})
        await send({"type": "http.response.body", "body": body_bytes})

    async def _send_server_error(self, send: Send, error: Exception) -> None:
        """Send 500 Internal Server Error response.

        Note:
            If self.debug is True, includes full traceback in response body.
        """
        if self.debug:
            body = f"Internal Server Error\n\n{''.join(traceback.format_exception(error))}"
        else:
            body = "Internal Server Error"

        body_bytes = body.encode("utf-8")

        await send(
            {
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    (b"content-type", b"text/plain; charset=utf-8"),
                    (b"content-length", str(len(body_bytes)).encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body_bytes})


if __name__ == "__main__":
    pass
