# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Authentication middleware for ASGI applications.

Two independent filters, one per Authorization scheme:

    bearer: "Authorization: Bearer <token>", checked by a BearerVerifier.
    basic: "Authorization: Basic <base64(user:password)>", checked by a BasicVerifier.

Both follow the same flow::

    extract credentials → verifier.parse_and_verify(...)
        ok    → scope["state"][BEARER_TOKEN | BASIC_TOKEN] = identity, call next app
        error → raise HTTPUnauthorized(WWW-Authenticate: <Scheme> realm="<realm>")

The error that caused the 401 (format error or verifier error) is chained
as ``__cause__`` of the HTTPUnauthorized. ErrorMiddleware renders the
response and logs the cause.

Downstream handlers read the identity with::

    identity_from_scope(scope, BEARER_TOKEN)

Config:
    verifier: Verifier object, class, or "module:attribute" import string.
        Classes named in config are instantiated without arguments.
    strict_scheme (bearer only): Require the first header word to be "Bearer".
        Default: False, any two-part header is accepted.

Example:
    In code::

        app = bearer_handler(TokenVerifier())(app)

    Or in config.yaml::

        middleware:
          bearer: on

        bearer_middleware:
          verifier: "myapp.auth:TokenVerifier"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from smartasync import smartasync

from . import BaseMiddleware, _parse_enabled
from ..authentication import check_verifier, extract_basic_auth, extract_bearer_token, make_challenge
from ..datastructures import RequestContext, headers_from_scope
from ..exceptions import ConfigError, CredentialsFormatError, HTTPUnauthorized
from ..utils import resolve_object

if TYPE_CHECKING:
    from ..authentication import BasicVerifier, BearerVerifier
    from ..types import ASGIApp, MiddlewareFactory, Receive, Scope, Send

__all__ = [
    "BASIC_TOKEN",
    "BEARER_TOKEN",
    "BasicAuthMiddleware",
    "BearerAuthMiddleware",
    "basic_handler",
    "bearer_handler",
]

logger = logging.getLogger(__name__)

# Request context key holding the identity returned by a BasicVerifier
BASIC_TOKEN = "BasicToken"

# Request context key holding the identity returned by a BearerVerifier
BEARER_TOKEN = "BearerToken"


def _load_verifier(verifier: Any, middleware_name: str) -> Any:
    if verifier is None:
        raise ConfigError(f"Middleware '{middleware_name}' requires a 'verifier'")
    return resolve_object(verifier)


def _log_rejection(scheme: str, scope: Scope, err: Exception) -> None:
    request_info = f"{scope.get('method', '?')} {scope.get('path', '/')}"
    if isinstance(err, CredentialsFormatError):
        logger.info(f"{scheme} auth rejected {request_info}: malformed credentials")
        # Bearer format errors carry the raw header
        logger.debug(f"{scheme} auth format error for {request_info}: {err}")
    else:
        logger.info(f"{scheme} auth rejected {request_info}: {type(err).__name__}: {err}")


class BearerAuthMiddleware(BaseMiddleware):
    """Bearer token authentication filter.

    Attributes:
        verifier: The BearerVerifier checking extracted tokens.
        realm: Realm announced in the challenge.
        challenge: Precomputed WWW-Authenticate value.
        strict_scheme: Whether the scheme word must be "Bearer".

    Class Attributes:
        middleware_name: "bearer" - identifier for config.
        middleware_order: 400 - runs after error handling.
        middleware_default: False - disabled by default.
    """

    middleware_name = "bearer"
    middleware_order = 400
    middleware_default = False

    __slots__ = ("verifier", "realm", "challenge", "strict_scheme")

    def __init__(
        self,
        app: ASGIApp,
        verifier: BearerVerifier[Any] | str | None = None,
        strict_scheme: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize bearer middleware.

        Args:
            app: Next ASGI application in the middleware chain.
            verifier: BearerVerifier instance, class, or import string.
            strict_scheme: Require "Bearer" as scheme word. Defaults to False.
            **kwargs: Additional arguments passed to BaseMiddleware.

        Raises:
            ConfigError: If no verifier is given or it cannot be imported.
            ValueError: If the verifier realm is empty or unusable in a header.
            TypeError: If the verifier has no parse_and_verify.
        """
        super().__init__(app, **kwargs)
        self.verifier = _load_verifier(verifier, self.middleware_name)
        self.realm = check_verifier(self.verifier)
        self.challenge = make_challenge("Bearer", self.realm)
        self.strict_scheme = _parse_enabled(strict_scheme)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Authenticate the request, then hand it to the next app.

        Raises:
            HTTPUnauthorized: Header malformed or the verifier raised any error.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            token = extract_bearer_token(headers_from_scope(scope), self.strict_scheme)
        except CredentialsFormatError as err:
            _log_rejection("Bearer", scope, err)
            raise HTTPUnauthorized(headers={"WWW-Authenticate": self.challenge}) from err

        # Any verifier error is a rejection, its type is not interpreted
        try:
            identity = await smartasync(self.verifier.parse_and_verify)(token)
        except Exception as err:
            _log_rejection("Bearer", scope, err)
            raise HTTPUnauthorized(headers={"WWW-Authenticate": self.challenge}) from err

        RequestContext.from_scope(scope).set(BEARER_TOKEN, identity)
        logger.debug(f"Bearer auth ok for realm {self.realm}, stored under {BEARER_TOKEN}")
        await self.app(scope, receive, send)


class BasicAuthMiddleware(BaseMiddleware):
    """HTTP Basic authentication filter.

    Class Attributes:
        middleware_name: "basic" - identifier for config.
        middleware_order: 410 - runs after bearer when both are enabled.
        middleware_default: False - disabled by default.
    """

    middleware_name = "basic"
    middleware_order = 410
    middleware_default = False

    __slots__ = ("verifier", "realm", "challenge")

    def __init__(
        self,
        app: ASGIApp,
        verifier: BasicVerifier[Any] | str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(app, **kwargs)
        self.verifier = _load_verifier(verifier, self.middleware_name)
        self.realm = check_verifier(self.verifier)
        self.challenge = make_challenge("Basic", self.realm)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            user, password = extract_basic_auth(headers_from_scope(scope))
        except CredentialsFormatError as err:
            _log_rejection("Basic", scope, err)
            raise HTTPUnauthorized(headers={"WWW-Authenticate": self.challenge}) from err

        try:
            identity = await smartasync(self.verifier.parse_and_verify)(user, password)
        except Exception as err:
            _log_rejection("Basic", scope, err)
            raise HTTPUnauthorized(headers={"WWW-Authenticate": self.challenge}) from err

        RequestContext.from_scope(scope).set(BASIC_TOKEN, identity)
        logger.debug(f"Basic auth ok for realm {self.realm}, stored under {BASIC_TOKEN}")
        await self.app(scope, receive, send)


def bearer_handler(verifier: BearerVerifier[Any], *, strict_scheme: bool = False) -> MiddlewareFactory:
    """Return a filter factory authenticating requests with a bearer token.

    The verifier is validated immediately, so a bad verifier fails at
    startup rather than on the first request. Pass an instance: a class
    raises TypeError here. Only BearerAuthMiddleware and config instantiate
    verifier classes.

    Example:
        >>> app = bearer_handler(TokenVerifier())(app)
    """
    check_verifier(verifier)

    def factory(app: ASGIApp) -> ASGIApp:
        return BearerAuthMiddleware(app, verifier=verifier, strict_scheme=strict_scheme)

    return factory


def basic_handler(verifier: BasicVerifier[Any]) -> MiddlewareFactory:
    """Return a filter factory authenticating requests with HTTP Basic auth."""
    check_verifier(verifier)

    def factory(app: ASGIApp) -> ASGIApp:
        return BasicAuthMiddleware(app, verifier=verifier)

    return factory


if __name__ == "__main__":
    pass
