# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Verifier contracts for the authentication middleware.

A verifier is whatever object the caller passes to ``bearer_handler`` or
``basic_handler``. It needs exactly two members:

- ``realm``: non-empty string, used in the ``WWW-Authenticate`` challenge.
- ``parse_and_verify(...)``: returns the identity, or raises to reject the
  credentials. Any exception counts as a rejection; ``AuthenticationError``
  is the conventional one.

``parse_and_verify`` may be sync or async. The middleware awaits it through
smartasync, so blocking verifiers run in a worker thread.

The identity is opaque: the middleware stores whatever comes back without
looking at it. Hence the protocols are generic in the identity type.

Example:
    class TokenVerifier:
        realm = "api"

        async def parse_and_verify(self, bearer_token: str) -> User:
            user = await users.by_token(bearer_token)
            if user is None:
                raise AuthenticationError("unknown token")
            return user
"""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, TypeVar, runtime_checkable

__all__ = ["BearerVerifier", "BasicVerifier", "check_verifier", "make_challenge"]

IdentityT_co = TypeVar("IdentityT_co", covariant=True)


@runtime_checkable
class BearerVerifier(Protocol[IdentityT_co]):
    """Something that can parse and verify a bearer token."""

    @property
    def realm(self) -> str: ...

    def parse_and_verify(
        self, bearer_token: str
    ) -> IdentityT_co | Awaitable[IdentityT_co]: ...


@runtime_checkable
class BasicVerifier(Protocol[IdentityT_co]):
    """Something that can verify a username/password pair."""

    @property
    def realm(self) -> str: ...

    def parse_and_verify(
        self, user: str, password: str
    ) -> IdentityT_co | Awaitable[IdentityT_co]: ...


def check_verifier(verifier: Any) -> str:
    """Validate verifier and return its realm.

    The realm ends up in a response header, so it must be Latin-1
    encodable and free of control characters.

    Raises:
        ValueError: If realm is missing, not a string, empty, not Latin-1
            encodable, or contains control characters.
        TypeError: If verifier is a class, or parse_and_verify is missing
            or not callable.
    """
    if isinstance(verifier, type):
        raise TypeError(f"Verifier {verifier.__name__} is a class: pass an instance")
    realm = getattr(verifier, "realm", None)
    if not isinstance(realm, str) or not realm:
        raise ValueError(f"Verifier {verifier!r} must expose a non-empty 'realm' string")
    try:
        realm.encode("latin-1")
    except UnicodeEncodeError:
        raise ValueError(f"Realm {realm!r} is not Latin-1 encodable") from None
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in realm):
        raise ValueError(f"Realm {realm!r} contains control characters")
    if not callable(getattr(verifier, "parse_and_verify", None)):
        raise TypeError(f"Verifier {verifier!r} must implement parse_and_verify()")
    return realm


def make_challenge(scheme: str, realm: str) -> str:
    """Return the WWW-Authenticate value, quoting realm as an HTTP quoted-string."""
    escaped = realm.replace("\\", "\\\\").replace('"', '\\"')
    return f'{scheme} realm="{escaped}"'
