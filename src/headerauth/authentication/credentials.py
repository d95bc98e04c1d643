# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Credential extraction from the Authorization header.

Bearer:
    The header must split on single spaces into exactly two parts. The
    second part is the token. The first part is not compared with "Bearer"
    unless ``strict_scheme`` is set, so ``"Token abc"`` is accepted too.
    Absent header, ``"Bearer"`` alone and ``"Bearer a b"`` all fail.

Basic:
    ``Basic <base64(user:password)>`` with a case-insensitive scheme word,
    strict standard base64 and a payload split at the first colon. The
    payload is decoded as UTF-8, falling back to Latin-1 for legacy clients.
    Every failure raises the same BasicFormatError so nothing is revealed
    about what was wrong.
"""

from __future__ import annotations

import base64
import binascii

from ..datastructures import Headers
from ..exceptions import BasicFormatError, BearerFormatError

__all__ = ["extract_bearer_token", "extract_basic_auth"]

BASIC_PREFIX = "basic "


def extract_bearer_token(headers: Headers, strict_scheme: bool = False) -> str:
    """Return the token part of the Authorization header.

    Args:
        headers: Request headers.
        strict_scheme: Also require the first part to be "Bearer"
            (case-insensitive). Off by default.

    Raises:
        BearerFormatError: If the header does not have the two-part shape.
    """
    authorization = headers.get("authorization", "") or ""
    parts = authorization.split(" ")
    if len(parts) != 2:
        raise BearerFormatError(authorization)
    if strict_scheme and parts[0].lower() != "bearer":
        raise BearerFormatError(authorization)
    return parts[1]


def extract_basic_auth(headers: Headers) -> tuple[str, str]:
    """Return (user, password) decoded from a Basic Authorization header.

    The password may contain colons; only the first colon separates it
    from the user.

    Raises:
        BasicFormatError: If the header is missing or malformed.
    """
    authorization = headers.get("authorization")
    if not authorization or authorization[: len(BASIC_PREFIX)].lower() != BASIC_PREFIX:
        raise BasicFormatError()
    try:
        raw = base64.b64decode(authorization[len(BASIC_PREFIX) :], validate=True)
    except (binascii.Error, ValueError):
        raise BasicFormatError() from None
    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError:
        decoded = raw.decode("latin-1")
    user, sep, password = decoded.partition(":")
    if not sep:
        raise BasicFormatError()
    return user, password
