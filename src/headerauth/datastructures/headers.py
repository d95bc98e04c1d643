# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""
Case-insensitive, read-only view of request headers.

ASGI provides headers as ``list[tuple[bytes, bytes]]`` with Latin-1 encoding
and preserved case. The authentication filters only ever read the first
``Authorization`` value, the same way ``http.Header.Get`` behaves in other
stacks, so lookups return the first occurrence.

Processing Schema::

    [(b"Authorization", b"Bearer abc"), (b"Host", b"example.com")]
                        ↓
    [("authorization", "Bearer abc"), ("host", "example.com")]
                        ↓
    headers.get("AUTHORIZATION") → "Bearer abc"

Example::

    scope = {"headers": [(b"Authorization", b"Basic YWxpY2U6c2VjcmV0")]}
    headers = headers_from_scope(scope)
    headers.get("authorization", "")  # "Basic YWxpY2U6c2VjcmV0"
"""

from collections.abc import Iterable, Mapping
from typing import Any, Iterator

__all__ = ["Headers", "headers_from_scope"]


class Headers:
    """
    Immutable, case-insensitive HTTP headers with multi-value support.

    Names are normalized to lowercase, values are kept as sent. Both are
    decoded as Latin-1, as mandated by ASGI.

    Example:
        >>> headers = Headers([(b"Authorization", b"Bearer t1")])
        >>> headers.get("authorization")
        'Bearer t1'
        >>> "AUTHORIZATION" in headers
        True
    """

    __slots__ = ("_headers",)

    def __init__(self, raw_headers: Iterable[tuple[bytes, bytes]]) -> None:
        self._headers: list[tuple[str, str]] = [
            (name.decode("latin-1").lower(), value.decode("latin-1"))
            for name, value in raw_headers
        ]

    def get(self, key: str, default: str | None = None) -> str | None:
        """
        Get the first value for a header (case-insensitive).

        Args:
            key: Header name (case-insensitive).
            default: Value to return if header not found.

        Returns:
            The first value for the header, or default if not found.
        """
        key_lower = key.lower()
        for name, value in self._headers:
            if name == key_lower:
                return value
        return default

    def getlist(self, key: str) -> list[str]:
        """Get all values for a header (case-insensitive), in order."""
        key_lower = key.lower()
        return [value for name, value in self._headers if name == key_lower]

    def keys(self) -> list[str]:
        """Return unique header names (lowercase) in order of first occurrence."""
        seen: set[str] = set()
        result: list[str] = []
        for name, _ in self._headers:
            if name not in seen:
                seen.add(name)
                result.append(name)
        return result

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"


def headers_from_scope(scope: Mapping[str, Any]) -> Headers:
    """
    Create Headers instance from ASGI scope.

    Returns empty Headers if "headers" is not in scope.
    """
    return Headers(scope.get("headers", []))
