# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for headerauth.

Two families live here: authentication errors, which describe *why* a
request was rejected, and HTTP exceptions, which describe *how* the
pipeline aborts it.

Module Structure
----------------
Authentication errors (raised by extraction helpers and by verifiers):

1. AuthenticationError - Base class. Verifiers raise it to reject credentials.
2. CredentialsFormatError - The Authorization header could not be parsed.
3. BearerFormatError - Bearer header shape is wrong. Message carries the raw header.
4. BasicFormatError - Basic header missing or malformed. Fixed message.

Pipeline aborts (caught by ErrorMiddleware and rendered as a response):

5. HTTPException - Generic HTTP error response (4xx, 5xx).
6. HTTPUnauthorized - 401 with an optional WWW-Authenticate challenge.

Configuration:

7. ConfigError - Invalid middleware configuration or import string.

Abort cause
-----------
The authentication middleware raises ``HTTPUnauthorized`` *from* the
authentication error, so the error that caused the abort is available as
``exc.__cause__`` (also exposed as ``exc.cause``). The cause never reaches
the response body: the Bearer format error contains the raw header value.

Example:
    >>> try:
    ...     verifier.parse_and_verify(token)
    ... except AuthenticationError as err:
    ...     raise HTTPUnauthorized(headers={"WWW-Authenticate": challenge}) from err
"""

__all__ = [
    "AuthenticationError",
    "CredentialsFormatError",
    "BearerFormatError",
    "BasicFormatError",
    "HTTPException",
    "HTTPUnauthorized",
    "ConfigError",
]

BASIC_FORMAT_MESSAGE = "basic auth missing or wrong format"


class AuthenticationError(Exception):
    """
    Credentials were rejected.

    Verifiers raise this (or a subclass) from ``parse_and_verify`` to signal
    a failed verification. The message is opaque to the middleware: it is
    attached to the 401 abort as its cause and logged, never interpreted.

    Example:
        >>> raise AuthenticationError("expired")
    """


class CredentialsFormatError(AuthenticationError):
    """The Authorization header is missing or cannot be parsed."""


class BearerFormatError(CredentialsFormatError):
    """
    Bearer header does not split into exactly two space-separated parts.

    Attributes:
        header: The raw Authorization header value ("" when absent).
    """

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"invalid bearer format [{header}]")


class BasicFormatError(CredentialsFormatError):
    """Basic header missing or malformed. The message never varies."""

    def __init__(self) -> None:
        super().__init__(BASIC_FORMAT_MESSAGE)


class HTTPException(Exception):
    """
    HTTP exception with status code and detail.

    Raise this in middleware or handlers to abort the request. ErrorMiddleware
    catches it and converts it to an HTTP response with the given status
    code, detail, and headers.

    Attributes:
        status_code: HTTP status code (expected 4xx or 5xx, not validated)
        detail: Error detail message, used as response body
        headers: Response headers as list of tuples (supports duplicate names)

    Example:
        >>> raise HTTPException(404, detail="User not found")
        >>> raise HTTPException(401, headers={"WWW-Authenticate": 'Bearer realm="api"'})
    """

    def __init__(
        self,
        status_code: int,
        detail: str = "",
        headers: dict[str, str] | list[tuple[str, str]] | None = None,
    ) -> None:
        """
        Initialize HTTP exception.

        Args:
            status_code: HTTP status code (4xx, 5xx expected)
            detail: Error detail message (default: "")
            headers: Response headers as dict or list of tuples (default: None).
                     Dict is converted to list internally to support duplicate names.
        """
        self.status_code = status_code
        self.detail = detail
        # Normalize headers to list[tuple[str, str]] for consistent internal format
        if headers is None:
            self.headers: list[tuple[str, str]] | None = None
        elif isinstance(headers, dict):
            self.headers = list(headers.items())
        else:
            self.headers = list(headers)
        super().__init__(detail)

    @property
    def cause(self) -> BaseException | None:
        """The error this abort was raised from, if any."""
        return self.__cause__

    def get_header(self, name: str) -> str | None:
        """Return the first header value matching name (case-insensitive)."""
        name = name.lower()
        for key, value in self.headers or []:
            if key.lower() == name:
                return value
        return None

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{type(self).__name__}(status_code={self.status_code}, detail={self.detail!r})"


class HTTPUnauthorized(HTTPException):
    """HTTP 401 Unauthorized exception."""

    def __init__(
        self,
        detail: str = "Unauthorized",
        headers: dict[str, str] | list[tuple[str, str]] | None = None,
    ) -> None:
        super().__init__(401, detail=detail, headers=headers)


class ConfigError(Exception):
    """Configuration error."""
