# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""headerauth - Bearer and Basic authentication filters for ASGI pipelines.

Main components:
    bearer_handler: Filter factory for "Authorization: Bearer <token>"
    basic_handler: Filter factory for "Authorization: Basic <base64>"
    BearerVerifier / BasicVerifier: Contracts for caller-supplied verifiers
    BEARER_TOKEN / BASIC_TOKEN: Request context keys holding the identity

Middleware:
    BearerAuthMiddleware, BasicAuthMiddleware: The filters themselves
    ErrorMiddleware: Renders aborts (401 + WWW-Authenticate) as responses

Usage:
    from headerauth import BEARER_TOKEN, ErrorMiddleware, bearer_handler

    app = ErrorMiddleware(bearer_handler(TokenVerifier())(app))

    # in a handler
    identity = identity_from_scope(scope, BEARER_TOKEN)
"""

__version__ = "0.1.0"

from .authentication import (
    BasicVerifier,
    BearerVerifier,
    extract_basic_auth,
    extract_bearer_token,
)
from .config import AuthConfig
from .datastructures import (
    Headers,
    RequestContext,
    headers_from_scope,
    identity_from_scope,
)
from .exceptions import (
    AuthenticationError,
    BasicFormatError,
    BearerFormatError,
    ConfigError,
    CredentialsFormatError,
    HTTPException,
    HTTPUnauthorized,
)
from .middleware import (
    BASIC_TOKEN,
    BEARER_TOKEN,
    BaseMiddleware,
    BasicAuthMiddleware,
    BearerAuthMiddleware,
    ErrorMiddleware,
    basic_handler,
    bearer_handler,
    middleware_chain,
)
from .types import ASGIApp, Message, MiddlewareFactory, Receive, Scope, Send

__all__ = [
    # Filter factories and context keys
    "bearer_handler",
    "basic_handler",
    "BEARER_TOKEN",
    "BASIC_TOKEN",
    # Verifier contracts
    "BearerVerifier",
    "BasicVerifier",
    # Credential extraction
    "extract_bearer_token",
    "extract_basic_auth",
    # Middleware
    "BaseMiddleware",
    "BearerAuthMiddleware",
    "BasicAuthMiddleware",
    "ErrorMiddleware",
    "middleware_chain",
    # Configuration
    "AuthConfig",
    # Data structures
    "Headers",
    "RequestContext",
    "headers_from_scope",
    "identity_from_scope",
    # Exceptions
    "AuthenticationError",
    "CredentialsFormatError",
    "BearerFormatError",
    "BasicFormatError",
    "HTTPException",
    "HTTPUnauthorized",
    "ConfigError",
    # ASGI types
    "ASGIApp",
    "Message",
    "MiddlewareFactory",
    "Receive",
    "Scope",
    "Send",
]
