# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Credential extraction and verifier contracts for the auth middleware.

This package knows how to read credentials out of an Authorization header
and what a caller-supplied verifier must look like. It never verifies
anything itself.

Exports:
    BearerVerifier: Protocol for "Authorization: Bearer <token>" verifiers
    BasicVerifier: Protocol for "Authorization: Basic <base64>" verifiers
    extract_bearer_token: Split the header into scheme and token
    extract_basic_auth: Decode the header into (user, password)
    check_verifier: Validate a verifier at filter construction time
    make_challenge: Build the WWW-Authenticate value for a scheme and realm
"""

from .base import BasicVerifier, BearerVerifier, check_verifier, make_challenge
from .credentials import extract_basic_auth, extract_bearer_token

__all__ = [
    "BasicVerifier",
    "BearerVerifier",
    "check_verifier",
    "make_challenge",
    "extract_basic_auth",
    "extract_bearer_token",
]
