"""Security utilities - password hashing, session tokens, response headers.

Re-exports all security-related functions for convenience.
"""

from src.tracker.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    generate_session_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.tracker.core.security.headers import SecurityHeadersMiddleware

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "generate_session_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
]
