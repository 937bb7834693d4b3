"""
Auth errors

Exceptions for startup/configuration faults plus the opaque Error values
returned by the auth use cases. Callers only ever see the code and the
generic message; the precise reason a check failed is logged, not returned.
"""

from src.libs.result import Error


class ConfigurationError(Exception):
    """Missing or malformed secret; raised at construction so startup aborts."""


class DecryptionError(Exception):
    """Ciphertext envelope could not be authenticated or parsed."""


class EncryptionError(Exception):
    """Plaintext has no UTF-8 encoding, e.g. a str holding lone surrogates."""


INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid username or password")
INVALID_TOKEN = Error("INVALID_TOKEN", "Token is invalid or has been revoked")
TOKEN_EXPIRED = Error("TOKEN_EXPIRED", "Token has expired")
SESSION_CONFLICT = Error(
    "SESSION_CONFLICT", "Another sign-in for this device is in progress"
)


class SessionConflictError(Exception):
    """A live session for the same user and device was written concurrently."""
