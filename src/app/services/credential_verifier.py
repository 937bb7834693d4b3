"""
Credential Verifier

Checks a username (email or phone number) and password against the stored
bcrypt hash of password + security_stamp.
"""

import logging
import secrets
from functools import lru_cache
from typing import Optional

import bcrypt

from src.app.errors import INVALID_CREDENTIALS
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 10
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> bytes:
    """
    Hash compared against when the username is unknown, so both failure
    paths cost a full bcrypt check at the configured cost factor.
    """
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))


def generate_security_stamp() -> str:
    return secrets.token_hex(16)


def hash_password(
    password: str, security_stamp: str, rounds: int = DEFAULT_BCRYPT_ROUNDS
) -> str:
    """Hash password + security_stamp with bcrypt at the given cost factor."""
    combined = f"{password}{security_stamp}".encode("utf-8")
    return bcrypt.hashpw(combined, bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, security_stamp: str, password_hash: str) -> bool:
    """
    Re-derive password + security_stamp and compare with the stored hash.

    The cost factor is read from the hash itself. Inputs bcrypt refuses
    (too long, corrupt hash) count as a mismatch.
    """
    combined = f"{password}{security_stamp}".encode("utf-8")
    try:
        return bcrypt.checkpw(combined, password_hash.encode("utf-8"))
    except ValueError:
        return False


class CredentialVerifier:
    """
    Authenticates a username/password pair.

    Business Rules:
    - Username matches either email or phone_number exactly
    - Soft deleted users are never matched
    - Unknown user and wrong password are indistinguishable to the caller
    """

    def __init__(self, users: IUserRepository, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.users = users
        self.rounds = rounds

    async def verify(self, username: str, password: str) -> Result[User]:
        user: Optional[User] = await self.users.find_by_email_or_phone(username)

        if user is None:
            # Keep timing comparable to the wrong-password path
            bcrypt.checkpw(b"dummy_password", dummy_hash(self.rounds))
            logger.warning("Login rejected: unknown username")
            return Return.err(INVALID_CREDENTIALS)

        if not verify_password(password, user.security_stamp, user.password_hash):
            logger.warning("Login rejected: wrong password for user %s", user.id)
            return Return.err(INVALID_CREDENTIALS)

        return Return.ok(user)
