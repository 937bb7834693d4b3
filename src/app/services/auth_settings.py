from dataclasses import dataclass
from datetime import timedelta

from src.app.errors import ConfigurationError
from src.app.services.credential_verifier import (
    DEFAULT_BCRYPT_ROUNDS,
    MAX_BCRYPT_ROUNDS,
    MIN_BCRYPT_ROUNDS,
    hash_password,
)
from src.app.services.token_codec import TokenCodec
from src.app.services.token_encryption import TokenEncryptionService


@dataclass(frozen=True)
class AuthSettings:
    """Immutable auth configuration handed to every auth use case at startup"""

    token_codec: TokenCodec
    token_encryptor: TokenEncryptionService
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    def __post_init__(self):
        if not MIN_BCRYPT_ROUNDS <= self.bcrypt_rounds <= MAX_BCRYPT_ROUNDS:
            raise ConfigurationError(
                f"BCRYPT_ROUNDS must be between {MIN_BCRYPT_ROUNDS} and "
                f"{MAX_BCRYPT_ROUNDS}, got {self.bcrypt_rounds}"
            )

    def hash_password(self, password: str, security_stamp: str) -> str:
        """Hash a new password at the configured cost factor"""
        return hash_password(password, security_stamp, rounds=self.bcrypt_rounds)

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        """
        Build settings from ApplicationConfig.

        Raises:
            ConfigurationError: JWT_SECRET or ENCRYPTION_KEY missing or
                malformed, or BCRYPT_ROUNDS out of range
        """
        return cls(
            token_codec=TokenCodec(
                config.JWT_SECRET,
                algorithm=config.JWT_ALGORITHM,
                access_token_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
                refresh_token_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            ),
            token_encryptor=TokenEncryptionService(config.ENCRYPTION_KEY),
            bcrypt_rounds=config.BCRYPT_ROUNDS,
        )
