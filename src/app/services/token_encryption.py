"""
Token encryption service for at-rest secrets.

Uses AES-256-GCM so that any change to the stored envelope is detected.
"""

import binascii
import logging
import secrets
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from src.app.errors import ConfigurationError, DecryptionError, EncryptionError

logger = logging.getLogger(__name__)


class TokenEncryptionService:
    """
    Encrypts and decrypts strings with AES-256-GCM.

    Envelope format: hex(nonce) "." hex(tag) "." hex(ciphertext)
    """

    KEY_SIZE = 32
    NONCE_SIZE = 12
    TAG_SIZE = 16
    DELIMITER = "."

    def __init__(self, encryption_key: Optional[str]):
        """
        Initialize TokenEncryptionService.

        Args:
            encryption_key: 32-byte key as 64 hex characters

        Raises:
            ConfigurationError: key missing, not hex, or not 32 bytes
        """
        if not encryption_key:
            raise ConfigurationError("ENCRYPTION_KEY is not set")

        try:
            key_bytes = bytes.fromhex(encryption_key)
        except ValueError as exc:
            raise ConfigurationError("ENCRYPTION_KEY must be hex encoded") from exc

        if len(key_bytes) != self.KEY_SIZE:
            raise ConfigurationError(
                f"Invalid encryption key length. Expected {self.KEY_SIZE} bytes, "
                f"got {len(key_bytes)} bytes"
            )
        self._aesgcm = AESGCM(key_bytes)

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a string.

        Args:
            plaintext: Value to encrypt

        Returns:
            Self-contained envelope string

        Raises:
            EncryptionError: plaintext is not UTF-8 encodable
        """
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncryptionError("Plaintext is not valid UTF-8") from e

        nonce = secrets.token_bytes(self.NONCE_SIZE)
        # AESGCM appends the tag to the ciphertext
        sealed = self._aesgcm.encrypt(nonce, data, None)
        ciphertext, tag = sealed[: -self.TAG_SIZE], sealed[-self.TAG_SIZE :]
        return self.DELIMITER.join((nonce.hex(), tag.hex(), ciphertext.hex()))

    def decrypt(self, envelope: str) -> str:
        """
        Decrypt an envelope produced by encrypt().

        Args:
            envelope: nonce.tag.ciphertext hex string

        Returns:
            Original plaintext

        Raises:
            DecryptionError: envelope malformed or authentication failed
        """
        parts = envelope.split(self.DELIMITER) if envelope else []
        if len(parts) != 3:
            raise DecryptionError("Malformed envelope")

        try:
            nonce, tag, ciphertext = (binascii.unhexlify(part) for part in parts)
        except (binascii.Error, ValueError) as exc:
            raise DecryptionError("Envelope is not valid hex") from exc

        if len(nonce) != self.NONCE_SIZE or len(tag) != self.TAG_SIZE:
            raise DecryptionError("Malformed envelope")

        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as exc:
            logger.warning("Token decryption failed: authentication tag mismatch")
            raise DecryptionError("Envelope failed authentication") from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError("Decrypted value is not UTF-8") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new 32-byte encryption key as hex string."""
        return secrets.token_hex(TokenEncryptionService.KEY_SIZE)
