"""
Refresh Token Use Case

Handles refresh token rotation for a single device.
"""

import hmac
import logging

from src.app.errors import INVALID_TOKEN, DecryptionError, SessionConflictError
from src.app.services.auth_settings import AuthSettings
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, TokenType
from src.libs.result import Result, Return
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for rotating a refresh token.

    Business Rules:
    - Session is looked up by device, never by scanning stored tokens
    - Token nonce must match the live session row of that device
    - Stored refresh token is decrypted and compared in constant time
    - Refresh tokens are single use: the old row is revoked and a new row
      is created under a new nonce
    - Every failure is INVALID_TOKEN; the reason is only logged
    """

    def __init__(self, uow: UnitOfWork, auth: AuthSettings):
        self.uow = uow
        self.auth = auth

    def _reject(self, reason: str, device_id: str) -> Result[RefreshTokenResponse]:
        logger.warning("Refresh rejected on device %s: %s", device_id, reason)
        return Return.err(INVALID_TOKEN)

    async def execute(
        self, refresh_token: str, device_id: str
    ) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            device_id: Device presenting the token

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        verified = self.auth.token_codec.verify(
            refresh_token, expected_type=TokenType.refresh
        )
        if verified.is_err():
            return self._reject(verified.error.code.lower(), device_id)
        claims = verified.value

        if claims.device_id != device_id:
            return self._reject("token issued to another device", device_id)

        async with self.uow:
            record = await self.uow.sessions.find_live_by_device(
                device_id, user_id=claims.user_id
            )
            if record is None:
                return self._reject("no live session", device_id)

            if record.session_nonce != claims.session_nonce:
                return self._reject("nonce does not match live session", device_id)

            try:
                stored_token = self.auth.token_encryptor.decrypt(
                    record.encrypted_refresh_token
                )
            except DecryptionError:
                return self._reject("stored token failed decryption", device_id)

            if not hmac.compare_digest(
                stored_token.encode("utf-8"), refresh_token.encode("utf-8")
            ):
                return self._reject("token does not match stored token", device_id)

            if record.refresh_token_expiration < utcnow():
                return self._reject("session expired", device_id)

            # Rotation: only one caller can revoke the base row
            revoked = await self.uow.sessions.revoke(record.id, updated_by=record.user_id)
            if not revoked:
                return self._reject("session already rotated", device_id)

            user = await self.uow.users.get_by_id(record.user_id)
            if user is None:
                return self._reject("user no longer exists", device_id)

            tokens = self.auth.token_codec.issue(user.id, device_id)

            new_session = Session(
                user_id=user.id,
                auth_type=record.auth_type,
                auth_id=record.auth_id,
                encrypted_access_token=self.auth.token_encryptor.encrypt(
                    tokens.access_token
                ),
                encrypted_refresh_token=self.auth.token_encryptor.encrypt(
                    tokens.refresh_token
                ),
                session_nonce=tokens.session_nonce,
                access_token_expiration=tokens.access_token_expiration,
                refresh_token_expiration=tokens.refresh_token_expiration,
                device_id=record.device_id,
                device_type=record.device_type,
                platform=record.platform,
                device_name=record.device_name,
                created_by=user.id,
            )
            new_session_id = new_session.id
            try:
                await self.uow.sessions.create(new_session)
            except SessionConflictError:
                return self._reject("concurrent session created", device_id)

            # Commit transaction
            await self.uow.commit()

            logger.info(
                "Rotated session %s -> %s for user %s",
                record.id,
                new_session_id,
                user.id,
            )

            return Return.ok(
                RefreshTokenResponse(
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    session_id=str(new_session_id),
                )
            )
