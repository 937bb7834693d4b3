"""
Login Use Case

Handles credential verification and per-device session issuance.
"""

import logging

from src.app.errors import SESSION_CONFLICT, SessionConflictError
from src.app.services.auth_settings import AuthSettings
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuthType, Session
from src.libs.result import Result, Return
from .dtos import DeviceInfo, LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Username is an email or a phone number
    - Unknown user and wrong password both fail with INVALID_CREDENTIALS
    - Exactly one live session per (user, device) after the call
    - A live session on the same device is overwritten in place with a new
      nonce, new ciphertext and new expiries
    - Only encrypted tokens are persisted; plaintext is returned once
    """

    def __init__(self, uow: UnitOfWork, auth: AuthSettings):
        self.uow = uow
        self.auth = auth

    async def execute(
        self, username: str, password: str, device: DeviceInfo
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            username: Email or phone number
            password: Plain text password
            device: Device the login comes from

        Returns:
            Result with LoginResponse containing tokens and profile, or Error
        """
        async with self.uow:
            verified = await CredentialVerifier(
                self.uow.users, rounds=self.auth.bcrypt_rounds
            ).verify(username, password)
            if verified.is_err():
                return Return.err(verified.error)
            user = verified.value

            tokens = self.auth.token_codec.issue(user.id, device.device_id)
            encrypted_access = self.auth.token_encryptor.encrypt(tokens.access_token)
            encrypted_refresh = self.auth.token_encryptor.encrypt(tokens.refresh_token)

            existing = await self.uow.sessions.find_live_by_user_and_device(
                user.id, device.device_id
            )

            if existing is not None:
                session_id = existing.id
                updated = await self.uow.sessions.overwrite_tokens(
                    session_id=existing.id,
                    expected_nonce=existing.session_nonce,
                    encrypted_access_token=encrypted_access,
                    encrypted_refresh_token=encrypted_refresh,
                    session_nonce=tokens.session_nonce,
                    access_token_expiration=tokens.access_token_expiration,
                    refresh_token_expiration=tokens.refresh_token_expiration,
                    device_type=device.device_type,
                    platform=device.platform,
                    device_name=device.device_name,
                    updated_by=user.id,
                )
                if not updated:
                    logger.warning(
                        "Login conflict: session %s changed concurrently", existing.id
                    )
                    return Return.err(SESSION_CONFLICT)
            else:
                session = Session(
                    user_id=user.id,
                    auth_type=AuthType.email,
                    auth_id=user.email,
                    encrypted_access_token=encrypted_access,
                    encrypted_refresh_token=encrypted_refresh,
                    session_nonce=tokens.session_nonce,
                    access_token_expiration=tokens.access_token_expiration,
                    refresh_token_expiration=tokens.refresh_token_expiration,
                    device_id=device.device_id,
                    device_type=device.device_type,
                    platform=device.platform,
                    device_name=device.device_name,
                    created_by=user.id,
                )
                session_id = session.id
                try:
                    await self.uow.sessions.create(session)
                except SessionConflictError:
                    logger.warning(
                        "Login conflict: concurrent session created on device %s",
                        device.device_id,
                    )
                    return Return.err(SESSION_CONFLICT)

            # Commit transaction
            await self.uow.commit()

            logger.info("User %s logged in on device %s", user.id, device.device_id)

            return Return.ok(
                LoginResponse(
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                    session_id=str(session_id),
                    user_id=str(user.id),
                    email=user.email,
                    phone_number=user.phone_number,
                    name=user.name,
                    avatar_path=user.avatar_path,
                    address=user.address,
                    device_id=device.device_id,
                    device_type=device.device_type,
                    platform=device.platform,
                    device_name=device.device_name,
                )
            )
