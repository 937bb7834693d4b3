"""
Authenticate Use Case

Resolves a presented access token to the identity of its live session.
"""

import logging

from src.app.errors import INVALID_TOKEN
from src.app.services.auth_settings import AuthSettings
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenType
from src.libs.result import Result, Return
from .dtos import AuthenticatedUser

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """
    Use case for authorizing a request by access token.

    Business Rules:
    - Signature and expiry are necessary but not sufficient
    - The token's device and nonce must point at a live session of its subject
    - Tokens superseded by re-login, refresh or logout are rejected
    - Expired tokens fail with TOKEN_EXPIRED so clients know to refresh
    """

    def __init__(self, uow: UnitOfWork, auth: AuthSettings):
        self.uow = uow
        self.auth = auth

    async def execute(self, access_token: str) -> Result[AuthenticatedUser]:
        verified = self.auth.token_codec.verify(
            access_token, expected_type=TokenType.access
        )
        if verified.is_err():
            return Return.err(verified.error)
        claims = verified.value

        async with self.uow:
            record = await self.uow.sessions.find_live_by_device_and_nonce(
                claims.device_id, claims.session_nonce
            )
            if record is None or record.user_id != claims.user_id:
                logger.warning(
                    "Access token rejected on device %s: no live session for nonce",
                    claims.device_id,
                )
                return Return.err(INVALID_TOKEN)

            user = await self.uow.users.get_by_id(record.user_id)
            if user is None:
                logger.warning("Access token rejected: user %s not found", claims.user_id)
                return Return.err(INVALID_TOKEN)

            # Built before the unit of work rolls back and expires the rows
            return Return.ok(
                AuthenticatedUser(
                    user_id=user.id,
                    role_id=user.role_id,
                    email=user.email,
                    phone_number=user.phone_number,
                    name=user.name,
                    avatar_path=user.avatar_path,
                    address=user.address,
                    session_id=record.id,
                    device_id=record.device_id,
                )
            )
