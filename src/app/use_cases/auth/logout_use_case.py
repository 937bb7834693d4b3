"""
Logout Use Case

Revokes the live session of a device.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for signing a device out.

    Business Rules:
    - Idempotent: no live session on the device is a successful no-op
    - Session is revoked and soft deleted in one statement
    - With an acting user only their session is revoked; an anonymous
      logout revokes every live session on the device
    - Change is stamped with the acting user, or the session owner when the
      caller is anonymous
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, device_id: str, acting_user_id: Optional[UUID] = None
    ) -> Result[None]:
        """
        Execute logout use case.

        Args:
            device_id: Device to sign out
            acting_user_id: Authenticated caller; limits the logout to their
                sessions when given

        Returns:
            Result with None
        """
        async with self.uow:
            record = await self.uow.sessions.find_live_by_device(
                device_id, user_id=acting_user_id
            )
            if record is None:
                logger.info("Logout on device %s: no live session", device_id)
                return Return.ok(None)

            owner_id = record.user_id
            count = await self.uow.sessions.revoke_live_by_device(
                device_id,
                updated_by=acting_user_id or owner_id,
                user_id=acting_user_id,
            )

            await self.uow.commit()

            logger.info(
                "User %s logged out of device %s (%d session(s) revoked)",
                owner_id,
                device_id,
                count,
            )
            return Return.ok(None)
