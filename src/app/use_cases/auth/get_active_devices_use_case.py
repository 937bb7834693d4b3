from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import ActiveDevice


class GetActiveDevicesUseCase:
    """Lists the devices holding a live session for a user, without tokens"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[ActiveDevice]]:
        async with self.uow:
            sessions = await self.uow.sessions.list_live_by_user(user_id)

            return Return.ok(
                [
                    ActiveDevice(
                        device_id=s.device_id,
                        device_type=s.device_type,
                        platform=s.platform,
                        device_name=s.device_name,
                        access_token_expiration=s.access_token_expiration,
                        refresh_token_expiration=s.refresh_token_expiration,
                    )
                    for s in sessions
                ]
            )
