from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import DeviceType, Platform, Session


class ISessionRepository(ABC):
    """
    Session repository interface - application layer

    "Live" means is_revoked = False and is_deleted = False.
    """

    @abstractmethod
    async def find_live_by_user_and_device(
        self, user_id: UUID, device_id: str
    ) -> Optional[Session]:
        """Get the live session of a user on a device"""
        pass

    @abstractmethod
    async def find_live_by_device(
        self, device_id: str, user_id: Optional[UUID] = None
    ) -> Optional[Session]:
        """Get the live session on a device, optionally scoped to a user"""
        pass

    @abstractmethod
    async def find_live_by_device_and_nonce(
        self, device_id: str, session_nonce: str
    ) -> Optional[Session]:
        """Get the live session a token's device and nonce point at"""
        pass

    @abstractmethod
    async def list_live_by_user(self, user_id: UUID) -> List[Session]:
        """Get all live sessions for a user"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """
        Create a new session

        Raises:
            SessionConflictError: a live session already exists for the device
        """
        pass

    @abstractmethod
    async def overwrite_tokens(
        self,
        session_id: UUID,
        expected_nonce: str,
        encrypted_access_token: str,
        encrypted_refresh_token: str,
        session_nonce: str,
        access_token_expiration: datetime,
        refresh_token_expiration: datetime,
        device_type: DeviceType,
        platform: Platform,
        device_name: Optional[str],
        updated_by: UUID,
    ) -> bool:
        """
        Replace the token pair of a live session in place.

        Applies only while the row is live and still carries expected_nonce.
        Returns True if the row was updated.
        """
        pass

    @abstractmethod
    async def revoke(self, session_id: UUID, updated_by: UUID) -> bool:
        """Revoke a live session. Returns True if this call revoked it."""
        pass

    @abstractmethod
    async def revoke_live_by_device(
        self, device_id: str, updated_by: UUID, user_id: Optional[UUID] = None
    ) -> int:
        """Revoke and soft delete live sessions on a device. Returns count."""
        pass
