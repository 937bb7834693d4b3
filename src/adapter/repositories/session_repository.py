from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.errors import SessionConflictError
from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import DeviceType, Platform, Session


def _live():
    return (Session.is_revoked == False, Session.is_deleted == False)


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_live_by_user_and_device(
        self, user_id: UUID, device_id: str
    ) -> Optional[Session]:
        """Get the live session of a user on a device"""
        stmt = select(Session).where(
            Session.user_id == user_id, Session.device_id == device_id, *_live()
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def find_live_by_device(
        self, device_id: str, user_id: Optional[UUID] = None
    ) -> Optional[Session]:
        """Get the live session on a device, optionally scoped to a user"""
        stmt = select(Session).where(Session.device_id == device_id, *_live())
        if user_id is not None:
            stmt = stmt.where(Session.user_id == user_id)
        result = await self.session.exec(stmt.order_by(Session.created_at.desc()))
        return result.first()

    async def find_live_by_device_and_nonce(
        self, device_id: str, session_nonce: str
    ) -> Optional[Session]:
        """Get the live session a token's device and nonce point at"""
        stmt = select(Session).where(
            Session.device_id == device_id,
            Session.session_nonce == session_nonce,
            *_live(),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_live_by_user(self, user_id: UUID) -> List[Session]:
        """Get all live sessions for a user"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, *_live())
            .order_by(Session.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # uq_session_live_user_device: another live row won the race
            raise SessionConflictError(str(session_obj.device_id)) from exc
        await self.session.refresh(session_obj)
        return session_obj

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
        """Replace the token pair of a live session if its nonce is unchanged"""
        stmt = (
            update(Session)
            .where(
                Session.id == session_id,
                Session.session_nonce == expected_nonce,
                *_live(),
            )
            .values(
                encrypted_access_token=encrypted_access_token,
                encrypted_refresh_token=encrypted_refresh_token,
                session_nonce=session_nonce,
                is_revoked=False,
                access_token_expiration=access_token_expiration,
                refresh_token_expiration=refresh_token_expiration,
                device_type=device_type,
                platform=platform,
                device_name=device_name,
                updated_by=updated_by,
                updated_at=utcnow(),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke(self, session_id: UUID, updated_by: UUID) -> bool:
        """Revoke a specific live session by ID"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, *_live())
            .values(is_revoked=True, updated_by=updated_by, updated_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def revoke_live_by_device(
        self, device_id: str, updated_by: UUID, user_id: Optional[UUID] = None
    ) -> int:
        """Revoke and soft delete every live session on a device"""
        stmt = update(Session).where(Session.device_id == device_id, *_live())
        if user_id is not None:
            stmt = stmt.where(Session.user_id == user_id)
        stmt = stmt.values(
            is_revoked=True,
            is_deleted=True,
            updated_by=updated_by,
            updated_at=utcnow(),
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
