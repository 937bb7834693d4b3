from typing import Optional
from uuid import UUID

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_email_or_phone(self, username: str) -> Optional[User]:
        """Get non-deleted user whose email or phone number equals username"""
        stmt = select(User).where(
            or_(User.email == username, User.phone_number == username),
            User.is_deleted == False,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get non-deleted user by ID"""
        stmt = select(User).where(User.id == user_id, User.is_deleted == False)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
