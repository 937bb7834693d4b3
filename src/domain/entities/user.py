"""
User Entity

Represents an identity that can sign in from several devices.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Index

from src.domain.base import AuditedModel


class User(AuditedModel, table=True):
    """
    User entity - an identity that logs in with email or phone number.

    Business Rules:
    - Email and phone number are each unique across all users
    - Password stored as bcrypt(password + security_stamp)
    - security_stamp is random per user and generated at creation time
    - Soft deleted users cannot log in
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role_id: Optional[UUID] = Field(default=None, index=True)

    email: str = Field(unique=True, index=True, max_length=255)
    phone_number: str = Field(unique=True, index=True, max_length=32)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    security_stamp: str = Field(max_length=64)

    name: str = Field(max_length=255)
    avatar_path: Optional[str] = Field(default=None, max_length=512)
    address: Optional[str] = Field(default=None, max_length=512)

    __table_args__ = (Index("idx_user_is_deleted", "is_deleted"),)
