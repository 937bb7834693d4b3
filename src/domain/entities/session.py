"""
Session Entity

One row per user-device pairing that has authenticated.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, text
from sqlmodel import Field, Index

from src.domain.base import AuditedModel
from .enums import AuthType, DeviceType, Platform


class Session(AuditedModel, table=True):
    """
    Session entity - binds a user, a device and the current token pair.

    Business Rules:
    - At most one live (not revoked, not deleted) row per (user_id, device_id)
    - Tokens are stored AES-256-GCM encrypted, never in plaintext
    - session_nonce is embedded in both tokens as the jti claim
    - Re-login from the same device overwrites the live row in place
    - Refresh revokes the row and creates a new one (rotation)
    - A revoked row is never made live again
    """

    __tablename__ = "auth_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    auth_type: AuthType = Field(default=AuthType.email)
    auth_id: str = Field(max_length=255)

    encrypted_access_token: str
    encrypted_refresh_token: str
    session_nonce: str = Field(max_length=64, index=True)

    is_revoked: bool = Field(default=False, nullable=False)
    access_token_expiration: datetime = Field(
        sa_column=Column(DateTime, nullable=False)
    )
    refresh_token_expiration: datetime = Field(
        sa_column=Column(DateTime, nullable=False)
    )

    device_id: str = Field(max_length=255, index=True)
    device_type: DeviceType
    platform: Platform
    device_name: Optional[str] = Field(default=None, max_length=255)

    __table_args__ = (
        Index("idx_session_user_device", "user_id", "device_id"),
        Index(
            "uq_session_live_user_device",
            "user_id",
            "device_id",
            unique=True,
            sqlite_where=text("is_revoked = 0 AND is_deleted = 0"),
            postgresql_where=text("is_revoked = false AND is_deleted = false"),
        ),
    )
