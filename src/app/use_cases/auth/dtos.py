"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import DeviceType, Platform


# ============================================================================
# Command DTOs
# ============================================================================


class DeviceInfo(BaseModel):
    """Device a login is performed from"""

    device_id: str = Field(..., min_length=1, max_length=255)
    device_type: DeviceType
    platform: Platform
    device_name: Optional[str] = Field(default=None, max_length=255)


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    refresh_token: str
    session_id: str
    user_id: str
    email: str
    phone_number: str
    name: str
    avatar_path: Optional[str] = None
    address: Optional[str] = None
    device_id: str
    device_type: DeviceType
    platform: Platform
    device_name: Optional[str] = None


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    session_id: str


class ActiveDevice(BaseModel):
    """Device with a live session; carries no token material"""

    device_id: str
    device_type: DeviceType
    platform: Platform
    device_name: Optional[str] = None
    access_token_expiration: datetime
    refresh_token_expiration: datetime


class AuthenticatedUser(BaseModel):
    """Identity behind a live access token, detached from the database session"""

    user_id: UUID
    role_id: Optional[UUID] = None
    email: str
    phone_number: str
    name: str
    avatar_path: Optional[str] = None
    address: Optional[str] = None
    session_id: UUID
    device_id: str
