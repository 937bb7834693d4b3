"""
Authentication Use Cases

Login, refresh, logout and device listing for multi-device sessions.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .get_active_devices_use_case import GetActiveDevicesUseCase
from .authenticate_use_case import AuthenticateUseCase
from .dtos import (
    DeviceInfo,
    LoginResponse,
    RefreshTokenResponse,
    ActiveDevice,
    AuthenticatedUser,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetActiveDevicesUseCase",
    "AuthenticateUseCase",
    # DTOs - Commands
    "DeviceInfo",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "ActiveDevice",
    "AuthenticatedUser",
]
