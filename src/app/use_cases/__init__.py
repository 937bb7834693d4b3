"""
Use Cases

Organized into domain folders:
- auth/: Authentication and device session flows
"""

from .auth import (
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    GetActiveDevicesUseCase,
    AuthenticateUseCase,
)

__all__ = [
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetActiveDevicesUseCase",
    "AuthenticateUseCase",
]
