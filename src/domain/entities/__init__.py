"""
Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AuthType, DeviceType, Platform, TokenType

# Export all entities
from .user import User
from .session import Session

__all__ = [
    # Enums
    "AuthType",
    "DeviceType",
    "Platform",
    "TokenType",
    # Entities
    "User",
    "Session",
]
