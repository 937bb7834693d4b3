"""
Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuthType(str, Enum):
    """Identity method a session was opened with"""

    email = "email"
    google = "google"


class DeviceType(str, Enum):
    """Form factor of the device holding a session"""

    MOBILE = "MOBILE"
    DESKTOP = "DESKTOP"
    TABLET = "TABLET"


class Platform(str, Enum):
    """Browser or operating system reported by the device"""

    CHROME = "CHROME"
    FIREFOX = "FIREFOX"
    SAFARI = "SAFARI"
    EDGE = "EDGE"
    IOS = "IOS"
    ANDROID = "ANDROID"
    WINDOWS = "WINDOWS"
    MACOS = "MACOS"
    LINUX = "LINUX"


class TokenType(str, Enum):
    """Kind of JWT minted by the token codec"""

    access = "access"
    refresh = "refresh"
