from datetime import timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.credential_verifier import generate_security_stamp, hash_password
from src.domain.base import utcnow
from src.domain.entities import DeviceType, Platform, Session, User
from tests.fixtures.auth import TEST_BCRYPT_ROUNDS

PASSWORD = "secret1"


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.find_by_email_or_phone = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)

    uow.sessions = MagicMock()
    uow.sessions.find_live_by_user_and_device = AsyncMock(return_value=None)
    uow.sessions.find_live_by_device = AsyncMock(return_value=None)
    uow.sessions.find_live_by_device_and_nonce = AsyncMock(return_value=None)
    uow.sessions.list_live_by_user = AsyncMock(return_value=[])
    uow.sessions.create = AsyncMock(side_effect=lambda s: s)
    uow.sessions.overwrite_tokens = AsyncMock(return_value=True)
    uow.sessions.revoke = AsyncMock(return_value=True)
    uow.sessions.revoke_live_by_device = AsyncMock(return_value=1)

    return uow


@pytest.fixture
def user():
    stamp = generate_security_stamp()
    return User(
        id=uuid4(),
        email="a@b.com",
        phone_number="0900000001",
        password_hash=hash_password(PASSWORD, stamp, rounds=TEST_BCRYPT_ROUNDS),
        security_stamp=stamp,
        name="Alice",
    )


@pytest.fixture
def make_session(auth_settings):
    """Build a live session row whose tokens were really issued and encrypted"""

    def _make(user_id, device_id="d1", **overrides):
        tokens = auth_settings.token_codec.issue(user_id, device_id)
        encryptor = auth_settings.token_encryptor
        fields = dict(
            id=uuid4(),
            user_id=user_id,
            auth_id="a@b.com",
            encrypted_access_token=encryptor.encrypt(tokens.access_token),
            encrypted_refresh_token=encryptor.encrypt(tokens.refresh_token),
            session_nonce=tokens.session_nonce,
            access_token_expiration=tokens.access_token_expiration,
            refresh_token_expiration=tokens.refresh_token_expiration,
            device_id=device_id,
            device_type=DeviceType.MOBILE,
            platform=Platform.ANDROID,
            device_name="Pixel",
            created_at=utcnow() - timedelta(minutes=1),
        )
        fields.update(overrides)
        return Session(**fields), tokens

    return _make
