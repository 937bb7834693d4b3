"""
Unit tests for Authenticate Use Case
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from src.app.use_cases.auth import AuthenticateUseCase
from tests.fixtures.auth import JWT_SECRET


@pytest.mark.asyncio
async def test_live_session_resolves_user(mock_uow, auth_settings, user, make_session):
    record, tokens = make_session(user.id, "d1")
    mock_uow.sessions.find_live_by_device_and_nonce.return_value = record
    mock_uow.users.get_by_id.return_value = user

    result = await AuthenticateUseCase(mock_uow, auth_settings).execute(tokens.access_token)

    assert result.is_ok()
    assert result.value.user_id == user.id
    assert result.value.email == "a@b.com"
    assert result.value.session_id == record.id
    assert result.value.device_id == "d1"
    mock_uow.sessions.find_live_by_device_and_nonce.assert_called_once_with(
        "d1", tokens.session_nonce
    )


@pytest.mark.asyncio
async def test_superseded_nonce_is_invalid(mock_uow, auth_settings, user, make_session):
    _, tokens = make_session(user.id, "d1")

    result = await AuthenticateUseCase(mock_uow, auth_settings).execute(tokens.access_token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_session_of_other_user_is_invalid(mock_uow, auth_settings, user, make_session):
    record, tokens = make_session(user.id, "d1")
    record.user_id = uuid4()
    mock_uow.sessions.find_live_by_device_and_nonce.return_value = record

    result = await AuthenticateUseCase(mock_uow, auth_settings).execute(tokens.access_token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_refresh_token_is_not_an_access_token(mock_uow, auth_settings, user, make_session):
    record, tokens = make_session(user.id, "d1")
    mock_uow.sessions.find_live_by_device_and_nonce.return_value = record

    result = await AuthenticateUseCase(mock_uow, auth_settings).execute(tokens.refresh_token)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.sessions.find_live_by_device_and_nonce.assert_not_called()


@pytest.mark.asyncio
async def test_expired_access_token(mock_uow, auth_settings, user):
    past = datetime.now(UTC) - timedelta(seconds=5)
    token = jwt.encode(
        {
            "sub": str(user.id),
            "jti": "nonce",
            "device_id": "d1",
            "type": "access",
            "iat": past - timedelta(minutes=15),
            "exp": past,
        },
        JWT_SECRET,
        algorithm="HS256",
    )

    result = await AuthenticateUseCase(mock_uow, auth_settings).execute(token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"
    mock_uow.sessions.find_live_by_device_and_nonce.assert_not_called()
