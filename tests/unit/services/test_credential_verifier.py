"""
Unit tests for password hashing and the Credential Verifier
"""

import bcrypt
import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.errors import INVALID_CREDENTIALS
from src.app.services.credential_verifier import (
    CredentialVerifier,
    dummy_hash,
    generate_security_stamp,
    hash_password,
    verify_password,
)
from tests.fixtures.auth import TEST_BCRYPT_ROUNDS

PASSWORD = "secret1"


@pytest.fixture
def stamp():
    return generate_security_stamp()


@pytest.fixture
def password_hash(stamp):
    return hash_password(PASSWORD, stamp, rounds=TEST_BCRYPT_ROUNDS)


def _mutations(value: str):
    for i in range(len(value)):
        replacement = "x" if value[i] != "x" else "y"
        yield value[:i] + replacement + value[i + 1 :]
        yield value[:i] + value[i + 1 :]
    yield value + "x"


def test_verify_password_accepts_original(stamp, password_hash):
    assert verify_password(PASSWORD, stamp, password_hash)


def test_verify_password_rejects_single_character_mutations(stamp, password_hash):
    for mutated in _mutations(PASSWORD):
        assert not verify_password(mutated, stamp, password_hash), mutated


def test_verify_password_requires_matching_stamp(password_hash):
    assert not verify_password(PASSWORD, generate_security_stamp(), password_hash)


def test_hash_embeds_cost_factor(stamp, password_hash):
    assert password_hash.startswith("$2b$04$")
    assert PASSWORD not in password_hash


def test_corrupt_hash_is_a_mismatch(stamp):
    assert not verify_password(PASSWORD, stamp, "not-a-bcrypt-hash")


def test_security_stamps_are_random():
    assert generate_security_stamp() != generate_security_stamp()


@pytest.mark.asyncio
async def test_verify_by_email(user):
    users = MagicMock()
    users.find_by_email_or_phone = AsyncMock(return_value=user)

    result = await CredentialVerifier(users).verify("a@b.com", "secret1")

    assert result.is_ok()
    assert result.value is user
    users.find_by_email_or_phone.assert_called_once_with("a@b.com")


@pytest.mark.asyncio
async def test_verify_by_phone_number(user):
    users = MagicMock()
    users.find_by_email_or_phone = AsyncMock(return_value=user)

    result = await CredentialVerifier(users).verify("0900000001", "secret1")

    assert result.is_ok()
    users.find_by_email_or_phone.assert_called_once_with("0900000001")


@pytest.mark.asyncio
async def test_unknown_user_and_wrong_password_are_indistinguishable(user):
    unknown_users = MagicMock()
    unknown_users.find_by_email_or_phone = AsyncMock(return_value=None)
    known_users = MagicMock()
    known_users.find_by_email_or_phone = AsyncMock(return_value=user)

    unknown = await CredentialVerifier(unknown_users).verify("nobody@b.com", "secret1")
    wrong = await CredentialVerifier(known_users).verify("a@b.com", "secret2")

    assert unknown.is_err() and wrong.is_err()
    assert unknown.error == wrong.error == INVALID_CREDENTIALS


def test_dummy_hash_uses_requested_cost():
    assert dummy_hash(TEST_BCRYPT_ROUNDS).startswith(b"$2b$04$")
    assert dummy_hash(5).startswith(b"$2b$05$")


@pytest.mark.asyncio
async def test_unknown_user_is_checked_at_configured_cost(monkeypatch):
    users = MagicMock()
    users.find_by_email_or_phone = AsyncMock(return_value=None)
    checked = []
    real_checkpw = bcrypt.checkpw

    def spy(password, hashed):
        checked.append(hashed)
        return real_checkpw(password, hashed)

    monkeypatch.setattr(bcrypt, "checkpw", spy)

    result = await CredentialVerifier(users, rounds=5).verify("nobody@b.com", "secret1")

    assert result.error == INVALID_CREDENTIALS
    assert [h[:7] for h in checked] == [b"$2b$05$"]
