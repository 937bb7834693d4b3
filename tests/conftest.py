import pytest

from tests.fixtures.auth import build_auth_settings


@pytest.fixture
def auth_settings():
    return build_auth_settings()
