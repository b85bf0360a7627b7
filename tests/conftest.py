"""Test configuration and fixtures."""

import logfire
import pytest

from qna.config import AuthSettings, Settings
from tests.factories import TEST_JWT_SECRET

# Spans go nowhere during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings matching tokens from make_token."""
    return AuthSettings(jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def test_settings(auth_settings: AuthSettings) -> Settings:
    """Settings for tests, independent of the environment."""
    return Settings(environment="test", auth=auth_settings)
