"""Test configuration and fixtures."""

import os

import pytest

from social.config import AuthSettings

# Fast bcrypt and a quiet logger for the whole test session
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-key-for-session-tokens")


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings for token tests."""
    return AuthSettings(
        jwt_secret="test-secret-key-for-session-tokens",
        jwt_expiry_hours=72,
        bcrypt_rounds=4,
    )


def pytest_configure(config):
    """Keep Logfire local during tests."""
    import logfire

    logfire.configure(send_to_logfire=False, console=False)


async def make_user(user_repo, username: str, **fields):
    """Create a password-account user directly in a repository."""
    from social.domain.model import User
    from social.domain.value.types import Username

    return await user_repo.create(
        User(
            username=Username(username),
            display_name=fields.pop("display_name", username.title()),
            email=fields.pop("email", f"{username}@example.com"),
            password_hash=fields.pop("password_hash", "$2b$04$not-a-real-hash"),
            **fields,
        )
    )
