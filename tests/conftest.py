"""Pytest configuration.

Settings are read once at import time, so the environment for the whole
test session is fixed here, before anything from ``latchkey`` is imported.
Tests run against in-memory SQLite (aiosqlite) with the stub email service.
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-0123456789abcdef0123")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-0123456789abcdef012")
os.environ.setdefault(
    "TOTP_ENCRYPTION_KEY", "MDEyMzQ1Njc4OWFiY2RlZjAxMjM0NTY3ODlhYmNkZWY="
)
os.environ.setdefault("HCAPTCHA_SECRET", "0x0000000000000000000000000000000000000000")
os.environ.setdefault("EMAIL_USER", "no-reply@latchkey.test")
os.environ.setdefault("FRONT_END_URL", "http://localhost:5173")
os.environ.setdefault("BCRYPT_ROUNDS", "10")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from latchkey.domain.entities import User  # noqa: E402
from latchkey.domain.enums import UserRole  # noqa: E402
from latchkey.infrastructure.persistence import Database  # noqa: E402

STRONG_PASSWORD = "Correct-Horse-42!x"
OTHER_STRONG_PASSWORD = "Battery-Staple-99#y"


def make_user(**overrides) -> User:
    """Build a User entity with sensible defaults.

    Usage:
        user = make_user(account_verified=True)
    """
    fields = {
        "id": 1,
        "username": "ada_lovelace",
        "email": "ada@example.com",
        "password_hash": "$2b$10$hash",
        "created_at": datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
        "role": UserRole.USER,
        "account_verified": True,
        "totp_auth_on": False,
        "totp_secret": None,
        "email_pending": None,
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double accepting any structured call."""
    return Mock()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with all tables created."""
    db = Database(database_url="sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session on the fresh database. Tests commit explicitly when needed."""
    async with database.async_session() as session:
        yield session
