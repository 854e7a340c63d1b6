"""API test fixtures.

Every test gets its own in-memory database, created lazily inside the
TestClient event loop, plus a recording email service and a scriptable
CAPTCHA verifier. Requests run through the real routers, handlers and
security services.
"""

import re
from collections.abc import AsyncGenerator, Iterator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.core.container import (
    get_captcha_verifier,
    get_db_session,
    get_email_service,
)
from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Result, Success
from latchkey.infrastructure.email import StubEmailService
from latchkey.infrastructure.persistence import Database
from latchkey.infrastructure.persistence.models import User as UserModel
from latchkey.main import app
from tests.conftest import STRONG_PASSWORD

API = "/api/v1"
TOKEN_PATTERN = re.compile(r"token=([0-9a-f]{64})")


class PerTestDatabase:
    """Fresh in-memory database bound to the client's event loop."""

    def __init__(self) -> None:
        self._database: Database | None = None

    async def get_db_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._database is None:
            self._database = Database(database_url="sqlite+aiosqlite:///:memory:")
            await self._database.create_all()
        async with self._database.get_session() as session:
            yield session

    async def fetch_user(self, user_id: int) -> UserModel | None:
        """Read the stored users row, bypassing the repositories."""
        assert self._database is not None
        async with self._database.async_session() as session:
            return await session.get(UserModel, user_id)

    async def close(self) -> None:
        if self._database is not None:
            await self._database.close()


class FakeCaptchaVerifier:
    """CAPTCHA verifier whose verdict a test can set."""

    def __init__(self) -> None:
        self.outcome: Result[bool, UpstreamServiceError] = Success(value=True)
        self.tokens: list[str] = []

    async def verify_human(self, captcha_token: str) -> Result[bool, UpstreamServiceError]:
        self.tokens.append(captcha_token)
        return self.outcome


@pytest.fixture
def email_service() -> StubEmailService:
    return StubEmailService(
        app_name="Latchkey", sender="no-reply@latchkey.test", logger=Mock()
    )


@pytest.fixture
def captcha() -> FakeCaptchaVerifier:
    return FakeCaptchaVerifier()


@pytest.fixture
def api_database() -> PerTestDatabase:
    return PerTestDatabase()


@pytest.fixture
def client(
    email_service: StubEmailService,
    captcha: FakeCaptchaVerifier,
    api_database: PerTestDatabase,
) -> Iterator[TestClient]:
    """TestClient with database, CAPTCHA and email overridden."""
    app.dependency_overrides[get_db_session] = api_database.get_db_session
    app.dependency_overrides[get_captcha_verifier] = lambda: captcha
    app.dependency_overrides[get_email_service] = lambda: email_service

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
        test_client.portal.call(api_database.close)

    app.dependency_overrides.clear()


def last_token(email_service: StubEmailService, to_email: str | None = None) -> str:
    """Token from the newest email (optionally the newest sent to ``to_email``)."""
    for recipient, rendered in reversed(email_service.sent):
        if to_email is None or recipient == to_email:
            match = TOKEN_PATTERN.search(rendered.html)
            assert match is not None, f"no token link in {rendered.subject!r}"
            return match.group(1)
    raise AssertionError(f"no email sent to {to_email}")


def register(client: TestClient, **overrides) -> dict:
    body = {
        "username": "ada_lovelace",
        "email": "ada@example.com",
        "password": STRONG_PASSWORD,
        "reEnteredPassword": STRONG_PASSWORD,
    }
    body.update(overrides)
    response = client.post(f"{API}/users", json=body)
    assert response.status_code == 201, response.json()
    return body


def sign_in(client: TestClient, email: str = "ada@example.com", password: str = STRONG_PASSWORD):
    return client.post(
        f"{API}/sessions",
        json={"email": email, "password": password, "hCaptchaToken": "captcha-ok"},
    )


def signed_in_user(
    client: TestClient, email_service: StubEmailService, **overrides
) -> dict:
    """Register, verify and sign in; returns the user payload."""
    body = register(client, **overrides)
    token = last_token(email_service, body["email"])
    verified = client.get(
        f"{API}/verifications/verify-account-by-email", params={"token": token}
    )
    assert verified.status_code == 200, verified.json()
    response = sign_in(client, body["email"], body["password"])
    assert response.status_code == 200, response.json()
    return response.json()["user"]
