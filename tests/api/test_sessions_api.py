"""API tests for /api/v1/sessions.

Tests cover:
- Sign-in CAPTCHA gate, credentials, unverified accounts
- Cookie attributes
- TOTP challenge and completion
- Refresh, read and sign-out
"""

import pyotp
import pytest

from latchkey.core.enums import ErrorCode
from latchkey.core.errors import UpstreamServiceError
from latchkey.core.result import Failure, Success
from tests.api.conftest import (
    API,
    last_token,
    register,
    sign_in,
    signed_in_user,
)
from tests.conftest import STRONG_PASSWORD


def _enable_totp(client, user_id: int) -> str:
    secret = client.post(
        f"{API}/verifications/get-totp-secret", json={"id": user_id}
    ).json()["totpSecret"]
    response = client.patch(
        f"{API}/verifications/set-totp-auth",
        json={
            "id": user_id,
            "totpAuthOn": True,
            "totpSecret": secret,
            "totpCode": pyotp.TOTP(secret).now(),
        },
    )
    assert response.status_code == 200, response.json()
    return secret


@pytest.mark.api
class TestSignIn:
    def test_success_sets_both_cookies(self, client, email_service):
        user = signed_in_user(client, email_service)

        assert user["username"] == "ada_lovelace"
        assert "password" not in user
        assert client.cookies.get("accessToken")
        assert client.cookies.get("refreshToken")

    def test_cookie_attributes(self, client, email_service):
        register(client)

        client.get(
            f"{API}/verifications/verify-account-by-email",
            params={"token": last_token(email_service)},
        )

        response = sign_in(client)

        set_cookie = response.headers.get_list("set-cookie")
        access = next(c for c in set_cookie if c.startswith("accessToken="))
        refresh = next(c for c in set_cookie if c.startswith("refreshToken="))
        assert "HttpOnly" in access
        assert "Max-Age=3600" in access
        assert "Max-Age=604800" in refresh
        assert "samesite=lax" in access.lower()

    def test_missing_captcha_token(self, client):
        register(client)

        response = client.post(
            f"{API}/sessions",
            json={"email": "ada@example.com", "password": STRONG_PASSWORD},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "hCaptcha token missing"

    def test_captcha_rejected(self, client, captcha):
        captcha.outcome = Success(value=False)

        response = sign_in(client)

        assert response.status_code == 400
        assert response.json()["detail"] == "hCaptcha verification failed"

    def test_captcha_unavailable_fails_closed(self, client, captcha):
        captcha.outcome = Failure(
            error=UpstreamServiceError(
                code=ErrorCode.CAPTCHA_UNAVAILABLE,
                message="timed out",
                service="hcaptcha",
            )
        )

        response = sign_in(client)

        assert response.status_code == 500
        assert response.json()["detail"] == "hCaptcha verification error"
        assert "accessToken" not in client.cookies

    def test_unknown_email_and_wrong_password_match(self, client, email_service):
        signed_in_user(client, email_service)
        client.cookies.clear()

        unknown = sign_in(client, email="nobody@example.com")
        wrong = sign_in(client, password="Wrong-Horse-42!x")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["detail"] == wrong.json()["detail"] == "Invalid credentials"

    def test_unverified_account_forbidden(self, client):
        register(client)

        response = sign_in(client)

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "Please verify your email address before signing in"
        )
        assert "accessToken" not in client.cookies

    def test_email_matched_case_insensitively(self, client, email_service):
        signed_in_user(client, email_service)
        client.cookies.clear()

        response = sign_in(client, email="ADA@Example.COM")

        assert response.status_code == 200


@pytest.mark.api
class TestTotpSignIn:
    def test_challenge_then_completion(self, client, email_service):
        user = signed_in_user(client, email_service)
        secret = _enable_totp(client, user["id"])
        client.cookies.clear()

        challenge = sign_in(client)

        assert challenge.status_code == 200
        assert challenge.json() == {
            "message": "Please enter your 6-digit TOTP",
            "requireTotp": True,
            "userId": user["id"],
        }
        assert "accessToken" not in client.cookies

        completed = client.post(
            f"{API}/sessions/verify-totp",
            json={"userId": user["id"], "totpCode": pyotp.TOTP(secret).now()},
        )

        assert completed.status_code == 200
        assert completed.json()["user"]["totp_auth_on"] is True
        assert client.cookies.get("accessToken")

    def test_wrong_code(self, client, email_service):
        user = signed_in_user(client, email_service)
        secret = _enable_totp(client, user["id"])
        client.cookies.clear()
        wrong = str((int(pyotp.TOTP(secret).now()) + 500000) % 1000000).zfill(6)

        response = client.post(
            f"{API}/sessions/verify-totp", json={"userId": user["id"], "totpCode": wrong}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid TOTP"

    def test_missing_fields(self, client):
        response = client.post(f"{API}/sessions/verify-totp", json={"userId": 1})

        assert response.status_code == 400
        assert response.json()["detail"] == "userId and 6-digit TOTP required"

    def test_unknown_user(self, client):
        response = client.post(
            f"{API}/sessions/verify-totp", json={"userId": 404, "totpCode": "123456"}
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("user_id", [10**20, 2**63, 0, -1])
    def test_out_of_range_user_id_is_rejected(self, client, user_id):
        response = client.post(
            f"{API}/sessions/verify-totp",
            json={"userId": user_id, "totpCode": "123456"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "userId"


@pytest.mark.api
class TestSessionLifecycle:
    def test_read_session_without_cookie_is_null(self, client):
        response = client.get(f"{API}/sessions")

        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_read_session_with_cookie(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.get(f"{API}/sessions")

        assert response.json()["user"]["id"] == user["id"]

    def test_read_session_with_garbage_cookie_is_null(self, client):
        client.cookies.set("accessToken", "garbage")

        response = client.get(f"{API}/sessions")

        assert response.json() == {"user": None}

    def test_refresh_issues_new_access_cookie_only(self, client, email_service):
        signed_in_user(client, email_service)
        refresh_before = client.cookies.get("refreshToken")

        response = client.post(f"{API}/sessions/refresh-session")

        assert response.status_code == 200
        assert response.json() == {"message": "Session refreshed"}
        set_cookie = response.headers.get_list("set-cookie")
        assert any(c.startswith("accessToken=") for c in set_cookie)
        assert not any(c.startswith("refreshToken=") for c in set_cookie)
        assert client.cookies.get("refreshToken") == refresh_before

    def test_refresh_without_cookie(self, client):
        response = client.post(f"{API}/sessions/refresh-session")

        assert response.status_code == 401
        assert response.json()["detail"] == "Refresh token not found"

    def test_access_token_is_not_a_refresh_token(self, client, email_service):
        signed_in_user(client, email_service)
        access = client.cookies.get("accessToken")
        client.cookies.clear()
        client.cookies.set("refreshToken", access)

        response = client.post(f"{API}/sessions/refresh-session")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_sign_out_clears_cookies(self, client, email_service):
        signed_in_user(client, email_service)

        response = client.delete(f"{API}/sessions")

        assert response.status_code == 200
        assert response.json() == {"message": "Signed out successfully"}
        assert "accessToken" not in client.cookies
        assert client.get(f"{API}/sessions").json() == {"user": None}

    def test_sign_out_without_session_succeeds(self, client):
        assert client.delete(f"{API}/sessions").status_code == 200
