"""API tests for /api/v1/users.

Tests cover:
- Registration validation (every failing field reported) and conflicts
- Reading a user with session ownership checks
- Updates, including the pending email change flow
- Account deletion by emailed token
"""

import pytest

from tests.api.conftest import API, last_token, register, sign_in, signed_in_user
from tests.conftest import OTHER_STRONG_PASSWORD, STRONG_PASSWORD


def _fields(response) -> dict[str, str]:
    return {error["field"]: error["message"] for error in response.json()["errors"]}


@pytest.mark.api
class TestRegistration:
    def test_register_sends_verification_link(self, client, email_service):
        response = client.post(
            f"{API}/users",
            json={
                "username": "ada_lovelace",
                "email": "ada@example.com",
                "password": STRONG_PASSWORD,
                "reEnteredPassword": STRONG_PASSWORD,
            },
        )

        assert response.status_code == 201
        assert response.json() == {
            "message": "Registered successfully — please check your email to confirm"
        }
        to_email, rendered = email_service.sent[-1]
        assert to_email == "ada@example.com"
        assert "/verify-email?token=" in rendered.html

    def test_invalid_fields_reported_together(self, client):
        response = client.post(
            f"{API}/users",
            json={
                "username": "1x",
                "email": "not-an-email",
                "password": "short",
                "reEnteredPassword": "short",
                "role": "root",
            },
        )

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation failed"
        fields = _fields(response)
        assert set(fields) == {"username", "email", "password", "role"}
        assert fields["password"].startswith("Password must be at least 16 characters")

    def test_conflicts_reported_together(self, client):
        register(client)

        response = client.post(
            f"{API}/users",
            json={
                "username": "ADA_LOVELACE",
                "email": "Ada@Example.com",
                "password": STRONG_PASSWORD,
                "reEnteredPassword": OTHER_STRONG_PASSWORD,
            },
        )

        assert response.status_code == 400
        assert _fields(response) == {
            "username": "Username taken",
            "email": "Email address taken",
            "reEnteredPassword": "Passwords must match",
        }

    def test_response_carries_trace_id(self, client):
        response = client.post(f"{API}/users", json={}, headers={"X-Trace-Id": "trace-123"})

        assert response.headers["X-Trace-Id"] == "trace-123"
        assert response.json()["trace_id"] == "trace-123"


@pytest.mark.api
class TestReadUser:
    def test_owner_reads_sanitized_record(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.get(f"{API}/users/{user['id']}")

        assert response.status_code == 200
        record = response.json()["user"]
        assert record["email"] == "ada@example.com"
        assert record["account_verified"] is True
        assert not {"password", "email_pending", "totp_auth_secret"} & set(record)

    def test_requires_session(self, client):
        response = client.get(f"{API}/users/1")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_invalid_cookie(self, client):
        client.cookies.set("accessToken", "garbage")

        response = client.get(f"{API}/users/1")

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_other_users_record_is_forbidden(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.get(f"{API}/users/{user['id'] + 1}")

        assert response.status_code == 403
        assert response.json()["detail"] == "Unauthorized"

    def test_out_of_range_id_is_a_validation_error(self, client, email_service):
        signed_in_user(client, email_service)

        response = client.get(f"{API}/users/{10**20}")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "path.user_id"


@pytest.mark.api
class TestUpdateUser:
    def test_username_update(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.patch(
            f"{API}/users", json={"id": user["id"], "username": "countess"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User updated successfully"
        assert body["successfulUpdates"] == ["Username updated successfully"]
        assert body["user"]["username"] == "countess"

    def test_no_changes(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.patch(
            f"{API}/users", json={"id": user["id"], "username": "ada_lovelace"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "No changes detected"

    def test_other_user_id_forbidden(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.patch(
            f"{API}/users", json={"id": user["id"] + 1, "username": "countess"}
        )

        assert response.status_code == 403

    def test_password_change_then_sign_in_with_new_password(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.patch(
            f"{API}/users",
            json={
                "id": user["id"],
                "password": OTHER_STRONG_PASSWORD,
                "reEnteredPassword": OTHER_STRONG_PASSWORD,
            },
        )

        assert response.status_code == 200
        client.cookies.clear()
        assert sign_in(client).status_code == 401
        assert sign_in(client, password=OTHER_STRONG_PASSWORD).status_code == 200

    def test_email_change_waits_for_confirmation(self, client, email_service):
        user = signed_in_user(client, email_service)

        response = client.patch(
            f"{API}/users", json={"id": user["id"], "email": "countess@example.com"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == (
            "User updated successfully — check email to confirm email change"
        )
        assert response.json()["user"]["email"] == "ada@example.com"

        token = last_token(email_service, "countess@example.com")
        confirmed = client.get(
            f"{API}/verifications/confirm-email-change", params={"token": token}
        )

        assert confirmed.status_code == 200
        assert client.get(f"{API}/users/{user['id']}").json()["user"]["email"] == (
            "countess@example.com"
        )
        removed_to, removed = email_service.sent[-1]
        assert removed_to == "ada@example.com"
        assert removed.subject == "Your email address was removed from Latchkey"

    def test_pending_email_blocks_registration(self, client, email_service):
        user = signed_in_user(client, email_service)
        client.patch(
            f"{API}/users", json={"id": user["id"], "email": "countess@example.com"}
        )

        response = client.post(
            f"{API}/users",
            json={
                "username": "countess",
                "email": "countess@example.com",
                "password": STRONG_PASSWORD,
                "reEnteredPassword": STRONG_PASSWORD,
            },
        )

        assert response.status_code == 400
        assert _fields(response) == {"email": "Email address taken"}


@pytest.mark.api
class TestDeleteAccount:
    def test_deletion_flow(self, client, email_service):
        user = signed_in_user(client, email_service)
        requested = client.post(
            f"{API}/verifications/request-account-deletion", json={"id": user["id"]}
        )
        assert requested.status_code == 200

        token = last_token(email_service)
        response = client.delete(f"{API}/users", params={"token": token})

        assert response.status_code == 200
        assert response.json() == {"message": "Account deleted successfully"}
        client.cookies.clear()
        assert sign_in(client).status_code == 401

    def test_token_is_single_use(self, client, email_service):
        user = signed_in_user(client, email_service)
        client.post(
            f"{API}/verifications/request-account-deletion", json={"id": user["id"]}
        )
        token = last_token(email_service)
        client.delete(f"{API}/users", params={"token": token})

        response = client.delete(f"{API}/users", params={"token": token})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"

    def test_token_of_another_purpose_is_rejected(self, client, email_service):
        register(client)
        verification_token = last_token(email_service)

        response = client.delete(f"{API}/users", params={"token": verification_token})

        assert response.status_code == 400

    def test_missing_token(self, client):
        response = client.delete(f"{API}/users")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"
