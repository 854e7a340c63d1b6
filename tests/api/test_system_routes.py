"""API tests for non-versioned system routes and error rendering.

Validates the root and health endpoints, plus the Problem Details shape
for unknown routes, wrong methods and malformed bodies.
"""

from fastapi.testclient import TestClient

from latchkey.core.config import settings
from latchkey.main import app


client = TestClient(app)


def test_root_endpoint_returns_status_and_version() -> None:
    """Root endpoint should return operational status and app version."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()

    assert data["message"] == settings.app_name
    assert data["status"] == "operational"
    assert data["version"] == settings.app_version


def test_health_endpoint_returns_healthy_status() -> None:
    """Health endpoint should return a healthy status indicator."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_unknown_route_is_problem_details() -> None:
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    data = response.json()
    assert data["status"] == 404
    assert data["title"] == "Resource Not Found"
    assert data["type"] == f"{settings.api_base_url}/errors/not_found"
    assert data["instance"] == "/api/v1/nothing-here"
    assert data["trace_id"] == response.headers["X-Trace-Id"]


def test_wrong_method_keeps_allow_header() -> None:
    response = client.put("/health")

    assert response.status_code == 405
    assert "GET" in response.headers["allow"]


def test_malformed_json_body_is_validation_failure() -> None:
    """Unparseable bodies produce the same 400 shape as field errors."""
    response = client.post(
        "/api/v1/sessions",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"
