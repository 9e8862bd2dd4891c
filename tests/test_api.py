"""Application-level behavior: health, error envelopes."""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from subscriptions_api.database import get_db
from subscriptions_api.main import app


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_unknown_route_uses_envelope(client):
    """Unknown routes answer 404 in the failure envelope."""
    response = client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["message"]


def test_malformed_body_is_bad_request(client):
    """Schema validation failures are reported as 400 with field errors."""
    response = client.post("/api/v1/auth/register", json={"email": "alice@x.com"})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Invalid data"
    assert any(error.startswith("password") for error in data["errors"])


def test_unexpected_error_hides_detail(db):
    """Unhandled failures become a generic 500 without internal detail."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            with patch(
                "subscriptions_api.services.auth.get_user_by_email",
                side_effect=OperationalError("SELECT 1", {}, Exception("connection refused")),
            ):
                response = client.post(
                    "/api/v1/auth/login", json={"email": "alice@x.com", "password": "Secret123"}
                )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}
    assert "connection refused" not in response.text
