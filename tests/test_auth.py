"""Login, registration, profile and password change tests."""

import uuid
from datetime import timedelta

from conftest import TEST_EMAIL, TEST_PASSWORD, login, register

from subscriptions_api.config import get_settings
from subscriptions_api.models.user import User
from subscriptions_api.services.security import TokenConfig, TokenIssuer


def test_register_user(client):
    """Test user registration."""
    response = register(client, firstName="Alice", lastName="Liddell")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == TEST_EMAIL
    assert user["firstName"] == "Alice"
    assert user["lastName"] == "Liddell"
    assert user["isVerified"] is False
    assert user["role"] == "user"
    assert user["lastLogin"] is None
    assert "password" not in user
    assert "passwordHash" not in user


def test_register_stores_hash_not_password(client, db):
    """The raw password is never persisted."""
    register(client)
    user = db.query(User).filter(User.email == TEST_EMAIL).one()
    assert user.password_hash != TEST_PASSWORD
    assert user.password_hash.startswith("$2")


def test_register_duplicate_email(client):
    """Registering the same email twice is a conflict."""
    assert register(client).status_code == 201

    response = register(client, password="Other456")
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_register_requires_password(client):
    """A blank password is rejected."""
    response = register(client, password="")
    assert response.status_code == 400


def test_register_rejects_invalid_email(client):
    """Emails must be syntactically valid."""
    response = register(client, email="not-an-email")
    assert response.status_code == 400


def test_register_keeps_email_as_submitted(client, db):
    """The stored email is the submitted string, so login with it succeeds."""
    response = register(client, email="Bob@Example.COM")
    assert response.status_code == 201
    assert response.json()["data"]["user"]["email"] == "Bob@Example.COM"
    assert db.query(User).filter(User.email == "Bob@Example.COM").count() == 1

    assert login(client, email="Bob@Example.COM").status_code == 200


def test_login(client):
    """Test user login."""
    register(client)

    response = login(client)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["tokenType"] == "bearer"
    assert data["user"]["email"] == TEST_EMAIL
    assert data["user"]["lastLogin"] is not None
    assert "passwordHash" not in data["user"]
    assert data["expiresIn"] == get_settings().jwt_expiration_minutes * 60


def test_login_remember_me_extends_lifetime(client):
    """rememberMe issues a longer-lived token."""
    register(client)

    response = login(client, rememberMe=True)
    assert response.status_code == 200
    expected = get_settings().jwt_remember_me_expiration_minutes * 60
    assert response.json()["data"]["expiresIn"] == expected


def test_login_updates_last_login(client, db):
    """A successful login records the time."""
    register(client)
    login(client)

    user = db.query(User).filter(User.email == TEST_EMAIL).one()
    db.refresh(user)
    assert user.last_login is not None


def test_login_failures_are_indistinguishable(client):
    """Wrong password and unknown email produce the same response."""
    register(client)

    wrong_password = login(client, password="WrongPass1")
    unknown_email = login(client, email="nobody@x.com", password="Whatever1")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_get_profile(client, auth_headers):
    """Test getting current user info."""
    response = client.get("/api/v1/auth/profile", headers=auth_headers)
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == auth_headers.email
    assert user["id"] == auth_headers.user_id
    assert "passwordHash" not in user


def test_profile_requires_token(client):
    """No bearer token means 401."""
    response = client.get("/api/v1/auth/profile")
    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.headers["www-authenticate"] == "Bearer"


def test_profile_rejects_non_bearer_scheme(client):
    """Only the Bearer scheme is accepted."""
    response = client.get("/api/v1/auth/profile", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401


def test_profile_rejects_invalid_token(client):
    """A token that fails verification is 403."""
    response = client.get(
        "/api/v1/auth/profile", headers={"Authorization": "Bearer not-a-real-token"}
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Invalid token"


def test_profile_rejects_token_signed_with_other_secret(client, auth_headers):
    """Tokens from another signer are invalid, not expired."""
    forged = TokenIssuer(TokenConfig(secret="some-other-secret")).issue(
        uuid.UUID(auth_headers.user_id)
    )
    response = client.get(
        "/api/v1/auth/profile", headers={"Authorization": f"Bearer {forged.token}"}
    )
    assert response.status_code == 403


def test_profile_rejects_expired_token(client, auth_headers):
    """An expired token is 401 with its own message."""
    settings = get_settings()
    expired = TokenIssuer(
        TokenConfig(secret=settings.jwt_secret, lifetime=timedelta(seconds=-10))
    ).issue(uuid.UUID(auth_headers.user_id))

    response = client.get(
        "/api/v1/auth/profile", headers={"Authorization": f"Bearer {expired.token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_profile_rejects_token_for_missing_user(client):
    """A valid token for a user that no longer exists is 401."""
    settings = get_settings()
    token = TokenIssuer(TokenConfig(secret=settings.jwt_secret)).issue(uuid.uuid4()).token

    response = client.get("/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_change_password(client, auth_headers):
    """After a change only the new password works."""
    response = client.post(
        "/api/v1/auth/change-password",
        headers=auth_headers,
        json={"currentPassword": TEST_PASSWORD, "newPassword": "NewSecret456"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert login(client, password="NewSecret456").status_code == 200
    assert login(client).status_code == 401


def test_change_password_wrong_current(client, auth_headers):
    """A wrong current password is 401 and leaves the password alone."""
    response = client.post(
        "/api/v1/auth/change-password",
        headers=auth_headers,
        json={"currentPassword": "WrongPass1", "newPassword": "NewSecret456"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Current password is incorrect"

    assert login(client).status_code == 200


def test_change_password_requires_token(client):
    """Changing a password needs authentication."""
    response = client.post(
        "/api/v1/auth/change-password",
        json={"currentPassword": TEST_PASSWORD, "newPassword": "NewSecret456"},
    )
    assert response.status_code == 401


def test_alice_walkthrough(client):
    """Register, log in, read the profile, then fail without a token."""
    assert register(client).status_code == 201

    token = login(client).json()["data"]["token"]
    profile = client.get("/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["email"] == "alice@x.com"
    assert "password" not in profile.json()["data"]["user"]

    assert client.get("/api/v1/auth/profile").status_code == 401
