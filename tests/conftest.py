"""Pytest configuration and fixtures."""

import os

# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

# Settings are read at import time, so configure them before importing the app
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from subscriptions_api import models  # noqa: E402, F401
from subscriptions_api.database import Base, get_db  # noqa: E402
from subscriptions_api.main import app  # noqa: E402

TEST_EMAIL = "alice@x.com"
TEST_PASSWORD = "Secret123"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function", autouse=True)
def code_outbox():
    """Capture reset codes instead of queueing them on the broker."""
    with patch("subscriptions_api.tasks.notifications.deliver_reset_code.delay") as mock_task:
        yield mock_task


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email: str = TEST_EMAIL, password: str = TEST_PASSWORD, **extra):
    """Register a user through the API."""
    return client.post(
        "/api/v1/auth/register", json={"email": email, "password": password, **extra}
    )


def login(client, email: str = TEST_EMAIL, password: str = TEST_PASSWORD, **extra):
    """Log in through the API."""
    return client.post("/api/v1/auth/login", json={"email": email, "password": password, **extra})


def sent_code(code_outbox) -> str:
    """The most recently delivered reset code."""
    return code_outbox.call_args.args[1]


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    response = register(client, firstName="Alice", lastName="Liddell")
    assert response.status_code == 201
    user_id = response.json()["data"]["user"]["id"]

    response = login(client)
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=TEST_EMAIL)
