# File: tests/conftest.py

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from todo_portal.api.deps import get_credential_store, get_db, get_token_service
from todo_portal.core.security import CredentialStore, TokenService
from todo_portal.db.session import Database
from todo_portal.main import app
from todo_portal.services.auth_service import AccountService

TEST_SECRET = "test-secret"


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def db() -> Database:
    return Database()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def credentials() -> CredentialStore:
    # lowest bcrypt cost keeps the suite fast
    return CredentialStore(rounds=4)


@pytest.fixture
def accounts(db, tokens, credentials) -> AccountService:
    return AccountService(db, tokens, credentials)


@pytest.fixture
def client(db, tokens, credentials):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_token_service] = lambda: tokens
    app.dependency_overrides[get_credential_store] = lambda: credentials
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, email="alice@example.com", password="password123", name="Alice", **extra):
    resp = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name, **extra},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
