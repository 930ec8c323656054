# File: tests/test_session_guard.py

import pytest

from todo_portal.core.errors import UnauthenticatedError
from todo_portal.core.security import TokenService
from todo_portal.models.user import User
from todo_portal.services.session_guard import SessionGuard

from conftest import TEST_SECRET


@pytest.fixture
def alice(db):
    return db.users.create(User(id="alice-id", name="Alice", email="alice@example.com", password_hash="x"))


def reject_message(guard, header):
    with pytest.raises(UnauthenticatedError) as exc_info:
        guard.authenticate(header)
    return exc_info.value.message


def test_valid_token_yields_user_and_raw_token(db, tokens, alice):
    token = tokens.issue(alice.id)
    session = SessionGuard(db, tokens).authenticate(f"Bearer {token}")

    assert session.user.id == alice.id
    assert session.token == token


@pytest.mark.parametrize("header", [None, "", "Basic abc", "bearer abc", "Bearer ", "Token abc"])
def test_missing_or_malformed_header(db, tokens, header):
    message = reject_message(SessionGuard(db, tokens), header)
    assert message == "Authentication required or invalid token"


def test_revoked_token_is_rejected_even_though_it_resolves(db, tokens, alice):
    token = tokens.issue(alice.id)
    tokens.revoke(token)

    assert tokens.resolve(token) == alice.id
    message = reject_message(SessionGuard(db, tokens), f"Bearer {token}")
    assert message == "Token has been invalidated. Please login again."


def test_expired_token(db, clock, alice):
    tokens = TokenService(TEST_SECRET, clock=clock)
    token = tokens.issue(alice.id)
    clock.advance(hours=25)

    assert reject_message(SessionGuard(db, tokens), f"Bearer {token}") == "Token has expired"


def test_invalid_token(db, tokens):
    assert reject_message(SessionGuard(db, tokens), "Bearer not.a.jwt") == "Invalid token"


def test_token_for_deleted_user(db, tokens, alice):
    token = tokens.issue(alice.id)
    db.users.delete(alice.id)

    assert reject_message(SessionGuard(db, tokens), f"Bearer {token}") == "User not found"


def test_revocation_checked_before_expiry(db, clock, alice):
    tokens = TokenService(TEST_SECRET, clock=clock)
    token = tokens.issue(alice.id)
    tokens.revoke(token)
    clock.advance(days=3)

    message = reject_message(SessionGuard(db, tokens), f"Bearer {token}")
    assert message == "Token has been invalidated. Please login again."
