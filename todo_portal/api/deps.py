# File: todo_portal/api/deps.py

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from todo_portal.core.security import CredentialStore, TokenService
from todo_portal.db.session import Database, get_db
from todo_portal.services.auth_service import AccountService
from todo_portal.services.session_guard import AuthenticatedSession, SessionGuard

__all__ = [
    "get_db",
    "get_token_service",
    "get_credential_store",
    "get_account_service",
    "get_current_session",
]


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service; it owns the revoked-token set."""
    return TokenService()


@lru_cache
def get_credential_store() -> CredentialStore:
    return CredentialStore()


def get_account_service(
    db: Database = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    credentials: CredentialStore = Depends(get_credential_store),
) -> AccountService:
    return AccountService(db, tokens, credentials)


def get_current_session(
    authorization: Optional[str] = Header(default=None),
    db: Database = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedSession:
    """
    FastAPI dependency guarding every protected route.

    Usage in route functions:
        session: AuthenticatedSession = Depends(get_current_session)
    """
    return SessionGuard(db, tokens).authenticate(authorization)
