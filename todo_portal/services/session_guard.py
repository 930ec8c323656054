# File: todo_portal/services/session_guard.py

"""
Turn the Authorization header of a request into an authenticated user.

Checks, in order:
  1. a "Bearer <token>" header is present
  2. the token has not been revoked by logout
  3. the token signature and expiry are valid
  4. the user the token names still exists

Any failure raises UnauthenticatedError. Nothing is cached between requests.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from todo_portal.core.errors import UnauthenticatedError
from todo_portal.core.security import TokenService
from todo_portal.db.session import Database
from todo_portal.models.user import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass
class AuthenticatedSession:
    user: User
    # kept so logout can revoke exactly the credential that was presented
    token: str


class SessionGuard:
    def __init__(self, db: Database, tokens: TokenService):
        self._db = db
        self._tokens = tokens

    def authenticate(self, authorization: Optional[str]) -> AuthenticatedSession:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise UnauthenticatedError("Authentication required or invalid token")

        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise UnauthenticatedError("Authentication required or invalid token")

        if self._tokens.is_revoked(token):
            logger.debug("[AUTH] Rejected revoked token")
            raise UnauthenticatedError("Token has been invalidated. Please login again.")

        # InvalidTokenError / ExpiredTokenError are UnauthenticatedError subclasses
        user_id = self._tokens.resolve(token)

        user = self._db.users.find_by_id(user_id)
        if user is None:
            logger.debug("[AUTH] Token refers to missing user %s", user_id)
            raise UnauthenticatedError("User not found")

        return AuthenticatedSession(user=user, token=token)
