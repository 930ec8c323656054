# File: todo_portal/services/auth_service.py

"""
Account lifecycle: registration, login, logout, profile changes and
account deletion.

Password checks never say which half of a login was wrong, and account
deletion removes the user's todos before the user, under the database's
account lock.
"""

import logging
import uuid
from typing import Any, Dict, Optional, Tuple

from todo_portal.core.config import settings
from todo_portal.core.errors import InvalidError, UnauthenticatedError, UnauthorizedError
from todo_portal.core.security import CredentialStore, TokenService
from todo_portal.db.session import Database
from todo_portal.models.user import Address, User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

# marks a profile field that was not sent at all
UNSET: Any = object()


class AccountService:
    def __init__(
        self,
        db: Database,
        tokens: TokenService,
        credentials: CredentialStore,
        *,
        password_min_length: int = settings.password_min_length,
    ):
        self._db = db
        self._tokens = tokens
        self._credentials = credentials
        self._password_min_length = password_min_length
        self._dummy_hash: Optional[str] = None

    def _check_password_length(self, password: str, label: str = "Password") -> None:
        if len(password) < self._password_min_length:
            raise InvalidError(f"{label} must be at least {self._password_min_length} characters long")

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        address: Optional[Address] = None,
    ) -> Tuple[User, str]:
        """Create a user and return it with a fresh token."""
        self._check_password_length(password)

        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=self._credentials.hash(password),
            phone=phone,
            address=address,
        )
        # ConflictError if the email is taken, checked under the repository lock
        user = self._db.users.create(user)
        logger.info("[AUTH] Registered user %s", user.id)
        return user, self._tokens.issue(user.id)

    def login(self, *, email: str, password: str) -> Tuple[User, str]:
        user = self._db.users.find_by_email(email)
        if user is None:
            # burn the same bcrypt time as a real check
            self._credentials.verify(password, self._get_dummy_hash())
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not self._credentials.verify(password, user.password_hash):
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        logger.info("[AUTH] User %s logged in", user.id)
        return user, self._tokens.issue(user.id)

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._credentials.hash(uuid.uuid4().hex)
        return self._dummy_hash

    def logout(self, token: str) -> None:
        self._tokens.revoke(token)

    def update_profile(
        self,
        user: User,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Any = UNSET,
        address: Any = UNSET,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> User:
        """
        Apply a profile update for ``user``.

        ``phone`` and ``address`` are left alone unless passed; passing None
        clears them. A password change needs the current password and is
        written in the same repository update as the other fields.
        """
        updates: Dict[str, Any] = {}
        if phone is not UNSET:
            updates["phone"] = phone
        if address is not UNSET:
            updates["address"] = address
        if name is not None:
            updates["name"] = name
        if email is not None:
            updates["email"] = email

        if new_password:
            if not current_password:
                raise InvalidError("Current password is required when changing password")
            if not self._credentials.verify(current_password, user.password_hash):
                raise UnauthorizedError("Current password is incorrect")
            self._check_password_length(new_password, label="New password")
            updates["password_hash"] = self._credentials.hash(new_password)

        # ConflictError if the new email belongs to someone else
        updated = self._db.users.update(user.id, **updates)
        if updated is None:
            raise UnauthenticatedError("User not found")

        logger.info("[AUTH] Updated profile of user %s (%s)", user.id, ", ".join(sorted(updates)) or "no changes")
        return updated

    def delete_account(self, user: User, *, password: Optional[str]) -> int:
        """Delete ``user`` and all of their todos. Returns the number of todos removed."""
        if not password:
            raise InvalidError("Password is required for account deletion")
        if not self._credentials.verify(password, user.password_hash):
            raise UnauthorizedError("Invalid password")

        with self._db.account_lock:
            removed = self._db.todos.delete_all_by_owner(user.id)
            self._db.users.delete(user.id)

        logger.info("[AUTH] Deleted user %s and %d todos", user.id, removed)
        return removed
