# File: todo_portal/core/security.py

"""
Security helpers for the Todo API.

Two pieces live here:
  - CredentialStore: bcrypt password hashing (passlib)
  - TokenService: signed, time-bounded bearer tokens (python-jose JWT)
    plus the process-wide revoked-token set used by logout
"""

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from todo_portal.core.config import settings
from todo_portal.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

class CredentialStore:
    """
    Salted, slow one-way hashing of user passwords.

    A failed verification is always just ``False``: callers cannot tell a
    wrong password from an unusable stored digest.
    """

    def __init__(self, rounds: int = settings.bcrypt_rounds):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

class InvalidTokenError(UnauthenticatedError):
    default_message = "Invalid token"


class ExpiredTokenError(UnauthenticatedError):
    default_message = "Token has expired"


class RevokedTokenSet:
    """
    Exact token strings invalidated by logout.

    Entries are never removed automatically, so the set grows with every
    logout for the life of the process. ``prune`` can drop tokens that have
    expired anyway; nothing calls it on a schedule.
    """

    def __init__(self):
        self._tokens: set[str] = set()
        self._lock = threading.Lock()

    def add(self, token: str) -> None:
        with self._lock:
            self._tokens.add(token)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def prune(self, is_expired: Callable[[str], bool]) -> int:
        with self._lock:
            stale = {t for t in self._tokens if is_expired(t)}
            self._tokens -= stale
        return len(stale)


class TokenService:
    """
    Issue, resolve and revoke bearer tokens.

    ``resolve`` only checks the signature and the embedded expiry; the revoked
    set is consulted separately through ``is_revoked`` (the session guard does
    both).
    """

    def __init__(
        self,
        secret_key: str = settings.secret_key,
        *,
        algorithm: str = settings.algorithm,
        expires_delta: Optional[timedelta] = None,
        revoked: Optional[RevokedTokenSet] = None,
        clock: Clock = utc_now,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.expires_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        self._revoked = revoked if revoked is not None else RevokedTokenSet()
        self._clock = clock

    def issue(self, user_id: str) -> str:
        issued_at = self._clock()
        expire = issued_at + self.expires_delta
        to_encode = {
            "userId": user_id,
            # unique per token, so revoking one login never hits another
            "jti": uuid.uuid4().hex,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def _decode(self, token: str) -> dict:
        try:
            # expiry is checked against our own clock below
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise InvalidTokenError()
        if not isinstance(payload.get("userId"), str) or not isinstance(payload.get("exp"), (int, float)):
            raise InvalidTokenError()
        return payload

    def resolve(self, token: str) -> str:
        """
        Return the user id embedded in ``token``.

        Raises InvalidTokenError for a bad signature or payload and
        ExpiredTokenError once the expiry has passed.
        """
        payload = self._decode(token)
        if self._clock().timestamp() >= payload["exp"]:
            raise ExpiredTokenError()
        return payload["userId"]

    def is_expired(self, token: str) -> bool:
        try:
            self.resolve(token)
        except ExpiredTokenError:
            return True
        except InvalidTokenError:
            return False
        return False

    def revoke(self, token: str) -> None:
        self._revoked.add(token)
        logger.info("[AUTH] Token revoked (%d revoked tokens held)", len(self._revoked))

    def is_revoked(self, token: str) -> bool:
        return token in self._revoked

    def prune_revoked(self) -> int:
        """Forget revoked tokens that are past their own expiry."""
        return self._revoked.prune(self.is_expired)
