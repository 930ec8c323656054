# File: todo_portal/models/user.py

"""
User record kept by the in-memory user repository.

Plain data only: merge-updates happen in the repository and the public
(password-free) shape is ``todo_portal.schemas.user.UserRead``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from todo_portal.core.security import utc_now


@dataclass
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


@dataclass
class User:
    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)
    phone: Optional[str] = None
    address: Optional[Address] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
