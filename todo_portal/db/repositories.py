# File: todo_portal/db/repositories.py

"""
In-memory repositories for users and todos.

Each repository owns its collection and a lock; every read and write goes
through the methods below. Records handed out are copies, so callers must go
through ``update`` to change anything.

Repositories do not check ownership. Services pass the caller's user id and
treat a todo owned by someone else exactly like a missing one.
"""

import copy
import dataclasses
import threading
from typing import Dict, List, Optional

from todo_portal.core.errors import ConflictError
from todo_portal.core.security import Clock, utc_now
from todo_portal.models.todo import Todo, TodoPriority, TodoStatus
from todo_portal.models.user import User


class UserRepository:
    UPDATABLE_FIELDS = frozenset({"name", "email", "password_hash", "phone", "address"})

    def __init__(self, clock: Clock = utc_now):
        self._users: Dict[str, User] = {}
        self._ids_by_email: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def find_by_email(self, email: str) -> Optional[User]:
        # Exact, case-sensitive match on the stored value.
        with self._lock:
            user_id = self._ids_by_email.get(email)
            return copy.deepcopy(self._users[user_id]) if user_id else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return copy.deepcopy(user) if user else None

    def create(self, user: User) -> User:
        with self._lock:
            if user.email in self._ids_by_email:
                raise ConflictError("User with this email already exists")
            stored = copy.deepcopy(user)
            self._users[stored.id] = stored
            self._ids_by_email[stored.email] = stored.id
            return copy.deepcopy(stored)

    def update(self, user_id: str, **fields) -> Optional[User]:
        """
        Merge ``fields`` into the stored user and bump ``updated_at``.

        Only the given fields change. Returns None for an unknown id and
        raises ConflictError if the new email belongs to another user.
        """
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")

        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None

            new_email = fields.get("email", current.email)
            owner_id = self._ids_by_email.get(new_email)
            if owner_id is not None and owner_id != user_id:
                raise ConflictError("Email is already in use")

            updated = dataclasses.replace(current, **copy.deepcopy(fields), updated_at=self._clock())
            self._users[user_id] = updated
            if new_email != current.email:
                del self._ids_by_email[current.email]
                self._ids_by_email[new_email] = user_id
            return copy.deepcopy(updated)

    def delete(self, user_id: str) -> bool:
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                return False
            del self._ids_by_email[user.email]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class TodoRepository:
    UPDATABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date"})

    def __init__(self, clock: Clock = utc_now):
        # dicts keep insertion order, which is the listing order
        self._todos: Dict[str, Todo] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def find_by_owner(
        self,
        user_id: str,
        *,
        status: Optional[TodoStatus] = None,
        priority: Optional[TodoPriority] = None,
    ) -> List[Todo]:
        """Todos owned by ``user_id`` in creation order, filters AND-combined."""
        with self._lock:
            return [
                copy.deepcopy(todo)
                for todo in self._todos.values()
                if todo.user_id == user_id
                and (status is None or todo.status == status)
                and (priority is None or todo.priority == priority)
            ]

    def find_by_id(self, todo_id: str) -> Optional[Todo]:
        with self._lock:
            todo = self._todos.get(todo_id)
            return copy.deepcopy(todo) if todo else None

    def create(self, todo: Todo) -> Todo:
        with self._lock:
            stored = copy.deepcopy(todo)
            self._todos[stored.id] = stored
            return copy.deepcopy(stored)

    def update(self, todo_id: str, **fields) -> Optional[Todo]:
        unknown = set(fields) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update todo fields: {sorted(unknown)}")

        with self._lock:
            current = self._todos.get(todo_id)
            if current is None:
                return None
            updated = dataclasses.replace(current, **fields, updated_at=self._clock())
            self._todos[todo_id] = updated
            return copy.deepcopy(updated)

    def delete(self, todo_id: str) -> bool:
        with self._lock:
            return self._todos.pop(todo_id, None) is not None

    def delete_all_by_owner(self, user_id: str) -> int:
        with self._lock:
            doomed = [todo_id for todo_id, todo in self._todos.items() if todo.user_id == user_id]
            for todo_id in doomed:
                del self._todos[todo_id]
            return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)
