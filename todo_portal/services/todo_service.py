# File: todo_portal/services/todo_service.py

"""
Todo operations for an authenticated owner.

Every function takes the caller's user id as ``owner_id``. A todo that
belongs to somebody else raises the same NotFoundError as a missing one.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Optional

from todo_portal.core.config import settings
from todo_portal.core.errors import NotFoundError, UnauthenticatedError
from todo_portal.db.session import Database
from todo_portal.models.todo import Todo, TodoPriority, TodoStatus
from todo_portal.services.pagination import Page, paginate

logger = logging.getLogger(__name__)


def list_todos(
    db: Database,
    *,
    owner_id: str,
    status: Optional[TodoStatus] = None,
    priority: Optional[TodoPriority] = None,
    page: int = 1,
    limit: int = settings.default_page_size,
) -> Page[Todo]:
    todos = db.todos.find_by_owner(owner_id, status=status, priority=priority)
    return paginate(todos, page=page, limit=limit)


def get_todo(db: Database, *, owner_id: str, todo_id: str) -> Todo:
    todo = db.todos.find_by_id(todo_id)
    if todo is None or todo.user_id != owner_id:
        raise NotFoundError()
    return todo


def create_todo(
    db: Database,
    *,
    owner_id: str,
    title: str,
    description: Optional[str] = None,
    status: Optional[TodoStatus] = None,
    priority: Optional[TodoPriority] = None,
    due_date: Optional[datetime] = None,
) -> Todo:
    todo = Todo(
        id=str(uuid.uuid4()),
        user_id=owner_id,
        title=title,
        description=description or "",
        status=status or TodoStatus.PENDING,
        priority=priority or TodoPriority.MEDIUM,
        due_date=due_date,
    )

    # the owner must not disappear between the check and the insert
    with db.account_lock:
        if db.users.find_by_id(owner_id) is None:
            raise UnauthenticatedError("User not found")
        todo = db.todos.create(todo)

    logger.info("[TODOS] User %s created todo %s", owner_id, todo.id)
    return todo


def update_todo(db: Database, *, owner_id: str, todo_id: str, **fields: Any) -> Todo:
    """
    Apply the given fields to one of the owner's todos.

    An explicit None clears ``description`` and ``due_date`` and is ignored
    for the required fields.
    """
    get_todo(db, owner_id=owner_id, todo_id=todo_id)

    fields = {key: value for key, value in fields.items() if value is not None or key in ("description", "due_date")}
    if "description" in fields and fields["description"] is None:
        fields["description"] = ""

    updated = db.todos.update(todo_id, **fields)
    if updated is None:
        # deleted by a concurrent request
        raise NotFoundError()
    return updated


def delete_todo(db: Database, *, owner_id: str, todo_id: str) -> None:
    get_todo(db, owner_id=owner_id, todo_id=todo_id)

    if not db.todos.delete(todo_id):
        raise NotFoundError()
    logger.info("[TODOS] User %s deleted todo %s", owner_id, todo_id)
