# File: todo_portal/api/v1/routes_todos.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from todo_portal.api.deps import get_current_session, get_db
from todo_portal.core.config import settings
from todo_portal.db.session import Database
from todo_portal.models.todo import TodoPriority, TodoStatus
from todo_portal.schemas.todo import (
    PaginationRead,
    TodoCreate,
    TodoListResponse,
    TodoRead,
    TodoResponse,
    TodoUpdate,
)
from todo_portal.schemas.user import MessageResponse
from todo_portal.services import todo_service
from todo_portal.services.session_guard import AuthenticatedSession

# All todo routes require authentication
router = APIRouter(dependencies=[Depends(get_current_session)])


@router.get("", response_model=TodoListResponse, summary="List the caller's todos")
def list_todos(
    status_filter: Optional[TodoStatus] = Query(default=None, alias="status"),
    priority: Optional[TodoPriority] = Query(default=None),
    page: int = Query(default=1),
    limit: int = Query(default=settings.default_page_size),
    session: AuthenticatedSession = Depends(get_current_session),
    db: Database = Depends(get_db),
):
    """
    Todos in creation order, optionally filtered by status and priority.

    ``limit`` is capped at 100; a page past the end is empty.
    """
    result = todo_service.list_todos(
        db,
        owner_id=session.user.id,
        status=status_filter,
        priority=priority,
        page=page,
        limit=limit,
    )
    return TodoListResponse(
        todos=[TodoRead.model_validate(todo) for todo in result.items],
        pagination=PaginationRead.model_validate(result),
    )


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a todo",
)
def create_todo(
    payload: TodoCreate,
    session: AuthenticatedSession = Depends(get_current_session),
    db: Database = Depends(get_db),
):
    todo = todo_service.create_todo(db, owner_id=session.user.id, **payload.model_dump())
    return TodoResponse(message="Todo created successfully", todo=TodoRead.model_validate(todo))


@router.get("/{todo_id}", response_model=TodoRead, summary="Get one todo")
def get_todo(
    todo_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    db: Database = Depends(get_db),
):
    todo = todo_service.get_todo(db, owner_id=session.user.id, todo_id=todo_id)
    return TodoRead.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoResponse, summary="Update a todo")
def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    session: AuthenticatedSession = Depends(get_current_session),
    db: Database = Depends(get_db),
):
    todo = todo_service.update_todo(
        db,
        owner_id=session.user.id,
        todo_id=todo_id,
        **payload.model_dump(exclude_unset=True),
    )
    return TodoResponse(message="Todo updated successfully", todo=TodoRead.model_validate(todo))


@router.delete("/{todo_id}", response_model=MessageResponse, summary="Delete a todo")
def delete_todo(
    todo_id: str,
    session: AuthenticatedSession = Depends(get_current_session),
    db: Database = Depends(get_db),
):
    todo_service.delete_todo(db, owner_id=session.user.id, todo_id=todo_id)
    return MessageResponse(message="Todo deleted successfully")
