# File: todo_portal/schemas/todo.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from todo_portal.models.todo import TodoPriority, TodoStatus


class TodoBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: Optional[TodoStatus] = None
    priority: Optional[TodoPriority] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")

    class Config:
        populate_by_name = True


class TodoCreate(TodoBase):
    pass


class TodoUpdate(TodoBase):
    title: Optional[str] = Field(default=None, min_length=1)


class TodoRead(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    title: str
    description: str
    status: TodoStatus
    priority: TodoPriority
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class PaginationRead(BaseModel):
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    items_per_page: int = Field(alias="itemsPerPage")

    class Config:
        from_attributes = True
        populate_by_name = True


class TodoListResponse(BaseModel):
    todos: List[TodoRead]
    pagination: PaginationRead


class TodoResponse(BaseModel):
    message: str
    todo: TodoRead
