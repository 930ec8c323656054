# File: todo_portal/services/pagination.py

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from todo_portal.core.config import settings
from todo_portal.core.errors import InvalidError

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: List[T]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


def paginate(
    items: Sequence[T],
    page: int = 1,
    limit: int = settings.default_page_size,
    max_limit: int = settings.max_page_size,
) -> Page[T]:
    """
    Slice an already filtered, ordered sequence.

    ``page`` is 1-based and ``limit`` is capped at ``max_limit``. A page past
    the end is simply empty.
    """
    if page < 1:
        raise InvalidError("page must be a positive integer")
    if limit < 1:
        raise InvalidError("limit must be a positive integer")

    limit = min(limit, max_limit)
    start = (page - 1) * limit
    total_items = len(items)

    return Page(
        items=list(items[start:start + limit]),
        current_page=page,
        total_pages=math.ceil(total_items / limit),
        total_items=total_items,
        items_per_page=limit,
    )
