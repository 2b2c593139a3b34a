"""Bounded, ordered result windows.

``PageRequest`` normalises raw ``page`` / ``size`` input (zero-based page,
size in ``(0, MAX_PAGE_SIZE]``) and ``paginate`` slices an ordered queryset
into a ``Page`` carrying the navigation metadata.  A page past the end is an
empty window with correct counts, never an error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, TypeVar

from django.db import models

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 1000


def coerce_int(raw: Any, default: int) -> int:
    """Parse a query-string value, falling back to ``default`` on junk."""
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def of(cls, page: int, size: int) -> PageRequest:
        """Build a request, clamping ``page`` and resetting an invalid ``size``."""
        if page < 0:
            page = DEFAULT_PAGE
        if size <= 0 or size > MAX_PAGE_SIZE:
            size = DEFAULT_PAGE_SIZE
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    total_elements: int = 0

    @classmethod
    def empty(cls, request: PageRequest) -> Page[T]:
        return cls(items=[], page=request.page, size=request.size, total_elements=0)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        """Return the same window with every item transformed by ``fn``."""
        return Page(
            items=[fn(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )


def paginate(queryset: models.QuerySet, request: PageRequest) -> Page:
    """Count the full result set and fetch only the requested window."""
    total = queryset.count()
    if request.offset >= total:
        items: list = []
    else:
        items = list(queryset[request.offset : request.offset + request.size])
    return Page(
        items=items,
        page=request.page,
        size=request.size,
        total_elements=total,
    )
