from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_positive
from ..core.constants import ALL, DEFAULT_PAGE_SIZE
from ..core.enums import SortDirection
from ..core.exceptions import ValidationError

EMPLOYEE_SEARCH_FIELDS = ("name", "employee_id", "branch")


@dataclass(frozen=True)
class ProjectionQuery:
    """Search, filters, sort and page requested by a list view."""

    search: str = ""
    search_fields: tuple[str, ...] = ()
    filters: Mapping[str, Any] = field(default_factory=dict)
    sort_key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC
    page: int = 1


@dataclass(frozen=True)
class Page:
    items: tuple
    page: int
    total_pages: int
    total_items: int
    page_size: int


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def _direction(value) -> SortDirection:
    try:
        return SortDirection(value)
    except ValueError:
        raise ValidationError(f"Sort direction must be 'asc' or 'desc', got {value!r}")


class Projector:
    """Filter, stable-sort and paginate an already materialized row list."""

    def __init__(self, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._page_size = require_positive(page_size, "page_size")

    @property
    def page_size(self) -> int:
        return self._page_size

    @staticmethod
    def matches_search(row: Any, search: str, fields: Sequence[str]) -> bool:
        term = (search or "").strip().lower()
        if not term:
            return True
        for key in fields:
            value = _field(row, key)
            if isinstance(value, Enum):
                value = value.value
            if value is not None and term in str(value).lower():
                return True
        return False

    @staticmethod
    def matches_filters(row: Any, filters: Mapping[str, Any]) -> bool:
        for key, expected in filters.items():
            if expected is None or expected == ALL:
                continue
            if _field(row, key) != expected:
                return False
        return True

    def filter(self, rows: Sequence[Any], query: ProjectionQuery) -> list:
        return [
            r for r in rows
            if self.matches_search(r, query.search, query.search_fields)
            and self.matches_filters(r, query.filters)
        ]

    @staticmethod
    def sort(rows: Sequence[Any], key: Optional[str], direction=SortDirection.ASC) -> list:
        """Stable sort on one field; missing values go last in both directions."""
        direction = _direction(direction)
        if not key:
            return list(rows)

        present = [r for r in rows if _field(r, key) is not None]
        missing = [r for r in rows if _field(r, key) is None]
        # sorted(reverse=True) keeps equal rows in their original order
        present = sorted(present, key=lambda r: _field(r, key), reverse=direction == SortDirection.DESC)
        return present + missing

    def paginate(self, rows: Sequence[Any], page: int) -> Page:
        total_items = len(rows)
        total_pages = math.ceil(total_items / self._page_size)
        current = min(max(int(page), 1), max(total_pages, 1))
        start = (current - 1) * self._page_size
        return Page(
            items=tuple(rows[start : start + self._page_size]),
            page=current,
            total_pages=total_pages,
            total_items=total_items,
            page_size=self._page_size,
        )

    def project(self, rows: Sequence[Any], query: ProjectionQuery) -> Page:
        filtered = self.filter(rows, query)
        ordered = self.sort(filtered, query.sort_key, query.direction)
        return self.paginate(ordered, query.page)


def toggle_direction(current_key: Optional[str], current_direction, key: str) -> SortDirection:
    """Header-click behavior: the active key ascending flips to descending."""
    if current_key == key and _direction(current_direction) == SortDirection.ASC:
        return SortDirection.DESC
    return SortDirection.ASC


def employee_directory_query(
    search: str = "",
    *,
    role: Optional[str] = None,
    branch: Optional[str] = None,
    page: int = 1,
) -> ProjectionQuery:
    return ProjectionQuery(
        search=search,
        search_fields=EMPLOYEE_SEARCH_FIELDS,
        filters={"role": role, "branch": branch},
        page=page,
    )


def task_board_query(*, user_id: Optional[str] = None, status: Optional[str] = None, page: int = 1) -> ProjectionQuery:
    return ProjectionQuery(
        filters={"user_id": user_id, "status": status},
        sort_key="created_at",
        direction=SortDirection.DESC,
        page=page,
    )


def leave_history_query(*, user_id: Optional[str] = None, status: Optional[str] = None, page: int = 1) -> ProjectionQuery:
    return ProjectionQuery(
        filters={"user_id": user_id, "status": status},
        sort_key="created_at",
        direction=SortDirection.DESC,
        page=page,
    )


def stats_table_query(
    *,
    sort_key: str = "days_present",
    direction=SortDirection.DESC,
    search: str = "",
    page: int = 1,
) -> ProjectionQuery:
    return ProjectionQuery(
        search=search,
        search_fields=("name", "branch", "position"),
        sort_key=sort_key,
        direction=_direction(direction),
        page=page,
    )
