"""Filter -> paginate pipeline over the local task mirror.

Everything here is pure: the view is recomputed from the mirror on each change.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from core.models import ANY_PRIORITY, Pagination, StatusFilter, Task, TaskFilter

ONE_DAY = dt.timedelta(days=1)


@dataclass(frozen=True)
class TaskPage:
    rows: List[Task]
    current_page: int
    total_pages: int
    filtered_count: int
    entries_per_page: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def label(self) -> str:
        return f"Page {self.current_page} of {self.total_pages}"


def _day_start(day: dt.date) -> dt.datetime:
    # date-only values are taken at UTC midnight
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)


def matches(task: Task, filters: TaskFilter) -> bool:
    if filters.priority != ANY_PRIORITY and task.priority != filters.priority:
        return False
    if filters.status == StatusFilter.COMPLETED and not task.completed:
        return False
    if filters.status == StatusFilter.PENDING and task.completed:
        return False
    if filters.from_date and task.created_at < _day_start(filters.from_date):
        return False
    if filters.to_date and task.created_at >= _day_start(filters.to_date) + ONE_DAY:
        return False
    return True


def filter_tasks(tasks: Iterable[Task], filters: TaskFilter) -> List[Task]:
    """Keeps mirror order; no sorting."""
    return [t for t in tasks if matches(t, filters)]


def paginate(items: Sequence[Task], pagination: Pagination) -> TaskPage:
    size = pagination.entries_per_page
    total = pagination.total_pages(len(items))
    page = min(pagination.current_page, max(total, 1))
    start = (page - 1) * size
    return TaskPage(
        rows=list(items[start:start + size]),
        current_page=page,
        total_pages=total,
        filtered_count=len(items),
        entries_per_page=size,
    )


def derive_view(tasks: Iterable[Task], filters: TaskFilter, pagination: Pagination) -> TaskPage:
    return paginate(filter_tasks(tasks, filters), pagination)


def parse_filter_date(text: str) -> Optional[dt.date]:
    """``YYYY-MM-DD`` from a filter box; blank means no bound. Raises ValueError otherwise."""
    text = (text or "").strip()
    return dt.date.fromisoformat(text) if text else None
