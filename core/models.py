from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core import config
from core.exceptions import ValidationRejected


class Priority:
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    ALL = (HIGH, MEDIUM, LOW)
    DEFAULT = LOW


class StatusFilter:
    ALL = "All"
    COMPLETED = "Completed"
    PENDING = "Pending"
    CHOICES = (ALL, COMPLETED, PENDING)


ANY_PRIORITY = "All"


def parse_timestamp(raw: Any) -> Optional[dt.datetime]:
    """ISO-8601 (``Z`` suffix allowed) -> aware datetime. Naive values are UTC."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, dt.datetime):
        value = raw
    else:
        text = str(raw).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = dt.datetime.fromisoformat(text)
        except ValueError as e:
            raise ValidationRejected(f"Invalid timestamp: {raw!r}") from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    created_at: dt.datetime
    description: str = ""
    priority: str = Priority.DEFAULT
    completed: bool = False
    completed_at: Optional[dt.datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Task":
        task_id = data.get("_id") or data.get("id")
        if not task_id:
            raise ValidationRejected("Task record without id")
        priority = data.get("priority") or Priority.DEFAULT
        if priority not in Priority.ALL:
            raise ValidationRejected(f"Unknown priority: {priority!r}")
        created_at = parse_timestamp(data.get("createdAt"))
        if created_at is None:
            raise ValidationRejected("Task record without createdAt")
        return cls(
            id=str(task_id),
            title=data.get("title") or "",
            description=data.get("description") or "",
            priority=priority,
            completed=bool(data.get("completed", False)),
            created_at=created_at,
            completed_at=parse_timestamp(data.get("completedAt")),
        )

    @property
    def is_consistent(self) -> bool:
        # completed <=> completed_at is set
        return self.completed == (self.completed_at is not None)


@dataclass(frozen=True)
class TaskFilter:
    priority: str = ANY_PRIORITY
    status: str = StatusFilter.ALL
    from_date: Optional[dt.date] = None
    to_date: Optional[dt.date] = None

    def __post_init__(self):
        if self.priority != ANY_PRIORITY and self.priority not in Priority.ALL:
            raise ValueError(f"Unknown priority filter: {self.priority!r}")
        if self.status not in StatusFilter.CHOICES:
            raise ValueError(f"Unknown status filter: {self.status!r}")


@dataclass(frozen=True)
class Pagination:
    current_page: int = 1
    entries_per_page: int = config.DEFAULT_ENTRIES_PER_PAGE

    def __post_init__(self):
        if self.current_page < 1:
            raise ValueError("current_page starts at 1")
        if self.entries_per_page not in config.ENTRIES_PER_PAGE_OPTIONS:
            raise ValueError(f"entries_per_page must be one of {config.ENTRIES_PER_PAGE_OPTIONS}")

    def total_pages(self, filtered_count: int) -> int:
        # ceil without floats; 0 when nothing matches
        return -(-filtered_count // self.entries_per_page)

    def next_page(self, total_pages: int) -> "Pagination":
        page = max(1, min(self.current_page + 1, total_pages))
        return Pagination(page, self.entries_per_page)

    def previous_page(self) -> "Pagination":
        return Pagination(max(self.current_page - 1, 1), self.entries_per_page)

    def with_entries_per_page(self, entries_per_page: int) -> "Pagination":
        # changing the page size always goes back to the first page
        return Pagination(1, entries_per_page)
