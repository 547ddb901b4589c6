from __future__ import annotations

import contextlib
import dataclasses
import logging
from typing import Callable, List, Optional

from core.exceptions import AuthExpired, NetworkOrServerError, ValidationRejected
from core.models import Pagination, Priority, Task, TaskFilter
from core.session import AuthSession
from core.view_model import TaskPage, derive_view
from storage.task_api import TaskApiClient

log = logging.getLogger(__name__)


class AppController:
    """Coordinates the UI with the task backend and keeps the local mirror.

    The mirror (``tasks``) only changes after the backend has accepted a call,
    so a failed action leaves it exactly as it was.
    """

    def __init__(
        self,
        client: TaskApiClient,
        session: AuthSession,
        confirm: Callable[[str], bool],
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.session = session
        self.confirm = confirm
        self.notify = notify or (lambda msg: None)
        self.tasks: List[Task] = []

    # ---- read ----
    def load(self) -> List[Task]:
        try:
            items = self.client.list_tasks()
        except AuthExpired:
            log.warning("Token rejected while loading tasks, logging out")
            self.session.logout()
            raise
        self.tasks = items
        for t in items:
            if not t.is_consistent:
                log.warning("Task %s: completed=%s but completedAt=%s", t.id, t.completed, t.completed_at)
        log.info("Loaded %d tasks", len(items))
        return self.tasks

    def view(self, filters: TaskFilter, pagination: Pagination) -> TaskPage:
        return derive_view(self.tasks, filters, pagination)

    # ---- write ----
    def create(self, title: str, description: str = "", priority: Optional[str] = None) -> Task:
        title = (title or "").strip()
        if not title:
            raise ValidationRejected("Title is required")
        priority = priority or Priority.DEFAULT
        if priority not in Priority.ALL:
            raise ValidationRejected(f"Unknown priority: {priority}")
        with self._session_errors_as("Action failed"):
            task = self.client.create_task(title=title, description=(description or "").strip(), priority=priority)
        # newest first
        self.tasks = [task] + self.tasks
        self.notify("Task added successfully ✓")
        return task

    def remove(self, task_id: str) -> bool:
        if not task_id or not self.confirm("Delete this task?"):
            return False
        with self._session_errors_as("Failed to delete task"):
            self.client.delete_task(task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.notify("Task deleted successfully")
        return True

    def set_completed(self, task: Task, completed: bool) -> Task:
        with self._session_errors_as("Failed to update task"):
            updated = self.client.set_completed(task.id, completed)
        if not updated.is_consistent:
            log.warning("Server returned task %s with completed=%s, completedAt=%s",
                        updated.id, updated.completed, updated.completed_at)
        # full replace with the server representation
        self.tasks = [updated if t.id == task.id else t for t in self.tasks]
        self.notify("Task completed successfully ✓" if updated.completed else "Task marked as pending")
        return updated

    def toggle_done(self, task: Task) -> Task:
        return self.set_completed(task, not task.completed)

    def set_priority(self, task_id: str, priority: str):
        if priority not in Priority.ALL:
            raise ValidationRejected(f"Unknown priority: {priority}")
        with self._session_errors_as("Failed to update priority"):
            self.client.set_priority(task_id, priority)
        # field-level patch: this endpoint does not echo the task back
        self.tasks = [dataclasses.replace(t, priority=priority) if t.id == task_id else t for t in self.tasks]

    def clear_completed(self) -> bool:
        if not self.confirm("Clear all completed tasks?"):
            return False
        with self._session_errors_as("Failed to clear completed tasks"):
            self.client.clear_completed()
        # the server decides which records were eligible
        self.load()
        return True

    # ---- helpers ----
    @contextlib.contextmanager
    def _session_errors_as(self, message: str):
        """Outside of load(), a rejected token is just another failed action."""
        try:
            yield
        except AuthExpired as e:
            log.warning("Token rejected: %s", e)
            raise NetworkOrServerError(message) from e
