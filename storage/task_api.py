from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from core import config
from core.exceptions import AuthExpired, NetworkOrServerError, ValidationRejected
from core.models import Task
from core.session import AuthSession

log = logging.getLogger(__name__)


def _server_message(r: requests.Response) -> Optional[str]:
    try:
        body = r.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return None


class TaskApiClient:
    def __init__(self, base_url: str, session: AuthSession, timeout: float = config.REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self.http = requests.Session()

    # ---------- plumbing ----------
    def _request(self, method: str, path: str, fallback: str, json: Optional[Dict[str, Any]] = None):
        # no token -> never hit the network
        token = self.session.require_token()
        url = f"{self.base_url}{path}"
        log.debug("%s %s", method, url)
        try:
            r = self.http.request(
                method,
                url,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise NetworkOrServerError(fallback) from e
        if r.status_code == 401:
            raise AuthExpired(_server_message(r) or "Session expired")
        if r.status_code in (400, 422):
            raise ValidationRejected(_server_message(r) or fallback)
        if not r.ok:
            log.warning("%s %s -> %s %s", method, url, r.status_code, r.text[:200])
            raise NetworkOrServerError(_server_message(r) or fallback)
        return r

    def _json(self, r: requests.Response, fallback: str) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise NetworkOrServerError(fallback) from e

    # ---------- tasks ----------
    def list_tasks(self) -> List[Task]:
        fallback = "Failed to load tasks"
        items = self._json(self._request("GET", "/tasks", fallback), fallback)
        if not isinstance(items, list):
            raise NetworkOrServerError(fallback)
        tasks = []
        for t in items:
            # one broken record must not hide the rest
            if not isinstance(t, dict):
                log.warning("Skipping non-object task record: %r", t)
                continue
            try:
                tasks.append(Task.from_api(t))
            except ValidationRejected as e:
                log.warning("Skipping task record %s: %s", t.get("_id") or t.get("id"), e.message)
        return tasks

    def create_task(self, *, title: str, description: str, priority: str) -> Task:
        fallback = "Action failed"
        payload = {"title": title, "description": description, "priority": priority}
        r = self._request("POST", "/tasks", fallback, json=payload)
        return Task.from_api(self._json(r, fallback))

    def set_completed(self, task_id: str, completed: bool) -> Task:
        fallback = "Failed to update task"
        r = self._request("PUT", f"/tasks/{task_id}", fallback, json={"completed": completed})
        return Task.from_api(self._json(r, fallback))

    def set_priority(self, task_id: str, priority: str) -> None:
        # the body of this response is not relied upon
        self._request("PUT", f"/tasks/{task_id}", "Failed to update priority", json={"priority": priority})

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}", "Failed to delete task")

    def clear_completed(self) -> None:
        self._request("DELETE", "/tasks/clear", "Failed to clear completed tasks")
