from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from core import config

log = logging.getLogger(__name__)


class Notifier:
    """Short-lived banner message that hides itself after ``delay_ms``.

    ``scheduler`` is anything with tkinter's ``after``/``after_cancel``.
    ``on_change(visible, message)`` is called whenever the banner changes.
    A new message cancels the pending hide of the previous one.
    """

    def __init__(self, scheduler, on_change: Callable[[bool, str], None], delay_ms: int = config.NOTIFY_DELAY_MS):
        self.scheduler = scheduler
        self.on_change = on_change
        self.delay_ms = delay_ms
        self.message = ""
        self.visible = False
        self._pending: Optional[Any] = None

    def show(self, message: str):
        self.cancel()
        self.message = message
        self.visible = True
        log.debug("notify: %s", message)
        self.on_change(True, message)
        self._pending = self.scheduler.after(self.delay_ms, self._hide)

    def cancel(self):
        if self._pending is not None:
            self.scheduler.after_cancel(self._pending)
            self._pending = None

    def _hide(self):
        self._pending = None
        self.visible = False
        self.on_change(False, self.message)
