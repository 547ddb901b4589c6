from __future__ import annotations

import logging
from typing import Callable, List, Optional

from core import config
from core.exceptions import NotAuthenticated

log = logging.getLogger(__name__)


class AuthSession:
    """Holds the bearer token from startup until logout."""

    def __init__(self, token: Optional[str] = None):
        self.token: Optional[str] = token or None
        self._on_logout: List[Callable[[], None]] = []

    @classmethod
    def from_config(cls) -> "AuthSession":
        return cls(config.API_TOKEN)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def require_token(self) -> str:
        if not self.token:
            raise NotAuthenticated("Not logged in")
        return self.token

    def on_logout(self, callback: Callable[[], None]):
        self._on_logout.append(callback)

    def logout(self):
        if not self.token:
            return
        self.token = None
        log.info("Session terminated")
        for cb in list(self._on_logout):
            cb()
