from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


class ThemeStore:
    """The one piece of durable client state: the light/dark preference."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> str:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return LIGHT
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable theme file %s: %s", self.path, e)
            return LIGHT
        theme = data.get("theme") if isinstance(data, dict) else None
        return theme if theme in THEMES else LIGHT

    def save(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"theme": theme}), encoding="utf-8")
        return theme

    def switch(self, current: str) -> str:
        """Flip ``current`` and try to remember it; the flip stands even if the write fails."""
        theme = DARK if current == LIGHT else LIGHT
        try:
            self.save(theme)
        except OSError as e:
            log.warning("Could not save theme to %s: %s", self.path, e)
        return theme
