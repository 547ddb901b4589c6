"""Application settings.

Plain module constants, overridable with ``TASKDASH_*`` environment variables
(a local ``.env`` is loaded first).
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

ENV_PREFIX = "TASKDASH"

load_dotenv(override=False)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(f"{ENV_PREFIX}_{name}")
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


# ===================== API =====================
API_URL = _env("API_URL", "http://localhost:5000/api")
API_TOKEN = _env("API_TOKEN")  # bearer token issued by the login page
REQUEST_TIMEOUT = _env_float("REQUEST_TIMEOUT", 10.0)

# ===================== local state =====================
DATA_DIR = Path(_env("DATA_DIR", str(Path.home() / ".taskdash"))).expanduser()
THEME_FILE = Path(_env("THEME_FILE", str(DATA_DIR / "theme.json"))).expanduser()
LOG_DIR = Path(_env("LOG_DIR", str(DATA_DIR / "logs"))).expanduser()
LOG_LEVEL = (_env("LOG_LEVEL", "INFO") or "INFO").upper()

# ===================== UI =====================
WINDOW_GEOMETRY = _env("WINDOW_GEOMETRY", "1100x640")
TOPMOST = _env_bool("TOPMOST", False)
NOTIFY_DELAY_MS = _env_int("NOTIFY_DELAY_MS", 2000)
ENTRIES_PER_PAGE_OPTIONS: Tuple[int, ...] = (5, 10, 15)
DEFAULT_ENTRIES_PER_PAGE = 5
