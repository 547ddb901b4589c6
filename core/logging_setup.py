from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from core import config

LOG_NAME = "taskdash.log"
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_PACKAGES = {"app", "controller", "core", "gui", "services", "storage", "__main__"}


def _ours(record: logging.LogRecord) -> bool:
    # requests/urllib3 chatter only reaches the terminal when it matters
    return record.name.partition(".")[0] in _PACKAGES or record.levelno >= logging.WARNING


def setup_logging(log_dir: Optional[Union[str, Path]] = None, level: Optional[str] = None) -> Path:
    """Log to stderr at ``TASKDASH_LOG_LEVEL`` and everything to ``<log_dir>/taskdash.log``."""
    log_dir = Path(log_dir or config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_NAME

    console = logging.StreamHandler()
    console.setLevel(level or config.LOG_LEVEL)
    console.addFilter(_ours)
    to_file = logging.FileHandler(log_file, encoding="utf-8")

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        handlers=[console, to_file],
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.captureWarnings(True)
    return log_file
