from __future__ import annotations

import logging
import os
from pathlib import Path


def default_store_path() -> Path:
    """
    Default per-user task file:
      ~/.tasktrack/tasks.json

    Override with TASKTRACK_FILE env var or --file CLI option.
    """
    env = os.getenv("TASKTRACK_FILE")
    if env:
        return Path(env).expanduser().resolve()

    return (Path.home() / ".tasktrack" / "tasks.json").resolve()


def default_log_level() -> int:
    """
    Console log level from TASKTRACK_LOG_LEVEL (e.g. DEBUG, INFO).
    Unknown names fall back to WARNING.
    """
    name = os.getenv("TASKTRACK_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING
