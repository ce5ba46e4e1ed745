from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep tasktrack logs, let other libraries through only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasktrack" or record.name.startswith("tasktrack."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """
    Configure a single stderr handler on the root logger.

    Call once from the entry point; calling again replaces the handler.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(stream or sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
