"""Centralized logging helpers.

Console output goes to stderr with a compact format; DEBUG traces carry a
structured ``extra`` payload built by :func:`extra_context` so they can be
filtered or shipped to a file handler without changing call sites.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "depbuild-console"
_FILE_HANDLER_PREFIX = "depbuild-file"


def _level_from_env() -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").strip().upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_file: Optional[str] = None, quiet: bool = False) -> None:
    """Configure the root logger once per process.

    The level comes from ``DEPBUILD_LOG_LEVEL`` (default INFO). ``quiet``
    raises it to ERROR so only failures reach the console.
    """
    root = logging.getLogger()
    level = logging.ERROR if quiet else _level_from_env()

    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    if log_file:
        file_handler_name = f"{_FILE_HANDLER_PREFIX}:{os.path.abspath(log_file)}"
        if not any(getattr(h, "name", None) == file_handler_name for h in root.handlers):
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.set_name(file_handler_name)
            file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
            root.addHandler(file_handler)

    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    None values are dropped so records stay compact.
    """
    return {k: v for k, v in fields.items() if v is not None}


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
