"""Centralized logging helpers.

Provides a single place to configure the root logger, build structured
``extra`` payloads for DEBUG traces, and scrub URLs before they are logged.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_HANDLER_NAME = "scala-runner"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the stderr handler once and apply the requested level.

    The level comes from ``level`` when given, else from the
    ``SCALA_RUNNER_LOG_LEVEL`` environment variable, else WARNING.
    """
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.DEFAULT_LOG_LEVEL).upper()
    root.setLevel(getattr(logging, name, logging.WARNING))


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra`` dict for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def safe_url(url: str) -> str:
    """Strip credentials and query string from a URL before logging it."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


def quote_args(args: Iterable[str]) -> List[str]:
    """Render arguments for display: quote those with spaces, drop empty ones."""
    rendered = []
    for arg in args:
        if arg == "":
            continue
        if " " in arg:
            rendered.append(f"'{arg}'")
        else:
            rendered.append(arg)
    return rendered


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

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
