"""Per-key sampling for log statements that fire on every scroll update.

``SNAPLIST_LOG_RULES`` holds comma separated ``key=seconds`` pairs; ``none``
turns sampling off for that key. Keys without a pair use
``SNAPLIST_LOG_DEFAULT_INTERVAL``.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from functools import cache
from typing import Callable, Sequence

LOG_RULES_ENV_VAR = "SNAPLIST_LOG_RULES"
DEFAULT_INTERVAL_ENV_VAR = "SNAPLIST_LOG_DEFAULT_INTERVAL"
DEFAULT_INTERVAL_SECONDS = 1.0


class LoggingController:
    def __init__(
        self,
        *,
        default_interval: float | None,
        intervals: dict[str, float | None] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_interval = default_interval
        self._intervals = dict(intervals or {})
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._next_emit: dict[str, float] = {}

    def interval_for(self, key: str) -> float | None:
        return self._intervals.get(key, self._default_interval)

    def log(
        self,
        *,
        key: str,
        logger: logging.Logger,
        level: int,
        msg: str,
        args: Sequence[object] = (),
        fallback_level: int | None = None,
    ) -> bool:
        """Log at ``level`` once per interval for ``key``.

        Calls inside the interval go to ``fallback_level``, or nowhere when it
        is ``None``. Returns whether ``level`` was used.
        """

        interval = self.interval_for(key)
        primary = interval is None
        if not primary:
            now = self._monotonic()
            with self._lock:
                if now >= self._next_emit.get(key, 0.0):
                    self._next_emit[key] = now + interval
                    primary = True

        if primary:
            logger.log(level, msg, *args)
        elif fallback_level is not None:
            logger.log(fallback_level, msg, *args)
        return primary


def _parse_interval(raw: str, *, source: str) -> float | None:
    value = raw.strip().lower()
    if value == "none":
        return None
    try:
        interval = float(value)
    except ValueError as exc:
        raise ValueError(f"{source} must be a number of seconds or 'none', got {raw!r}") from exc
    if interval < 0:
        raise ValueError(f"{source} must not be negative")
    return interval


def parse_intervals(raw: str) -> dict[str, float | None]:
    intervals: dict[str, float | None] = {}
    for chunk in filter(None, (part.strip() for part in raw.split(","))):
        key, separator, value = chunk.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"Invalid {LOG_RULES_ENV_VAR} entry {chunk!r}; expected 'key=seconds'")
        intervals[key.strip()] = _parse_interval(value, source=f"{LOG_RULES_ENV_VAR} {key.strip()}")
    return intervals


@cache
def get_logging_controller() -> LoggingController:
    """Return the shared logging controller instance."""

    default_raw = os.getenv(DEFAULT_INTERVAL_ENV_VAR)
    return LoggingController(
        default_interval=(
            DEFAULT_INTERVAL_SECONDS
            if default_raw is None
            else _parse_interval(default_raw, source=DEFAULT_INTERVAL_ENV_VAR)
        ),
        intervals=parse_intervals(os.getenv(LOG_RULES_ENV_VAR, "")),
    )
