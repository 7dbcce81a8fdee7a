from __future__ import annotations

from threading import RLock
from typing import Any, TypeVar

import reactivex
from reactivex.abc import SchedulerBase
from reactivex.disposable import Disposable
from reactivex.scheduler import TimeoutScheduler

from snaplist.utilities.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
_DEBOUNCE_SCHEDULER = TimeoutScheduler()
_NO_PENDING: Any = object()


def debounce_latest(
    source: reactivex.Observable[T],
    *,
    window_ms: int,
    stream_name: str,
    scheduler: SchedulerBase | None = None,
) -> reactivex.Observable[T]:
    """Emit the latest value once ``source`` has been quiet for ``window_ms``.

    Every new value restarts the timer. Completion flushes a pending value
    immediately; errors drop it.
    """

    if window_ms <= 0:
        return source

    timer_scheduler = scheduler or _DEBOUNCE_SCHEDULER
    window_seconds = window_ms / 1000

    def _subscribe(observer: Any, _: Any = None) -> Disposable:
        lock = RLock()
        pending: Any = _NO_PENDING
        timer: Any | None = None
        generation = 0

        def _flush(expected_generation: int) -> None:
            nonlocal pending, timer
            with lock:
                if expected_generation != generation:
                    return
                value = pending
                pending = _NO_PENDING
                timer = None
            if value is _NO_PENDING:
                return
            observer.on_next(value)

        def _cancel_timer() -> None:
            nonlocal timer
            if timer is not None:
                timer.dispose()
                timer = None

        def _on_next(value: Any) -> None:
            nonlocal pending, timer, generation
            with lock:
                _cancel_timer()
                generation += 1
                pending = value
                scheduled_generation = generation
                timer = timer_scheduler.schedule_relative(
                    window_seconds,
                    lambda *_: _flush(scheduled_generation),
                )

        def _on_error(err: Exception) -> None:
            nonlocal pending, generation
            with lock:
                _cancel_timer()
                generation += 1
                pending = _NO_PENDING
            observer.on_error(err)

        def _on_completed() -> None:
            with lock:
                _cancel_timer()
                flush_generation = generation
            _flush(flush_generation)
            observer.on_completed()

        subscription = source.subscribe(_on_next, _on_error, _on_completed)

        def _dispose() -> None:
            nonlocal pending, generation
            subscription.dispose()
            with lock:
                _cancel_timer()
                generation += 1
                pending = _NO_PENDING

        logger.debug("Debouncing %s with window_ms=%d", stream_name, window_ms)
        return Disposable(_dispose)

    return reactivex.create(_subscribe)
