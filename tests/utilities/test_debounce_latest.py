from helpers.scheduling import ManualScheduler
from reactivex.subject import Subject

from snaplist.utilities.reactivex import debounce_latest


def _subscribe(window_ms: int = 200):
    source: Subject[int] = Subject()
    scheduler = ManualScheduler()
    received: list[int] = []
    events: list[str] = []
    subscription = debounce_latest(
        source,
        window_ms=window_ms,
        stream_name="test.stream",
        scheduler=scheduler,
    ).subscribe(
        received.append,
        lambda err: events.append(f"error:{err}"),
        lambda: events.append("completed"),
    )
    return source, scheduler, received, events, subscription


def test_debounce_emits_latest_value_after_quiet_period() -> None:
    """Verify bursts collapse to their last value once the timer fires."""
    source, scheduler, received, _, _ = _subscribe()

    source.on_next(1)
    source.on_next(2)
    source.on_next(3)

    assert received == []
    assert scheduler.active == [0.2]

    scheduler.fire()

    assert received == [3]
    assert scheduler.active == []


def test_debounce_restarts_after_each_emission() -> None:
    source, scheduler, received, _, _ = _subscribe()

    source.on_next(1)
    scheduler.fire()
    source.on_next(2)
    scheduler.fire()

    assert received == [1, 2]


def test_completion_flushes_pending_value() -> None:
    """Ensure a value still waiting on the timer is delivered before completion."""
    source, scheduler, received, events, _ = _subscribe()

    source.on_next(7)
    source.on_completed()

    assert received == [7]
    assert events == ["completed"]
    assert scheduler.active == []


def test_error_drops_pending_value() -> None:
    source, scheduler, received, events, _ = _subscribe()

    source.on_next(7)
    source.on_error(RuntimeError("boom"))
    scheduler.fire()

    assert received == []
    assert events == ["error:boom"]


def test_dispose_cancels_timer() -> None:
    """Confirm disposing the subscription cancels the pending emission."""
    source, scheduler, received, _, subscription = _subscribe()

    source.on_next(1)
    subscription.dispose()
    scheduler.fire()

    assert received == []
    assert scheduler.active == []


def test_non_positive_window_passes_values_through() -> None:
    source, scheduler, received, _, _ = _subscribe(window_ms=0)

    source.on_next(1)
    source.on_next(2)

    assert received == [1, 2]
    assert scheduler.timers == []
