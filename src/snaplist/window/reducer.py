"""Pure transition functions for the windowed list state machine.

Nothing in this module performs I/O or keeps state: every function maps a
:class:`ListState` and an event to the next state (or ``None`` when the event
causes no transition). :class:`WindowedListStore` owns fetch bookkeeping and
feeds the results back through :func:`reduce`.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

from snaplist.window.events import (FetchFailed, FetchRequest, FetchSucceeded,
                                    ListEvent, SelectItem)
from snaplist.window.settings import WindowSettings
from snaplist.window.state import (ErrorState, ListState, LoadedState,
                                   LoadingDirection, LoadingState,
                                   NoMoreItemsState, WindowSnapshot)

T = TypeVar("T")
KeyFunction = Callable[[T], Hashable]


def identity_key(item: T) -> Hashable:
    return item  # type: ignore[return-value]


def is_interior_selection(
    snapshot: WindowSnapshot[T],
    item: T,
    key: KeyFunction[T] = identity_key,
) -> bool:
    """Selecting ``item`` only moves the pivot: it is not at an edge and is new."""

    if snapshot.is_empty:
        return False
    item_key = key(item)
    return (
        item_key != key(snapshot.items[0])
        and item_key != key(snapshot.items[-1])
        and item_key != key(snapshot.selected_item)
    )


def resolve_direction(
    snapshot: WindowSnapshot[T],
    item: T,
    key: KeyFunction[T] = identity_key,
) -> LoadingDirection | None:
    if snapshot.is_empty:
        return LoadingDirection.INITIAL
    item_key = key(item)
    if len(snapshot.items) == 1 and item_key == key(snapshot.items[0]):
        # Seeded pivot whose initial fetch never landed.
        return LoadingDirection.INITIAL
    if item_key == key(snapshot.items[-1]):
        return LoadingDirection.RIGHT
    if item_key == key(snapshot.items[0]):
        return LoadingDirection.LEFT
    return None


def fetch_limits(direction: LoadingDirection, page_size: int) -> tuple[int, int]:
    """Return ``(left_limit, right_limit)`` for a fetch toward ``direction``."""

    if direction is LoadingDirection.INITIAL:
        return page_size, page_size
    if direction is LoadingDirection.RIGHT:
        return 0, page_size
    return page_size, 0


def _select(
    state: ListState[T],
    event: SelectItem[T],
    key: KeyFunction[T],
) -> ListState[T] | None:
    snapshot = state.snapshot
    item = event.item

    if is_interior_selection(snapshot, item, key):
        return LoadedState(
            snapshot.replace(selected_item=item, loading_direction=None)
        )

    if isinstance(state, LoadingState) and key(snapshot.selected_item) == key(item):
        return None

    direction = resolve_direction(snapshot, item, key)
    if direction is None:
        return None

    items = (item,) if direction is LoadingDirection.INITIAL else snapshot.items
    return LoadingState(
        snapshot.replace(
            items=items,
            selected_item=item,
            loading_direction=direction,
        )
    )


def _unseen(
    candidates: Iterable[T],
    seen: set[Hashable],
    key: KeyFunction[T],
) -> list[T]:
    fresh: list[T] = []
    for candidate in candidates:
        candidate_key = key(candidate)
        if candidate_key in seen:
            continue
        seen.add(candidate_key)
        fresh.append(candidate)
    return fresh


def _anchor_index(
    items: tuple[T, ...],
    request: FetchRequest[T],
    key: KeyFunction[T],
) -> int | None:
    if not items:
        return None
    anchor_key = key(request.offset)
    if request.direction is LoadingDirection.RIGHT:
        return len(items) - 1 if key(items[-1]) == anchor_key else None
    if request.direction is LoadingDirection.LEFT:
        return 0 if key(items[0]) == anchor_key else None
    for index, item in enumerate(items):
        if key(item) == anchor_key:
            return index
    return None


def _eviction_counts(
    length: int,
    protected_index: int,
    cap: int | None,
    direction: LoadingDirection,
) -> tuple[int, int]:
    """Return ``(leading, trailing)`` items to drop so ``length`` fits ``cap``."""

    if cap is None or length <= cap:
        return 0, 0
    overflow = length - cap
    max_leading = protected_index
    max_trailing = length - 1 - protected_index

    if direction is LoadingDirection.RIGHT:
        leading = min(overflow, max_leading)
        return leading, min(overflow - leading, max_trailing)
    if direction is LoadingDirection.LEFT:
        trailing = min(overflow, max_trailing)
        return min(overflow - trailing, max_leading), trailing

    leading = trailing = 0
    while overflow > 0 and (leading < max_leading or trailing < max_trailing):
        if max_leading - leading >= max_trailing - trailing:
            leading += 1
        else:
            trailing += 1
        overflow -= 1
    return leading, trailing


def _merge(
    state: ListState[T],
    event: FetchSucceeded[T],
    settings: WindowSettings,
    key: KeyFunction[T],
) -> ListState[T] | None:
    snapshot = state.snapshot
    request = event.request
    anchor_index = _anchor_index(snapshot.items, request, key)
    if anchor_index is None:
        return None

    seen = {key(item) for item in snapshot.items}
    left: list[T] = []
    right: list[T] = []
    if request.direction is not LoadingDirection.RIGHT:
        left = _unseen(event.left, seen, key)
    if request.direction is not LoadingDirection.LEFT:
        right = _unseen(event.right, seen, key)

    settled = snapshot.replace(loading_direction=None)
    if (
        settings.signal_exhaustion
        and request.direction is not LoadingDirection.INITIAL
        and not left
        and not right
    ):
        return NoMoreItemsState(settled, direction=request.direction)

    merged = (*left, *snapshot.items, *right)
    selected_key = key(snapshot.selected_item)
    protected_index = next(
        (index for index, item in enumerate(merged) if key(item) == selected_key),
        anchor_index + len(left),
    )
    leading, trailing = _eviction_counts(
        len(merged),
        protected_index,
        settings.max_window_size,
        request.direction,
    )
    merged = merged[leading:len(merged) - trailing]

    return LoadedState(
        settled.replace(items=merged),
        prepended_count=len(left),
        evicted_leading=leading,
        evicted_trailing=trailing,
    )


def reduce(
    state: ListState[T],
    event: ListEvent,
    settings: WindowSettings,
    key: KeyFunction[T] = identity_key,
) -> ListState[T] | None:
    """Return the state following ``event``, or ``None`` if nothing changes."""

    if isinstance(event, SelectItem):
        return _select(state, event, key)
    if isinstance(event, FetchSucceeded):
        return _merge(state, event, settings, key)
    if isinstance(event, FetchFailed):
        return ErrorState(
            state.snapshot.replace(loading_direction=None),
            error=event.error,
        )
    raise TypeError(f"Unsupported list event: {event!r}")
