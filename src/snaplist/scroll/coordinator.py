from __future__ import annotations

import logging
from typing import Callable, Generic, Hashable, Protocol, TypeVar

from reactivex.abc import SchedulerBase
from reactivex.disposable import CompositeDisposable
from reactivex.subject import Subject

from snaplist.scroll.geometry import SnapGeometry
from snaplist.utilities.env import Configuration
from snaplist.utilities.logging import get_logger
from snaplist.utilities.logging_control import get_logging_controller
from snaplist.utilities.reactivex import debounce_latest
from snaplist.window.state import ErrorState, ListState, LoadedState
from snaplist.window.store import WindowedListStore

logger = get_logger(__name__)

T = TypeVar("T")

SCROLL_LOG_KEY = "snaplist.scroll"


class ScrollPort(Protocol):
    """The scrollable surface the coordinator drives."""

    def jump_to(self, offset: float) -> None: ...

    def animate_to(self, offset: float) -> None: ...


class ScrollCoordinator(Generic[T]):
    """Keeps a scroll position in step with a :class:`WindowedListStore`.

    Loaded transitions first shift the offset by the number of slots that
    appeared (or vanished) at the left edge, then centre the selected item.
    Raw scroll updates are debounced; once they settle the coordinator snaps
    to the nearest item and selects it in the store.

    Debounce timers fire on ``scheduler`` (a shared timeout scheduler by
    default), so ``port`` and ``on_item_selected`` may be called from that
    scheduler's thread.
    """

    def __init__(
        self,
        store: WindowedListStore[T],
        port: ScrollPort,
        geometry: SnapGeometry,
        *,
        snap_debounce_ms: int | None = None,
        scheduler: SchedulerBase | None = None,
        on_item_selected: Callable[[T, int], None] | None = None,
        initial_offset: float = 0.0,
    ) -> None:
        self._store = store
        self._port = port
        self._geometry = geometry
        self._on_item_selected = on_item_selected
        self._offset = initial_offset
        self._moving = False
        self._last_snapped_key: Hashable | None = None
        self._has_snapped = False
        self._scroll_updates: Subject[float] = Subject()

        debounce_ms = (
            snap_debounce_ms
            if snap_debounce_ms is not None
            else Configuration.snap_debounce_ms()
        )
        settled = debounce_latest(
            self._scroll_updates,
            window_ms=debounce_ms,
            stream_name=SCROLL_LOG_KEY,
            scheduler=scheduler,
        )
        self._subscriptions = CompositeDisposable(
            store.observable().subscribe(on_next=self._on_state),
            settled.subscribe(on_next=lambda _: self._on_scroll_settled()),
        )

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def geometry(self) -> SnapGeometry:
        return self._geometry

    @property
    def selected_item(self) -> T:
        return self._store.state.selected_item

    @property
    def selected_index(self) -> int | None:
        return self._store.index_of(self._store.state.selected_item)

    def on_scroll(self, offset: float) -> None:
        """Report a scroll position produced by the user."""

        self._offset = offset
        if self._moving or not self._store.state.items:
            return
        get_logging_controller().log(
            key=SCROLL_LOG_KEY,
            logger=logger,
            level=logging.INFO,
            msg="Scrolling at offset %.1f",
            args=(offset,),
            fallback_level=logging.DEBUG,
        )
        self._scroll_updates.on_next(offset)

    def select(self, item: T) -> None:
        index = self._store.index_of(item)
        if index is not None:
            self.snap_to(index)

    def jump_to(self, index: int) -> None:
        self._move_to_index(index, animate=False)

    def animate_to(self, index: int) -> None:
        self._move_to_index(index, animate=True)

    def step(self, delta: int) -> None:
        """Move the selection ``delta`` items, stopping at the window edges."""

        index = self.selected_index
        items = self._store.state.items
        if index is None or not items:
            return
        target = min(max(index + delta, 0), len(items) - 1)
        if target != index:
            self.snap_to(target)

    def resize(self, viewport_extent: float) -> None:
        self._geometry = self._geometry.with_viewport(viewport_extent)
        index = self.selected_index
        if index is not None:
            self.snap_to(index, animate=False, notify=False)

    def snap_to(self, index: int, *, animate: bool = True, notify: bool = True) -> None:
        items = self._store.state.items
        if not 0 <= index < len(items):
            return
        self._move(self._geometry.offset_for_index(index), animate=animate)
        if not notify:
            return

        item = items[index]
        item_key = self._store.key(item)
        retrying = isinstance(self._store.state, ErrorState)
        if self._has_snapped and item_key == self._last_snapped_key and not retrying:
            return
        self._remember_snap(item_key)
        self._store.dispatch(item)
        if self._on_item_selected is not None:
            self._on_item_selected(item, index)

    def dispose(self) -> None:
        self._subscriptions.dispose()
        self._scroll_updates.on_completed()

    def _move_to_index(self, index: int, *, animate: bool) -> None:
        items = self._store.state.items
        if not 0 <= index < len(items):
            return
        self._move(self._geometry.offset_for_index(index), animate=animate)
        self._remember_snap(self._store.key(items[index]))
        self._store.dispatch(items[index])

    def _remember_snap(self, item_key: Hashable) -> None:
        self._has_snapped = True
        self._last_snapped_key = item_key

    def _move(self, offset: float, *, animate: bool) -> None:
        self._moving = True
        try:
            if animate:
                self._port.animate_to(offset)
            else:
                self._port.jump_to(offset)
            self._offset = offset
        finally:
            self._moving = False

    def _on_scroll_settled(self) -> None:
        index = self._geometry.nearest_index(self._offset, len(self._store.state.items))
        if index is not None:
            self.snap_to(index)

    def _on_state(self, state: ListState[T]) -> None:
        if not isinstance(state, LoadedState):
            return
        if state.scroll_shift:
            shifted = self._offset + self._geometry.compensation(state.scroll_shift)
            logger.debug(
                "Compensating %d slots: offset %.1f -> %.1f",
                state.scroll_shift,
                self._offset,
                shifted,
            )
            self._move(shifted, animate=False)
        index = self._store.index_of(state.selected_item)
        if index is not None:
            self.snap_to(index, notify=False)
