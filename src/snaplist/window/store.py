from __future__ import annotations

import asyncio
import itertools
from typing import Any, Generic, Hashable, TypeVar

import reactivex
from reactivex.subject import BehaviorSubject

from snaplist.utilities.logging import get_logger
from snaplist.window.errors import FetchError
from snaplist.window.events import (FetchFailed, FetchRequest, FetchSucceeded,
                                    SelectItem)
from snaplist.window.reducer import (KeyFunction, fetch_limits, identity_key,
                                     reduce)
from snaplist.window.settings import WindowSettings
from snaplist.window.source import ItemSource
from snaplist.window.state import (InitialState, ListState, LoadingDirection,
                                   LoadingState, WindowSnapshot)

logger = get_logger(__name__)

T = TypeVar("T")


class WindowedListStore(Generic[T]):
    """Owns the loaded window around a selected item and extends it on demand.

    Selecting an edge item fetches another page in that direction from the
    :class:`ItemSource`; selecting an interior item only moves the pivot.
    Every transition is published on :meth:`observable`, which replays the
    current state to new subscribers.

    When constructed inside a running event loop the initial selection of
    ``init_value`` is scheduled right away; otherwise it runs on
    ``await store.start()``.
    """

    def __init__(
        self,
        *,
        init_value: T,
        source: ItemSource[T],
        fetch_page_size: int | None = None,
        key: KeyFunction[T] = identity_key,
        settings: WindowSettings | None = None,
    ) -> None:
        if settings is None:
            settings = WindowSettings.from_environment(fetch_page_size=fetch_page_size)
        elif fetch_page_size is not None and fetch_page_size != settings.fetch_page_size:
            raise ValueError("fetch_page_size conflicts with the provided settings")

        self._init_value = init_value
        self._source = source
        self._key = key
        self._settings = settings
        self._hashable_key(init_value)
        self._subject: BehaviorSubject[ListState[T]] = BehaviorSubject(
            InitialState(WindowSnapshot(items=(), selected_item=init_value))
        )
        self._request_ids = itertools.count(1)
        self._latest_request: dict[LoadingDirection, int] = {}
        self._in_flight: dict[Hashable, FetchRequest[T]] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._started = False
        self._disposed = False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; initial selection waits for start()")
        else:
            self._loop = loop
            self._started = True
            self._spawn(init_value)

    @property
    def state(self) -> ListState[T]:
        return self._subject.value

    @property
    def settings(self) -> WindowSettings:
        return self._settings

    @property
    def init_value(self) -> T:
        return self._init_value

    @property
    def key(self) -> KeyFunction[T]:
        return self._key

    @property
    def is_loading(self) -> bool:
        return bool(self._in_flight)

    def observable(self) -> reactivex.Observable[ListState[T]]:
        return self._subject

    def index_of(self, item: T) -> int | None:
        item_key = self._key(item)
        for index, candidate in enumerate(self.state.items):
            if self._key(candidate) == item_key:
                return index
        return None

    async def start(self) -> None:
        """Run the initial selection if the constructor could not schedule it."""

        if self._started:
            await self.join()
            return
        self._started = True
        self._loop = asyncio.get_running_loop()
        await self.select_item(self._init_value)

    def dispatch(self, item: T) -> None:
        """Schedule :meth:`select_item` on the store's event loop from any thread."""

        if self._loop is None:
            raise RuntimeError("WindowedListStore has no event loop yet; await start() first")
        self._loop.call_soon_threadsafe(self._spawn, item)

    async def join(self) -> None:
        """Wait until every dispatched selection has finished."""

        while self._tasks:
            await asyncio.gather(*tuple(self._tasks))

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._subject.on_completed()

    async def select_item(self, item: T) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
            self._started = True

        item_key = self._hashable_key(item)
        next_state = reduce(self.state, SelectItem(item), self._settings, self._key)
        if next_state is None:
            return
        if isinstance(next_state, LoadingState) and item_key in self._in_flight:
            logger.debug("Fetch around %r already in flight; ignoring selection", item)
            return
        self._emit(next_state)
        if not isinstance(next_state, LoadingState):
            return

        direction = next_state.loading_direction
        assert direction is not None
        left_limit, right_limit = fetch_limits(direction, self._settings.fetch_page_size)
        request = FetchRequest(
            request_id=next(self._request_ids),
            direction=direction,
            offset=item,
            left_limit=left_limit,
            right_limit=right_limit,
        )
        self._latest_request[direction] = request.request_id
        self._in_flight[item_key] = request
        logger.debug(
            "Fetching %s around %r (left=%d, right=%d, request=%d)",
            direction,
            item,
            left_limit,
            right_limit,
            request.request_id,
        )

        event: FetchSucceeded[T] | FetchFailed[T]
        try:
            left, right = await self._source.fetch(left_limit, right_limit, item)
            event = FetchSucceeded(request, tuple(left), tuple(right))
        except Exception as exc:
            logger.warning("Fetch %d around %r failed: %s", request.request_id, item, exc)
            event = FetchFailed(request, FetchError.wrap(exc, request))
        finally:
            if self._in_flight.get(item_key) is request:
                del self._in_flight[item_key]

        self._resolve(event)

    def _resolve(self, event: FetchSucceeded[T] | FetchFailed[T]) -> None:
        request = event.request
        if self._latest_request.get(request.direction) != request.request_id:
            logger.debug(
                "Dropping stale %s response %d; request %s superseded it",
                request.direction,
                request.request_id,
                self._latest_request.get(request.direction),
            )
            return

        next_state = reduce(self.state, event, self._settings, self._key)
        if next_state is None:
            logger.debug(
                "Dropping %s response %d; %r is no longer at that edge",
                request.direction,
                request.request_id,
                request.offset,
            )
            return
        self._emit(next_state)

    def _hashable_key(self, item: T) -> Hashable:
        item_key = self._key(item)
        try:
            hash(item_key)
        except TypeError as exc:
            raise ValueError(
                f"Key {item_key!r} of item {item!r} is not hashable; "
                "pass key= to WindowedListStore to extract a hashable identity"
            ) from exc
        return item_key

    def _spawn(self, item: T) -> None:
        loop = self._loop
        assert loop is not None
        task = loop.create_task(self.select_item(item))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _emit(self, state: ListState[T]) -> None:
        if self._disposed:
            logger.debug("Store disposed; dropping %s", type(state).__name__)
            return
        logger.debug(
            "%s: %d items, selected=%r, loading=%s",
            type(state).__name__,
            len(state.items),
            state.selected_item,
            state.loading_direction,
        )
        self._subject.on_next(state)

    def __repr__(self) -> str:
        state: Any = self.state
        return (
            f"WindowedListStore(state={type(state).__name__}, "
            f"items={len(state.items)}, selected={state.selected_item!r})"
        )
