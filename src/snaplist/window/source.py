from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import (Awaitable, Callable, Generic, Hashable, NamedTuple,
                    Sequence, TypeVar)

from snaplist.utilities.logging import get_logger
from snaplist.window.reducer import KeyFunction, identity_key

logger = get_logger(__name__)

T = TypeVar("T")


class FetchResult(NamedTuple, Generic[T]):
    """Items around a pivot, both in window order.

    ``left`` ends with the item immediately before the pivot and ``right``
    starts with the item immediately after it.
    """

    left: Sequence[T]
    right: Sequence[T]


class ItemSource(ABC, Generic[T]):
    """Asynchronous provider of the items surrounding a pivot."""

    @abstractmethod
    async def fetch(
        self,
        left_limit: int,
        right_limit: int,
        offset: T,
    ) -> tuple[Sequence[T], Sequence[T]]:
        raise NotImplementedError("")


class FunctionItemSource(ItemSource[T]):
    """Adapts a bare ``async def fetch(left_limit, right_limit, offset)``."""

    def __init__(
        self,
        fetch: Callable[[int, int, T], Awaitable[tuple[Sequence[T], Sequence[T]]]],
    ) -> None:
        self._fetch = fetch

    async def fetch(
        self,
        left_limit: int,
        right_limit: int,
        offset: T,
    ) -> tuple[Sequence[T], Sequence[T]]:
        return await self._fetch(left_limit, right_limit, offset)


class SequenceItemSource(ItemSource[T]):
    """Serves windows out of an in-memory sequence.

    Offsets that are not part of ``items`` yield two empty lists, so the store
    treats them as "nothing more to load" instead of failing.
    """

    def __init__(
        self,
        items: Sequence[T],
        *,
        key: KeyFunction[T] = identity_key,
        latency: float = 0.0,
    ) -> None:
        if latency < 0:
            raise ValueError("latency must be non-negative")
        self._items = tuple(items)
        self._key = key
        self._latency = latency
        self._positions: dict[Hashable, int] = {}
        for position, item in enumerate(self._items):
            self._positions.setdefault(key(item), position)

    def __len__(self) -> int:
        return len(self._items)

    async def fetch(
        self,
        left_limit: int,
        right_limit: int,
        offset: T,
    ) -> FetchResult[T]:
        if self._latency:
            await asyncio.sleep(self._latency)

        position = self._positions.get(self._key(offset))
        if position is None:
            logger.warning("Offset %r is not part of the source; returning no items", offset)
            return FetchResult((), ())

        left: tuple[T, ...] = ()
        right: tuple[T, ...] = ()
        if left_limit > 0:
            left = self._items[max(0, position - left_limit):position]
        if right_limit > 0:
            right = self._items[position + 1:position + 1 + right_limit]

        logger.debug(
            "Fetched around %r: %d left, %d right",
            offset,
            len(left),
            len(right),
        )
        return FetchResult(left, right)
