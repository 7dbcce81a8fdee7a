"""Immutable state snapshots emitted by :class:`WindowedListStore`."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from snaplist.window.errors import FetchError

T = TypeVar("T")


class LoadingDirection(StrEnum):
    INITIAL = "initial"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class WindowSnapshot(Generic[T]):
    """The loaded window, the pivot, and the edge currently being extended."""

    items: tuple[T, ...]
    selected_item: T
    loading_direction: LoadingDirection | None = None

    def replace(self, **changes: Any) -> WindowSnapshot[T]:
        return dataclasses.replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True, slots=True)
class ListState(Generic[T]):
    snapshot: WindowSnapshot[T]

    @property
    def items(self) -> tuple[T, ...]:
        return self.snapshot.items

    @property
    def selected_item(self) -> T:
        return self.snapshot.selected_item

    @property
    def loading_direction(self) -> LoadingDirection | None:
        return self.snapshot.loading_direction


@dataclass(frozen=True, slots=True)
class InitialState(ListState[T]):
    """Nothing fetched yet; the window is empty."""


@dataclass(frozen=True, slots=True)
class LoadingState(ListState[T]):
    """A fetch toward ``loading_direction`` is in flight."""


@dataclass(frozen=True, slots=True)
class LoadedState(ListState[T]):
    """A selection or fetch resolved.

    ``prepended_count`` items were inserted at the left edge and
    ``evicted_leading`` items dropped from it in this transition; the
    difference is how many slots the viewport must shift to stay put.
    """

    prepended_count: int = 0
    evicted_leading: int = 0
    evicted_trailing: int = 0

    @property
    def scroll_shift(self) -> int:
        return self.prepended_count - self.evicted_leading


@dataclass(frozen=True, slots=True)
class ErrorState(ListState[T]):
    error: FetchError


@dataclass(frozen=True, slots=True)
class NoMoreItemsState(ListState[T]):
    direction: LoadingDirection
