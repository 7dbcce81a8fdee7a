from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from snaplist.window.errors import FetchError
from snaplist.window.state import LoadingDirection

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FetchRequest(Generic[T]):
    request_id: int
    direction: LoadingDirection
    offset: T
    left_limit: int
    right_limit: int


@dataclass(frozen=True, slots=True)
class SelectItem(Generic[T]):
    item: T


@dataclass(frozen=True, slots=True)
class FetchSucceeded(Generic[T]):
    request: FetchRequest[T]
    left: tuple[T, ...]
    right: tuple[T, ...]


@dataclass(frozen=True, slots=True)
class FetchFailed(Generic[T]):
    request: FetchRequest[T]
    error: FetchError


ListEvent = Union[SelectItem, FetchSucceeded, FetchFailed]
