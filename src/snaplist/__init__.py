"""Windowed, bidirectionally loaded item lists for snap-scrolling carousels."""

from snaplist.scroll import ScrollCoordinator, ScrollPort, SnapGeometry
from snaplist.window import (ErrorState, FetchError, FetchResult,
                             FunctionItemSource, InitialState, ItemSource,
                             ListState, LoadedState, LoadingDirection,
                             LoadingState, NoMoreItemsState,
                             SequenceItemSource, WindowedListStore,
                             WindowSettings, WindowSnapshot)

__all__ = [
    "ErrorState",
    "FetchError",
    "FetchResult",
    "FunctionItemSource",
    "InitialState",
    "ItemSource",
    "ListState",
    "LoadedState",
    "LoadingDirection",
    "LoadingState",
    "NoMoreItemsState",
    "ScrollCoordinator",
    "ScrollPort",
    "SequenceItemSource",
    "SnapGeometry",
    "WindowSettings",
    "WindowSnapshot",
    "WindowedListStore",
]
