from snaplist.window.errors import FetchError
from snaplist.window.events import (FetchFailed, FetchRequest, FetchSucceeded,
                                    ListEvent, SelectItem)
from snaplist.window.reducer import fetch_limits, identity_key, reduce
from snaplist.window.settings import WindowSettings
from snaplist.window.source import (FetchResult, FunctionItemSource,
                                    ItemSource, SequenceItemSource)
from snaplist.window.state import (ErrorState, InitialState, ListState,
                                   LoadedState, LoadingDirection, LoadingState,
                                   NoMoreItemsState, WindowSnapshot)
from snaplist.window.store import WindowedListStore

__all__ = [
    "ErrorState",
    "FetchError",
    "FetchFailed",
    "FetchRequest",
    "FetchResult",
    "FetchSucceeded",
    "FunctionItemSource",
    "InitialState",
    "ItemSource",
    "ListEvent",
    "ListState",
    "LoadedState",
    "LoadingDirection",
    "LoadingState",
    "NoMoreItemsState",
    "SelectItem",
    "SequenceItemSource",
    "WindowSettings",
    "WindowSnapshot",
    "WindowedListStore",
    "fetch_limits",
    "identity_key",
    "reduce",
]
