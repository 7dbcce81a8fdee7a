from __future__ import annotations

from dataclasses import dataclass

from snaplist.utilities.env import Configuration, ExhaustionSignal


@dataclass(frozen=True)
class WindowSettings:
    """Resolved configuration for a :class:`WindowedListStore`."""

    fetch_page_size: int
    max_window_size: int | None = None
    signal_exhaustion: bool = False

    def __post_init__(self) -> None:
        if self.fetch_page_size <= 0:
            raise ValueError("fetch_page_size must be positive")
        minimum = 2 * self.fetch_page_size + 1
        if self.max_window_size is not None and self.max_window_size < minimum:
            raise ValueError(
                f"max_window_size must be at least {minimum} "
                f"(two pages around the selected item)"
            )

    @classmethod
    def from_environment(
        cls,
        *,
        fetch_page_size: int | None = None,
        max_window_size: int | None = None,
        signal_exhaustion: bool | None = None,
    ) -> WindowSettings:
        return cls(
            fetch_page_size=(
                fetch_page_size
                if fetch_page_size is not None
                else Configuration.fetch_page_size()
            ),
            max_window_size=(
                max_window_size
                if max_window_size is not None
                else Configuration.max_window_size()
            ),
            signal_exhaustion=(
                signal_exhaustion
                if signal_exhaustion is not None
                else Configuration.exhaustion_signal() is ExhaustionSignal.STATE
            ),
        )
