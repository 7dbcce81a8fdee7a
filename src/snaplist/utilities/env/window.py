import os

from snaplist.utilities.env.enums import ExhaustionSignal
from snaplist.utilities.env.parsing import _env_int, _env_optional_int

DEFAULT_FETCH_PAGE_SIZE = 10


class WindowConfiguration:
    @classmethod
    def fetch_page_size(cls) -> int:
        return _env_int(
            "SNAPLIST_FETCH_PAGE_SIZE",
            default=DEFAULT_FETCH_PAGE_SIZE,
            minimum=1,
        )

    @classmethod
    def max_window_size(cls) -> int | None:
        return _env_optional_int("SNAPLIST_MAX_WINDOW_SIZE", minimum=1)

    @classmethod
    def exhaustion_signal(cls) -> ExhaustionSignal:
        signal = os.environ.get("SNAPLIST_EXHAUSTION_SIGNAL", "none").strip().lower()
        try:
            return ExhaustionSignal(signal)
        except ValueError as exc:
            raise ValueError(
                "SNAPLIST_EXHAUSTION_SIGNAL must be 'none' or 'state'"
            ) from exc
