from snaplist.utilities.env.parsing import _env_float, _env_int

DEFAULT_SNAP_DEBOUNCE_MS = 200
DEFAULT_ITEM_EXTENT = 60.0
DEFAULT_ITEM_SPACING = 12.0


class ScrollConfiguration:
    @classmethod
    def snap_debounce_ms(cls) -> int:
        return _env_int(
            "SNAPLIST_SNAP_DEBOUNCE_MS",
            default=DEFAULT_SNAP_DEBOUNCE_MS,
            minimum=0,
        )

    @classmethod
    def item_extent(cls) -> float:
        return _env_float(
            "SNAPLIST_ITEM_EXTENT",
            default=DEFAULT_ITEM_EXTENT,
            minimum=0.0,
        )

    @classmethod
    def item_spacing(cls) -> float:
        return _env_float(
            "SNAPLIST_ITEM_SPACING",
            default=DEFAULT_ITEM_SPACING,
            minimum=0.0,
        )
