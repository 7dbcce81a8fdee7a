import asyncio

from helpers.scheduling import ManualScheduler
from helpers.sources import RecordingSource, scenario_window, settle

from snaplist.scroll import ScrollCoordinator, SnapGeometry
from snaplist.window import ErrorState, LoadedState, WindowedListStore

GEOMETRY = SnapGeometry(item_extent=60, item_spacing=12, viewport_extent=360)


class RecordingPort:
    """Remembers every scroll command and optionally echoes it back as a scroll event."""

    def __init__(self) -> None:
        self.moves: list[tuple[str, float]] = []
        self.echo = None

    def jump_to(self, offset: float) -> None:
        self.moves.append(("jump", offset))
        if self.echo is not None:
            self.echo(offset)

    def animate_to(self, offset: float) -> None:
        self.moves.append(("animate", offset))
        if self.echo is not None:
            self.echo(offset)


async def _coordinated(source=None, **kwargs):
    store = WindowedListStore(
        init_value=0,
        source=source or RecordingSource(scenario_window),
        fetch_page_size=10,
    )
    port = RecordingPort()
    scheduler = ManualScheduler()
    coordinator = ScrollCoordinator(
        store,
        port,
        GEOMETRY,
        snap_debounce_ms=200,
        scheduler=scheduler,
        **kwargs,
    )
    await store.join()
    return store, port, scheduler, coordinator


async def _drain(store) -> None:
    await settle()
    await store.join()


def test_initial_load_compensates_then_centres_pivot() -> None:
    """Verify prepended items shift the offset before the pivot is animated to the centre."""

    async def scenario():
        store, port, _, coordinator = await _coordinated()
        return port.moves, coordinator

    moves, coordinator = asyncio.run(scenario())

    assert moves == [("jump", 360.0), ("animate", 360.0)]
    assert coordinator.offset == 360.0
    assert coordinator.selected_index == 5


def test_jump_to_first_item_loads_left_and_keeps_content_still() -> None:
    """Ensure extending leftwards jumps by the prepended slots, then re-centres the pivot."""

    async def scenario():
        store, port, _, coordinator = await _coordinated()
        port.moves.clear()
        coordinator.jump_to(0)
        await _drain(store)
        return store, port.moves

    store, moves = asyncio.run(scenario())

    assert moves == [("jump", 0.0), ("jump", 720.0), ("animate", 720.0)]
    assert store.state.selected_item == -5
    assert store.state.items[0] == -15


def test_settled_scroll_snaps_to_nearest_item() -> None:
    """Verify a debounced scroll snaps to the closest item and selects it in the store."""

    selections = []

    async def scenario():
        store, port, scheduler, coordinator = await _coordinated(
            on_item_selected=lambda item, index: selections.append((item, index)),
        )
        port.moves.clear()
        coordinator.on_scroll(700)
        coordinator.on_scroll(790)
        pending = list(scheduler.active)
        scheduler.fire()
        await _drain(store)
        return store, port.moves, pending

    store, moves, pending = asyncio.run(scenario())

    assert pending == [0.2]
    assert moves == [("animate", 792.0), ("animate", 792.0)]
    assert selections == [(6, 11)]
    assert isinstance(store.state, LoadedState)
    assert store.state.selected_item == 6


def test_scroll_ignored_while_window_empty() -> None:
    """Ensure scrolling before anything is loaded schedules no snap."""

    store = WindowedListStore(init_value=0, source=RecordingSource(), fetch_page_size=10)
    port = RecordingPort()
    scheduler = ManualScheduler()
    coordinator = ScrollCoordinator(store, port, GEOMETRY, snap_debounce_ms=200, scheduler=scheduler)

    coordinator.on_scroll(120)

    assert scheduler.active == []
    assert coordinator.offset == 120
    assert port.moves == []


def test_programmatic_moves_do_not_feed_back_as_scrolls() -> None:
    """Verify scroll events echoed during the coordinator's own moves are not debounced."""

    async def scenario():
        source = RecordingSource(scenario_window)
        store = WindowedListStore(init_value=0, source=source, fetch_page_size=10)
        port = RecordingPort()
        scheduler = ManualScheduler()
        coordinator = ScrollCoordinator(store, port, GEOMETRY, snap_debounce_ms=200, scheduler=scheduler)
        port.echo = coordinator.on_scroll
        await store.join()
        coordinator.animate_to(3)
        await _drain(store)
        return scheduler, coordinator

    scheduler, coordinator = asyncio.run(scenario())

    assert scheduler.active == []
    assert coordinator.offset == 216.0


def test_step_is_clamped_to_window() -> None:
    """Ensure stepping past the last item stops at the edge and extends the window."""

    async def scenario():
        store, port, _, coordinator = await _coordinated()
        port.moves.clear()
        coordinator.step(0)
        coordinator.step(100)
        await _drain(store)
        return store, port.moves

    store, moves = asyncio.run(scenario())

    assert moves[0] == ("animate", 1080.0)
    assert store.state.selected_item == 10
    assert store.state.items[-1] == 20


def test_resize_recentres_without_selecting() -> None:
    """Verify a viewport change re-centres the selected item without dispatching a selection."""

    async def scenario():
        source = RecordingSource(scenario_window)
        store, port, _, coordinator = await _coordinated(source)
        coordinator.resize(720)
        await _drain(store)
        return source, port.moves, coordinator

    source, moves, coordinator = asyncio.run(scenario())

    assert moves[-1] == ("jump", 360.0)
    assert coordinator.geometry.viewport_extent == 720
    assert coordinator.geometry.edge_padding == 324
    assert source.calls == [(10, 10, 0)]


def test_snapping_again_retries_after_error() -> None:
    """Ensure re-snapping to the same item re-selects it only while the store is in error."""

    async def scenario():
        source = RecordingSource(scenario_window, failures={10: 1})
        store, _, _, coordinator = await _coordinated(source)
        coordinator.animate_to(15)
        await _drain(store)
        failed = store.state
        coordinator.snap_to(15)
        await _drain(store)
        recovered = store.state
        coordinator.snap_to(15)
        await _drain(store)
        return source, failed, recovered

    source, failed, recovered = asyncio.run(scenario())

    assert isinstance(failed, ErrorState)
    assert isinstance(recovered, LoadedState)
    assert recovered.items[-1] == 20
    assert source.calls == [(10, 10, 0), (0, 10, 10), (0, 10, 10)]


def test_zero_debounce_snaps_immediately() -> None:
    """Verify a zero debounce window snaps on every scroll update."""

    async def scenario():
        store = WindowedListStore(
            init_value=0,
            source=RecordingSource(scenario_window),
            fetch_page_size=10,
        )
        port = RecordingPort()
        coordinator = ScrollCoordinator(store, port, GEOMETRY, snap_debounce_ms=0)
        await store.join()
        port.moves.clear()
        coordinator.on_scroll(140)
        await _drain(store)
        return store, port.moves

    store, moves = asyncio.run(scenario())

    assert moves[0] == ("animate", 144.0)
    assert store.state.selected_item == -3


def test_select_snaps_to_loaded_item() -> None:
    """Confirm selecting an item by value scrolls to it and ignores unknown items."""

    async def scenario():
        store, port, _, coordinator = await _coordinated()
        port.moves.clear()
        coordinator.select(2)
        coordinator.select(999)
        await _drain(store)
        return store, port.moves

    store, moves = asyncio.run(scenario())

    assert moves[0] == ("animate", 504.0)
    assert store.state.selected_item == 2


def test_dispose_stops_following_the_store() -> None:
    """Ensure a disposed coordinator no longer reacts to store transitions."""

    async def scenario():
        store, port, _, coordinator = await _coordinated()
        port.moves.clear()
        coordinator.dispose()
        await store.select_item(3)
        return store, port.moves

    store, moves = asyncio.run(scenario())

    assert moves == []
    assert store.state.selected_item == 3
