from __future__ import annotations

import asyncio
from typing import Annotated, Any

import typer

from snaplist.runtime.container import build_snap_list_container
from snaplist.scroll.coordinator import ScrollCoordinator
from snaplist.utilities.logging import get_logger
from snaplist.window.settings import WindowSettings
from snaplist.window.source import SequenceItemSource
from snaplist.window.state import (ErrorState, ListState, LoadedState,
                                   NoMoreItemsState)
from snaplist.window.store import WindowedListStore

logger = get_logger(__name__)

DEFAULT_INITIAL = 50
DEFAULT_TOTAL = 100
DEFAULT_VIEWPORT = 360.0
EDGE_MOVES = {"left", "right"}


class EchoScrollPort:
    """Prints every offset the coordinator asks for."""

    def jump_to(self, offset: float) -> None:
        typer.echo(f"  jump -> {offset:.1f}")

    def animate_to(self, offset: float) -> None:
        typer.echo(f"  animate -> {offset:.1f}")


def parse_moves(raw: str) -> list[str | int]:
    moves: list[str | int] = []
    for chunk in filter(None, (part.strip().lower() for part in raw.split(","))):
        if chunk in EDGE_MOVES:
            moves.append(chunk)
            continue
        try:
            moves.append(int(chunk))
        except ValueError as exc:
            raise ValueError(
                f"Invalid move {chunk!r}; expected 'left', 'right' or an item"
            ) from exc
    return moves


def describe_state(state: ListState[Any]) -> str:
    items = state.items
    window = f"[{items[0]}..{items[-1]}] ({len(items)})" if items else "[] (0)"
    parts = [
        type(state).__name__,
        f"items={window}",
        f"selected={state.selected_item!r}",
    ]
    if state.loading_direction is not None:
        parts.append(f"loading={state.loading_direction}")
    if isinstance(state, LoadedState) and state.prepended_count:
        parts.append(f"prepended={state.prepended_count}")
    if isinstance(state, LoadedState) and (state.evicted_leading or state.evicted_trailing):
        parts.append(f"evicted={state.evicted_leading}/{state.evicted_trailing}")
    if isinstance(state, NoMoreItemsState):
        parts.append(f"exhausted={state.direction}")
    if isinstance(state, ErrorState):
        parts.append(f"error={state.error}")
    return " ".join(parts)


def _resolve_move(store: WindowedListStore[int], move: str | int) -> int:
    items = store.state.items
    if move == "left":
        return items[0]
    if move == "right":
        return items[-1]
    assert isinstance(move, int)
    return move


async def _run_demo(
    *,
    initial: int,
    total: int,
    page_size: int | None,
    max_window: int | None,
    latency: float,
    viewport: float,
    moves: list[str | int],
) -> ListState[int]:
    source = SequenceItemSource(range(total), latency=latency)
    resolver = build_snap_list_container(
        source=source,
        init_value=initial,
        port=EchoScrollPort(),
        viewport_extent=viewport,
        overrides={
            WindowSettings: WindowSettings.from_environment(
                fetch_page_size=page_size,
                max_window_size=max_window,
            )
        },
    )
    store = resolver[WindowedListStore]
    coordinator = resolver[ScrollCoordinator]
    subscription = store.observable().subscribe(
        on_next=lambda state: typer.echo(describe_state(state))
    )
    try:
        await store.start()
        for move in moves:
            if not store.state.items:
                break
            typer.echo(f"> {move}")
            await store.select_item(_resolve_move(store, move))
            await store.join()
        return store.state
    finally:
        subscription.dispose()
        coordinator.dispose()
        store.dispose()


def demo_command(
    initial: Annotated[int, typer.Option("--initial", help="Item to start on")] = DEFAULT_INITIAL,
    total: Annotated[int, typer.Option("--total", min=1, help="Items in the source")] = DEFAULT_TOTAL,
    page_size: Annotated[
        int | None,
        typer.Option("--page-size", min=1, help="Items fetched per edge"),
    ] = None,
    max_window: Annotated[
        int | None,
        typer.Option("--max-window", min=1, help="Evict items beyond this window size"),
    ] = None,
    latency: Annotated[float, typer.Option("--latency", min=0.0, help="Simulated fetch delay (s)")] = 0.0,
    viewport: Annotated[float, typer.Option("--viewport", min=0.0)] = DEFAULT_VIEWPORT,
    moves: Annotated[
        str,
        typer.Option("--moves", help="Comma separated: left, right or an item value"),
    ] = "",
) -> None:
    """Drive a headless snap list over the integers ``0..total-1``."""

    try:
        parsed_moves = parse_moves(moves)
        asyncio.run(
            _run_demo(
                initial=initial,
                total=total,
                page_size=page_size,
                max_window=max_window,
                latency=latency,
                viewport=viewport,
                moves=parsed_moves,
            )
        )
    except ValueError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1) from exc
