import pytest
from typer.testing import CliRunner

from snaplist.cli.commands.demo import describe_state, parse_moves
from snaplist.cli.main import app
from snaplist.window import (LoadedState, LoadingDirection, NoMoreItemsState,
                             WindowSnapshot)

runner = CliRunner()


class TestDemoCommand:
    """Exercise the headless demo session end to end."""

    def test_demo_walks_both_edges(self) -> None:
        """Verify edge moves grow the window and an interior move only changes the selection."""

        result = runner.invoke(
            app,
            ["demo", "--initial", "50", "--page-size", "5", "--moves", "right,left,52"],
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        loaded = [line for line in lines if line.startswith("LoadedState")]
        assert loaded[0].startswith("LoadedState items=[45..55] (11) selected=50 prepended=5")
        assert loaded[1].startswith("LoadedState items=[45..60] (16) selected=55")
        assert loaded[2].startswith("LoadedState items=[40..60] (21) selected=45 prepended=5")
        assert loaded[3] == "LoadedState items=[40..60] (21) selected=52"
        assert "> right" in lines
        assert "  jump -> 360.0" in lines

    def test_demo_evicts_with_cap(self) -> None:
        result = runner.invoke(
            app,
            ["demo", "--initial", "50", "--page-size", "5", "--max-window", "11", "--moves", "right"],
        )

        assert result.exit_code == 0, result.output
        assert "LoadedState items=[50..60] (11) selected=55 evicted=5/0" in result.output

    def test_invalid_move_exits_with_error(self) -> None:
        """Ensure an unparseable move aborts with exit code 1."""

        result = runner.invoke(app, ["demo", "--moves", "up"])

        assert result.exit_code == 1


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", []),
        ("right, LEFT ,7", ["right", "left", 7]),
        ("-3,,right", [-3, "right"]),
    ],
)
def test_parse_moves(raw, expected) -> None:
    assert parse_moves(raw) == expected


def test_describe_state_lists_flags() -> None:
    snapshot = WindowSnapshot(items=(1, 2, 3), selected_item=3)

    assert describe_state(LoadedState(snapshot, evicted_trailing=2)) == (
        "LoadedState items=[1..3] (3) selected=3 evicted=0/2"
    )
    assert describe_state(NoMoreItemsState(snapshot, direction=LoadingDirection.RIGHT)) == (
        "NoMoreItemsState items=[1..3] (3) selected=3 exhausted=right"
    )
