import typer

from snaplist.cli.commands.demo import demo_command

app = typer.Typer(help="Bidirectional snap list tooling.")

app.command(name="demo")(demo_command)


@app.callback()
def _root() -> None:
    # Keeps ``demo`` addressable as a subcommand.
    pass


def main() -> None:
    app()


if __name__ == "__main__":
    main()
