from __future__ import annotations

import typer

from gv import __version__
from gv.cli.commands.current import current
from gv.cli.commands.increment import increment
from gv.cli.commands.publish import publish, publish_by


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Commit-driven semantic versioning: bump, commit, tag and push.",
)


# Commands
app.command()(current)
app.command()(increment)
app.command()(publish)
app.command("publish-by")(publish_by)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    pass


def main() -> None:
    app()
