"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from trashctl import __version__
from trashctl.cli.commands import config, empty, move, restore, show
from trashctl.core.logging import configure_logging

# Create main Typer app
app = typer.Typer(
    name="trashctl",
    help="Move files to a recoverable trash instead of deleting them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"trashctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    trash_dir: Annotated[
        Path | None,
        typer.Option(
            "--trash-dir",
            envvar="TRASHCTL_TRASH_DIR",
            help="Trash folder to use instead of the configured one.",
        ),
    ] = None,
) -> None:
    """trashctl - a recoverable trash can for the command line.

    Trashed items are compressed into a trash folder together with their
    original location, so they can be listed, restored or emptied later.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["trash_dir"] = trash_dir


# Register commands
app.command(name="move")(move.move)
app.command(name="restore")(restore.restore)
app.command(name="show")(show.show)
app.command(name="list", hidden=True)(show.show)
app.command(name="empty")(empty.empty)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
