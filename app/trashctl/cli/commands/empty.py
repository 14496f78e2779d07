"""Empty command for permanently deleting trash contents.

This module provides the `trashctl empty` command.
"""

from typing import Annotated

import typer

from trashctl.cli.types import get_config, get_engine, progress
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import print_error, print_info, print_success


def empty(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently delete all items in the trash.

    Examples:
        trashctl empty      # Empty with confirmation
        trashctl empty -y   # Skip confirmation
    """
    config = get_config(ctx)
    engine = get_engine(ctx, config)

    try:
        entries = engine.list_entries()
        if not entries:
            # Drops a stale metadata file, if any
            engine.empty()
            print_info("Trash is already empty.")
            return

        if config.confirm_empty and not yes:
            confirmed = typer.confirm(
                f"Permanently delete {len(entries)} item(s) from the trash?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)

        with progress(ctx, "Emptying Trash..."):
            engine.empty()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Trash emptied successfully ({len(entries)} item(s) deleted).")
