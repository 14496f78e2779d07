"""Restore command for bringing items back from the trash.

This module provides the `trashctl restore` command. With a trash entry
name it restores that entry directly; without one it lists the trash and
asks which entry to restore.
"""

from typing import Annotated

import typer

from trashctl.cli.display import create_entries_table
from trashctl.cli.types import get_engine, progress
from trashctl.trash.engine import TrashEngine, select_entry
from trashctl.trash.errors import TrashConflictError, TrashError, TrashSelectionError
from trashctl.utils.formatting import console, print_error, print_info, print_success, print_warning


def restore(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Argument(
            help="Trash entry to restore (as shown by `trashctl show`). "
            "Omit to choose interactively.",
            show_default=False,
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing item at the original location.",
        ),
    ] = False,
) -> None:
    """Restore an item from the trash to its original location.

    Examples:
        trashctl restore                      # Pick from a numbered list
        trashctl restore notes.txt.tar.gz     # Restore a specific entry
        trashctl restore notes.txt.tar.gz -f  # Overwrite if it exists
    """
    engine = get_engine(ctx)

    if name is None:
        name = _choose_entry(engine)
        if name is None:
            return

    try:
        with progress(ctx, f"Restoring {name} from Trash..."):
            result = engine.restore(name, overwrite=force)
    except TrashConflictError as e:
        print_error(f"{e}. Use --force to overwrite.")
        raise typer.Exit(code=1) from e
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    kind = "directory" if result.is_directory else "file"
    print_success(f"Restored {kind} {name} to {result.path}")


def _choose_entry(engine: TrashEngine) -> str | None:
    """Ask the user to pick a trash entry by number.

    Args:
        engine: Engine for the trash folder.

    Returns:
        The chosen entry's trash name, or None if the trash is empty.

    Raises:
        typer.Exit: With code 1 if the input is not a valid entry number.
    """
    try:
        entries = engine.list_entries()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not entries:
        print_info("Trash is empty.")
        return None

    console.print("Select a file or directory to restore:")
    console.print(create_entries_table(entries))

    choice = typer.prompt("Enter the number of the item to restore")
    try:
        entry = select_entry(entries, choice)
    except TrashSelectionError as e:
        print_warning(str(e))
        raise typer.Exit(code=1) from e

    return entry.trash_name
