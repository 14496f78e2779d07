"""Move command for sending files and directories to the trash.

This module provides the `trashctl move` command. Each path is handled
independently: a missing path is reported and the rest are still moved.
"""

from typing import Annotated

import typer

from trashctl.cli.display import print_move_results
from trashctl.cli.types import get_engine, progress


def move(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(
            help="File(s) or directory(ies) to move to the trash.",
            show_default=False,
        ),
    ],
) -> None:
    """Move files or directories to the trash.

    Files and non-empty directories are stored as compressed archives;
    empty directories are moved as they are.

    Examples:
        trashctl move notes.txt
        trashctl move build/ old-logs/ draft.md
    """
    engine = get_engine(ctx)

    with progress(ctx, f"Moving {len(paths)} item(s) to Trash..."):
        results = engine.move_many(paths)

    print_move_results(results)

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
