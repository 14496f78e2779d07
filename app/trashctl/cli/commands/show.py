"""Show command for listing trash contents.

This module provides the `trashctl show` command (alias `list`).
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from trashctl.cli.display import create_entries_table
from trashctl.cli.types import OutputFormat, get_engine
from trashctl.trash.errors import TrashError
from trashctl.utils.formatting import console, print_error, print_info


def show(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List everything in the trash with its original location."""
    engine = get_engine(ctx)

    try:
        entries = engine.list_entries()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
        return

    if not entries:
        print_info("Trash is empty.")
        return

    console.print(create_entries_table(entries))
    console.print(f"\n[muted]{len(entries)} item(s) in {escape(str(engine.trash_dir))}[/muted]")
