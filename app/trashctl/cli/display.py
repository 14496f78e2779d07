"""Shared Rich display functions for trash listings and results.

Provides reusable table builders and result printers used by the
show, restore and move commands.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from trashctl.trash.models import TrashActionResult, TrashEntry
from trashctl.trash.naming import ARCHIVE_SUFFIX, strip_archive_suffix
from trashctl.utils.formatting import console, print_success, print_warning


def create_entries_table(entries: list[TrashEntry], title: str = "Trash") -> Table:
    """Create a Rich table listing trash entries.

    Builds a table with No., Name and Original Location columns.
    Directories are styled distinctly from files.

    Args:
        entries: Entries to display, in listing order.
        title: Table title.

    Returns:
        Rich Table configured for entry display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("No.", justify="right", width=5)
    table.add_column("Name", no_wrap=True)
    table.add_column("Original Location", style="location")

    for entry in entries:
        style = "entry.directory" if entry.is_directory else "entry.file"
        table.add_row(
            str(entry.index),
            f"[{style}]{escape(entry.display_name)}[/{style}]",
            escape(entry.location),
        )

    return table


def describe_move(result: TrashActionResult) -> str:
    """Describe a successful move, noting when the entry was renamed.

    Args:
        result: Successful move result.

    Returns:
        Message like "Moved file notes.txt to Trash (as notes(1).txt)".
    """
    kind = "directory" if result.is_directory else "file"
    name = Path(result.path).name
    message = f"Moved {kind} {name} to Trash"
    if result.trash_name is not None and result.trash_name not in (name, name + ARCHIVE_SUFFIX):
        message += f" (as {strip_archive_suffix(result.trash_name)})"
    return message


def print_move_results(results: list[TrashActionResult]) -> None:
    """Print one line per moved item and a summary for batches.

    Failures are reported as warnings so the rest of the batch output
    stays readable.

    Args:
        results: Results from TrashEngine.move_many().
    """
    for result in results:
        if result.success:
            print_success(describe_move(result))
        else:
            print_warning(f"Failed to move: {result.error or 'Unknown error'}")

    fail_count = sum(1 for r in results if r.failed)
    if len(results) > 1 and fail_count:
        success_count = len(results) - fail_count
        console.print(
            f"\n[success]{success_count} moved[/success], [error]{fail_count} failed[/error]"
        )
