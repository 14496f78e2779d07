"""Unit tests for cli/display.py.

Tests for the trash listing table and move result output.
"""

import io

import pytest
from rich.console import Console
from trashctl.cli.display import create_entries_table, describe_move, print_move_results
from trashctl.core.theme import get_theme
from trashctl.trash.models import TrashActionResult, TrashEntry


def _capture_console_output(
    monkeypatch: pytest.MonkeyPatch, func: object, *args: object
) -> str:
    """Capture Rich output by replacing the module-level consoles.

    Both the stdout and stderr consoles write to the same buffer.
    """
    import trashctl.cli.display as display_mod
    import trashctl.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)
    monkeypatch.setattr(display_mod, "console", test_console)
    monkeypatch.setattr(fmt_mod, "console", test_console)
    monkeypatch.setattr(fmt_mod, "err_console", test_console)

    func(*args)  # type: ignore[operator]
    return buf.getvalue()


class TestCreateEntriesTable:
    """Tests for create_entries_table."""

    def test_columns_and_rows(self) -> None:
        entries = [
            TrashEntry(1, "notes.txt.tar.gz", "notes.txt", False, "/home/u/notes.txt"),
            TrashEntry(2, "stray.tar.gz", "stray", False),
        ]

        table = create_entries_table(entries)

        assert [c.header for c in table.columns] == ["No.", "Name", "Original Location"]
        assert table.row_count == 2

    def test_rendered(self) -> None:
        entries = [
            TrashEntry(1, "project.tar.gz", "project/", True, "/home/u/project"),
            TrashEntry(2, "stray.tar.gz", "stray", False),
        ]
        buf = io.StringIO()

        Console(theme=get_theme(), file=buf, color_system=None, width=200).print(
            create_entries_table(entries)
        )

        output = buf.getvalue()
        assert "project/" in output
        assert "/home/u/project" in output
        assert "Unknown" in output


class TestDescribeMove:
    """Tests for describe_move."""

    def test_file(self) -> None:
        result = TrashActionResult("/home/u/notes.txt", True, "notes.txt.tar.gz", False)
        assert describe_move(result) == "Moved file notes.txt to Trash"

    def test_directory(self) -> None:
        result = TrashActionResult("/home/u/project", True, "project.tar.gz", True)
        assert describe_move(result) == "Moved directory project to Trash"

    def test_empty_directory(self) -> None:
        result = TrashActionResult("/home/u/empty", True, "empty", True)
        assert describe_move(result) == "Moved directory empty to Trash"

    def test_renamed(self) -> None:
        result = TrashActionResult("/home/u/report.txt", True, "report(1).txt.tar.gz", False)
        assert describe_move(result) == "Moved file report.txt to Trash (as report(1).txt)"

    def test_archive_named_file(self) -> None:
        """A file already named .tar.gz is not reported as renamed."""
        result = TrashActionResult("/home/u/b.tar.gz", True, "b.tar.gz", False)
        assert describe_move(result) == "Moved file b.tar.gz to Trash"


class TestPrintMoveResults:
    """Tests for print_move_results."""

    def test_success_and_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        results = [
            TrashActionResult("/home/u/a.txt", True, "a.txt.tar.gz"),
            TrashActionResult("missing", False, error="missing not found"),
        ]

        output = _capture_console_output(monkeypatch, print_move_results, results)

        assert "Moved file a.txt to Trash" in output
        assert "Failed to move: missing not found" in output
        assert "1 moved" in output
        assert "1 failed" in output

    def test_no_summary_for_single_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        results = [TrashActionResult("missing", False, error="missing not found")]

        output = _capture_console_output(monkeypatch, print_move_results, results)

        assert "failed" not in output.replace("Failed to move", "")
