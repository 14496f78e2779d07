"""Unit tests for the main CLI application.

Tests for global options and command registration.
"""

from pathlib import Path

import pytest
from trashctl import __version__
from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"trashctl version {__version__}" in result.output

    def test_version_short(self) -> None:
        result = runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("move", "restore", "show", "empty", "config"):
            assert command in result.output

    def test_trash_dir_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """TRASHCTL_TRASH_DIR selects the trash folder."""
        trash = tmp_path / "env-trash"
        monkeypatch.setenv("TRASHCTL_TRASH_DIR", str(trash))
        (tmp_path / "a.txt").write_text("a")

        result = runner.invoke(app, ["move", str(tmp_path / "a.txt")])

        assert result.exit_code == 0
        assert (trash / "a.txt.tar.gz").exists()

    def test_list_alias(self, tmp_path: Path) -> None:
        """`list` is a hidden alias of `show`."""
        result = runner.invoke(app, ["--trash-dir", str(tmp_path / "t"), "list"])

        assert result.exit_code == 0
        assert "Trash is empty." in result.output

    def test_quiet_hides_progress(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("a")

        result = runner.invoke(
            app, ["--quiet", "--trash-dir", str(tmp_path / "t"), "move", str(tmp_path / "a.txt")]
        )

        assert result.exit_code == 0
        assert "Moved file a.txt to Trash" in result.output
