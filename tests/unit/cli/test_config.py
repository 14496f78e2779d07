"""Unit tests for config commands.

Tests for `trashctl config show`, `init` and `path`.
"""

import tomllib
from pathlib import Path

from trashctl.cli.main import app
from trashctl.core.paths import get_config_path
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigPath:
    """Tests for config path."""

    def test_prints_path(self) -> None:
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.output.strip() == str(get_config_path())


class TestConfigInit:
    """Tests for config init."""

    def test_writes_defaults(self) -> None:
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Config written to" in result.output
        with open(get_config_path(), "rb") as f:
            data = tomllib.load(f)
        assert data == {"compression_level": 9, "confirm_empty": True}

    def test_with_trash_dir(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["config", "init", "--trash-dir", str(tmp_path / "t")])

        assert result.exit_code == 0
        with open(get_config_path(), "rb") as f:
            assert tomllib.load(f)["trash_dir"] == str(tmp_path / "t")

    def test_existing_not_overwritten(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("compression_level = 3\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert path.read_text() == "compression_level = 3\n"

    def test_force_overwrites(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("compression_level = 3\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert "compression_level = 9" in path.read_text()


class TestConfigShow:
    """Tests for config show."""

    def test_defaults(self) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "(not found)" in result.output
        assert "compression_level" in result.output

    def test_trash_dir_override(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--trash-dir", str(tmp_path / "cli"), "config", "show"])

        assert result.exit_code == 0
        assert str(tmp_path / "cli") in result.output

    def test_invalid_config(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("confirm_empty = 'maybe'\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output
