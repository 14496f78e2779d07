"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

from pathlib import Path

import pytest
from trashctl.core.paths import (
    APP_NAME,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_default_trash_dir,
    get_theme_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / APP_NAME

    def test_empty_xdg_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty XDG variable falls back to the home default."""
        monkeypatch.setenv("XDG_CONFIG_HOME", "")

        assert get_config_dir() == Path.home() / ".config" / APP_NAME


class TestGetDataDir:
    """Tests for get_data_dir and the default trash folder."""

    def test_default_data_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)

        assert get_data_dir() == Path.home() / ".local" / "share" / APP_NAME

    def test_default_trash_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The trash folder lives under the data directory."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_default_trash_dir() == tmp_path / APP_NAME / "trash"


class TestFilePaths:
    """Tests for config file paths."""

    def test_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / APP_NAME / "config.toml"
        assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"
