"""Filesystem locations used by trashctl.

Follows the XDG Base Directory layout:
- config.toml and theme.toml in $XDG_CONFIG_HOME/trashctl (~/.config/trashctl)
- the default trash folder in $XDG_DATA_HOME/trashctl/trash
  (~/.local/share/trashctl/trash)
"""

import os
from pathlib import Path

APP_NAME = "trashctl"

# Overrides the configured trash folder
TRASH_DIR_ENV = "TRASHCTL_TRASH_DIR"


def _get_xdg_dir(env_var: str, fallback: str) -> Path:
    """App directory under an XDG base, or under ~/<fallback> when unset or empty."""
    base = os.environ.get(env_var) or Path.home() / fallback
    return Path(base) / APP_NAME


def get_config_dir() -> Path:
    """Directory holding config.toml and theme.toml."""
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Directory holding the default trash folder."""
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    return get_config_dir() / "theme.toml"


def get_default_trash_dir() -> Path:
    """Trash folder used when neither config, environment nor CLI name one."""
    return get_data_dir() / "trash"
