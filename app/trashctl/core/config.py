"""User configuration for trashctl.

Configuration is stored in ~/.config/trashctl/config.toml and controls
where the trash folder lives and how items are compressed.

Example:
    trash_dir = "/data/trash"
    compression_level = 6
    confirm_empty = true
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trashctl.core.paths import TRASH_DIR_ENV, get_config_path, get_default_trash_dir

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 9


class TrashConfig(BaseModel):
    """Configuration for the trash engine and CLI.

    Attributes:
        trash_dir: Trash folder location. If None, uses the XDG data directory.
        compression_level: gzip level used for new archives (1-9).
        confirm_empty: Ask for confirmation before emptying the trash.
    """

    model_config = ConfigDict(extra="forbid")

    trash_dir: Annotated[
        Path | None,
        Field(description="Trash folder (None = ~/.local/share/trashctl/trash)"),
    ] = None
    compression_level: Annotated[
        int,
        Field(ge=1, le=9, description="gzip compression level (1-9)"),
    ] = DEFAULT_COMPRESSION_LEVEL
    confirm_empty: Annotated[
        bool,
        Field(description="Prompt before permanently emptying the trash"),
    ] = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> TrashConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TrashConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return TrashConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TrashConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: TrashConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TrashConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: TrashConfig) -> dict[str, object]:
    """Convert TrashConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset trash_dir is omitted.

    Args:
        config: The TrashConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "compression_level": config.compression_level,
        "confirm_empty": config.confirm_empty,
    }
    if config.trash_dir is not None:
        result["trash_dir"] = str(config.trash_dir)
    return result


def resolve_trash_dir(config: TrashConfig, override: Path | None = None) -> Path:
    """Determine the trash folder to operate on.

    Precedence: explicit override (--trash-dir), then the
    TRASHCTL_TRASH_DIR environment variable, then the config file,
    then the XDG default.

    Args:
        config: Loaded configuration.
        override: Path given on the command line, if any.

    Returns:
        Absolute, user-expanded trash folder path.
    """
    if override is not None:
        candidate = override
    elif os.environ.get(TRASH_DIR_ENV):
        candidate = Path(os.environ[TRASH_DIR_ENV])
    elif config.trash_dir is not None:
        candidate = config.trash_dir
    else:
        candidate = get_default_trash_dir()
    return Path(os.path.abspath(candidate.expanduser()))
