"""Color theme for trashctl output.

Built-in colors can be overridden per key in ~/.config/trashctl/theme.toml:

    [colors]
    entry_directory = "#4e9a06"
"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from trashctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

# Styles rendered bold; everything else is the plain color
_BOLD_STYLES = frozenset({"error", "entry.directory"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for each output style.

    Field names map to Rich style names with "_" replaced by ".",
    so entry_directory styles "entry.directory".
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    entry_file: str = "#ffffff"
    entry_directory: str = "#0e8ac8"
    location: str = "#b2bec3"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        if not isinstance(v, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = v.strip()
        if not color.startswith("#"):
            raise ValueError(f"{info.field_name}: color must start with '#'")
        digits = color[1:]
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        if not _HEX_DIGITS.fullmatch(digits):
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'")
        return color


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Returns:
        String-valued colors by key, or None if the file is missing or unusable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    section = data.get("colors", {})
    if not isinstance(section, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {key: value for key, value in section.items() if isinstance(value, str)}


def load_theme(path: Path | None = None) -> ThemeColors:
    """Built-in colors with any valid user overrides applied.

    Args:
        path: Theme file to read. Defaults to ~/.config/trashctl/theme.toml.
    """
    theme_path = path or get_theme_path()
    overrides = _load_toml_colors(theme_path)
    if not overrides:
        return ThemeColors()

    logger.debug("Applying %d theme override(s) from %s", len(overrides), theme_path)
    try:
        return ThemeColors(**overrides)
    except ValueError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme from colors (loaded from disk when None)."""
    if colors is None:
        colors = load_theme()

    styles: dict[str, str] = {}
    for field, color in colors.model_dump().items():
        name = field.replace("_", ".")
        styles[name] = f"bold {color}" if name in _BOLD_STYLES else color
    styles["bold_header"] = f"bold {colors.header}"

    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme shared by the output consoles, built on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
