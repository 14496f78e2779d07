"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import contextlib
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Any

import typer

from trashctl.core.config import ConfigError, TrashConfig, load_config, resolve_trash_dir
from trashctl.trash.engine import TrashEngine
from trashctl.utils.formatting import console, print_error


class OutputFormat(str, Enum):
    """Output format options for listings."""

    TABLE = "table"
    JSON = "json"


def _options(ctx: typer.Context) -> dict[str, Any]:
    """Global options stored by the main callback."""
    root = ctx.find_root()
    return root.obj if isinstance(root.obj, dict) else {}


def is_quiet(ctx: typer.Context) -> bool:
    """Check whether --quiet was given."""
    return bool(_options(ctx).get("quiet", False))


def get_config(ctx: typer.Context) -> TrashConfig:
    """Load the user configuration, exiting with an error if it is invalid.

    Args:
        ctx: Current Typer context.

    Returns:
        Loaded TrashConfig (defaults when no config file exists).
    """
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_trash_dir(ctx: typer.Context, config: TrashConfig | None = None) -> Path:
    """Resolve the trash folder from --trash-dir, environment and config."""
    override = _options(ctx).get("trash_dir")
    return resolve_trash_dir(config or get_config(ctx), override)


def get_engine(ctx: typer.Context, config: TrashConfig | None = None) -> TrashEngine:
    """Create a TrashEngine for the configured trash folder.

    Args:
        ctx: Current Typer context.
        config: Already loaded configuration, if any.

    Returns:
        TrashEngine bound to the resolved trash folder.
    """
    config = config or get_config(ctx)
    return TrashEngine(get_trash_dir(ctx, config), compression_level=config.compression_level)


@contextlib.contextmanager
def progress(ctx: typer.Context, message: str) -> Iterator[None]:
    """Show a spinner while a long operation runs, unless --quiet."""
    if is_quiet(ctx):
        yield
        return
    with console.status(message, spinner="dots"):
        yield
