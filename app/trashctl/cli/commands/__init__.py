"""CLI commands for trashctl.

This package contains all subcommand implementations.
"""

from trashctl.cli.commands import config, empty, move, restore, show

__all__ = ["config", "empty", "move", "restore", "show"]
