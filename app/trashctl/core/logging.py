"""Logging setup for the trashctl CLI.

Library modules only create module-level loggers; handlers are installed
here, once, by the CLI entry point.
"""

import logging

from rich.logging import RichHandler

from trashctl.utils.formatting import err_console


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Install a Rich log handler on stderr.

    Args:
        verbose: Show debug messages.
        quiet: Only show errors. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )
