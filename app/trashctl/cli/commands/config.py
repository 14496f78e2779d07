"""Config commands for inspecting and creating the configuration file.

Provides `trashctl config show`, `trashctl config init` and
`trashctl config path`.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from trashctl.cli.types import get_config, get_trash_dir
from trashctl.core.config import ConfigError, TrashConfig, save_config
from trashctl.core.paths import get_config_path
from trashctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect or create the trashctl configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = get_config(ctx)
    config_path = get_config_path()

    table = Table(title="Configuration", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("config file", f"{config_path}{'' if config_path.exists() else ' (not found)'}")
    table.add_row("trash_dir", str(get_trash_dir(ctx, config)))
    table.add_row("compression_level", str(config.compression_level))
    table.add_row("confirm_empty", str(config.confirm_empty).lower())

    console.print(table)


@app.command()
def init(
    trash_dir: Annotated[
        Path | None,
        typer.Option("--trash-dir", help="Trash folder to write into the config."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path} (use --force to overwrite)")
        return

    config = TrashConfig(trash_dir=trash_dir.expanduser() if trash_dir else None)
    try:
        path = save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {path}")


@app.command()
def path() -> None:
    """Print the config file path."""
    typer.echo(str(get_config_path()))
