"""Allow running trashctl as `python -m trashctl`."""

from trashctl.cli.main import app

app(prog_name="trashctl")
