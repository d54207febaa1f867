"""CLI: sketch config show"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from sketch_tui.config import config_path

console = Console()


def _load_config(path, **overrides):
    from sketch_tui.cli.main import _load_config
    return _load_config(path, **overrides)


@click.group()
def config():
    """Configuration commands."""


@config.command("show")
@click.option("--config", "path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--json-output", "--json", is_flag=True)
def config_show(path: Optional[Path], json_output: bool):
    """Show the effective configuration."""
    cfg = _load_config(path)
    if json_output:
        click.echo(json.dumps(cfg.model_dump(mode="json"), indent=2))
        return
    table = Table(title=f"Configuration ({path or config_path()})")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in cfg.model_dump().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
