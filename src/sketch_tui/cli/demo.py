"""CLI: sketch demo <name>"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from sketch_tui.app import App
from sketch_tui.config import configure_logging
from sketch_tui.demos import DEMOS
from sketch_tui.demos.clock import Clock, start_ticker
from sketch_tui.errors import TerminalError

console = Console(stderr=True)


def _load_config(path, **overrides):
    from sketch_tui.cli.main import _load_config
    return _load_config(path, **overrides)


@click.command("demo")
@click.argument("name", type=click.Choice(sorted(DEMOS)))
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Config file (default: $SKETCH_CONFIG or ~/.sketch/config.json)")
@click.option("--paste/--no-paste", default=None, help="Deliver bracketed paste as Paste messages")
@click.option("--mouse/--no-mouse", default=None, help="Enable mouse reporting")
@click.option("--focus/--no-focus", default=None, help="Enable focus reporting")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None)
def demo(name: str, config_path: Optional[Path], paste: Optional[bool], mouse: Optional[bool],
         focus: Optional[bool], log_file: Optional[Path]):
    """Run a bundled demo app."""
    cfg = _load_config(config_path, paste=paste, mouse=mouse, focus=focus, log_file=log_file)
    configure_logging(cfg)

    app = App(DEMOS[name](), config=cfg)
    if isinstance(app.model, Clock):
        start_ticker(app.sender())
    try:
        app.run()
    except TerminalError as e:
        console.print(f"[red]Terminal error: {e}[/red]")
        raise SystemExit(1)
