"""
sketch CLI — `sketch` command.

Commands:
  sketch demo <name>       Run a bundled demo app (counter, pretty-counter, text-input, clock)
  sketch config show       Print the effective configuration
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from sketch_tui import __version__
from sketch_tui.config import AppConfig, load_config
from sketch_tui.errors import ConfigError

console = Console(stderr=True)


def _load_config(path: Optional[Path], **overrides) -> AppConfig:
    try:
        return load_config(path).merged(**overrides)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option(__version__)
def main():
    """sketch — Model-View-Update runtime for terminal apps."""


# Register subcommands from separate modules
from sketch_tui.cli.config import config  # noqa: E402
from sketch_tui.cli.demo import demo  # noqa: E402

main.add_command(demo)
main.add_command(config)


if __name__ == "__main__":
    main()
