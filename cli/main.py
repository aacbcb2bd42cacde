#!/usr/bin/env python3
"""
CodeReplay CLI - record and replay editor sessions

Main entrypoint for the codereplay command-line tool.
"""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from codereplay.logging_config import setup_logging
from cli.commands import log, record, replay

# Initialize Typer app
app = typer.Typer(
    name="codereplay",
    help="Record editor sessions and replay them like live typing",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(log.app, name="log", help="Saved log operations")

# Add standalone commands
app.command(name="record")(record.record_command)
app.command(name="replay")(replay.replay_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR (default: $CODEREPLAY_LOG_LEVEL or INFO)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="text or json (default: $CODEREPLAY_LOG_FORMAT or text)"
    ),
):
    """Configure logging for every command."""
    setup_logging(level=log_level, fmt=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from codereplay import __version__ as core_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]CodeReplay CLI[/bold]", f"v{__version__}")
    table.add_row("Core", f"v{core_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
