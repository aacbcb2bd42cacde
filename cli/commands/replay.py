"""
Replay command: replay a saved log against local files
"""

import json
import os
import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from cli import DEFAULT_LOG_PATH
from codereplay.core.errors import CodeReplayError
from codereplay.host import LocalHost
from codereplay.log import FileEventLogStore
from codereplay.replay import ReplayOptions, TargetMode, replay

console = Console()


def replay_command(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to event log file"),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="cloned or in-place (default: $CODEREPLAY_MODE or cloned)"
    ),
    root: Optional[str] = typer.Option(
        None, "--root", "-r", help="Output directory for cloned files (default: current directory)"
    ),
    edit_delay: Optional[int] = typer.Option(None, "--edit-delay", help="Milliseconds after each edit"),
    switch_delay: Optional[int] = typer.Option(None, "--switch-delay", help="Milliseconds after each file switch"),
    countdown: Optional[int] = typer.Option(None, "--countdown", help="Milliseconds before the first event"),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip hash chain verification"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a recorded session into local files.

    Examples:
        codereplay replay
        codereplay replay --mode in-place
        codereplay replay --root ./playback --countdown 0
        codereplay replay --json
    """
    try:
        env = ReplayOptions.from_env()
        options = ReplayOptions(
            mode=TargetMode.parse(mode) if mode else env.mode,
            edit_delay_ms=env.edit_delay_ms if edit_delay is None else edit_delay,
            switch_delay_ms=env.switch_delay_ms if switch_delay is None else switch_delay,
            countdown_ms=env.countdown_ms if countdown is None else countdown,
            output_root=root or env.output_root,
        )

        log = FileEventLogStore(log_path).load(verify=not no_verify)
        host = LocalHost(root=options.output_root or os.getcwd(), console=None if json_output else console)
        result = replay(log, host, host, options)

        if json_output:
            print(json.dumps({
                "success": result.ok,
                "state": result.state.value,
                "events_replayed": result.applied,
                "edits": result.edits,
                "switches": result.switches,
                "focus_changes": result.focus_changes,
                "clones": result.clones,
                "failures": [str(f) for f in result.failures],
                "message": result.message,
            }, indent=2))
        else:
            table = Table(title="Playback")
            table.add_column("Metric", style="green")
            table.add_column("Value", style="cyan", justify="right")
            table.add_row("Events", str(result.applied))
            table.add_row("Edits", str(result.edits))
            table.add_row("Switches", str(result.switches))
            table.add_row("Failures", str(len(result.failures)))
            console.print(table)

            for original, clone in result.clones.items():
                console.print(f"  {original} → [yellow]{clone}[/yellow]")

        raise typer.Exit(0 if result.ok else 1)

    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except (CodeReplayError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
