"""
Record command: capture host notifications into a saved log
"""

import json
import sys
import typer
from typing import Optional
from rich.console import Console

from cli import DEFAULT_LOG_PATH
from codereplay.capture import RecordingSession, feed_notifications
from codereplay.core.errors import CodeReplayError
from codereplay.log import FileEventLogStore

console = Console(stderr=True)


def record_command(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to write the event log"),
    input_path: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON-lines host notifications (default: stdin)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Record a session from JSON-lines editor notifications.

    Recording starts before the first notification and stops at end of input.

    Examples:
        my-editor-bridge | codereplay record --log session.jsonl
        codereplay record --input notifications.jsonl
    """
    session = RecordingSession()
    try:
        session.start()
        if input_path:
            with open(input_path, "r", encoding="utf-8") as f:
                notifications = feed_notifications(session, f)
        else:
            notifications = feed_notifications(session, sys.stdin)
        count = session.stop()

        store = FileEventLogStore(log_path)
        store.save(session.log)

        if json_output:
            print(json.dumps({
                "success": True,
                "log": log_path,
                "notifications": notifications,
                "events": count,
                "files": session.log.file_ids(),
            }, indent=2))
        else:
            console.print(f"[green]✓ Recording stopped. Captured {count} events.[/green]")
            console.print(f"  Notifications: [cyan]{notifications}[/cyan]")
            console.print(f"  Files: [cyan]{len(session.log.file_ids())}[/cyan]")
            console.print(f"  Saved to: [yellow]{log_path}[/yellow]")

        raise typer.Exit(0)

    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Input file not found", "path": input_path}))
        else:
            console.print(f"[red]Error: Input file not found:[/red] {input_path}")
        raise typer.Exit(2)
    except CodeReplayError as e:
        session.stop()
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
