"""
Event log commands: tail, inspect, verify
"""

import json
import typer
from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.syntax import Syntax

from cli import DEFAULT_LOG_PATH
from codereplay.core.errors import CodeReplayError
from codereplay.log import FileEventLogStore

app = typer.Typer()
console = Console()


def _describe(ev: dict) -> str:
    if ev.get("type") == "edit":
        rng = ev.get("range", {})
        start, end = rng.get("start", {}), rng.get("end", {})
        span = f"{start.get('line')}:{start.get('character')}-{end.get('line')}:{end.get('character')}"
        return f"{span} +{json.dumps(ev.get('inserted_text', ''))} -{ev.get('deleted_length', 0)}"
    return "focus"


def _fail(json_output: bool, log_path: str, error: Exception) -> None:
    if isinstance(error, FileNotFoundError):
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
    elif json_output:
        print(json.dumps({"error": str(error)}))
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(2)


@app.command()
def tail(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to event log file"),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Number of events to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the last events of a saved log.

    Examples:
        codereplay log tail
        codereplay log tail --lines 10
        codereplay log tail --json
    """
    try:
        records = FileEventLogStore(log_path).records()
    except (FileNotFoundError, CodeReplayError) as e:
        _fail(json_output, log_path, e)

    if not records:
        if not json_output:
            console.print("[yellow]Event log is empty[/yellow]")
        else:
            print(json.dumps({"events": [], "count": 0}))
        raise typer.Exit(0)

    if lines:
        records = records[-lines:]

    if json_output:
        print(json.dumps({"events": records, "count": len(records)}, indent=2, ensure_ascii=False))
    else:
        table = Table(title=f"Event Log: {log_path}")
        table.add_column("Seq", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("File", style="yellow")
        table.add_column("Change")
        table.add_column("Hash (prefix)", style="dim")

        for rec in records:
            ev = rec.get("event", {})
            table.add_row(
                str(rec.get("seq", "N/A")),
                ev.get("type", "N/A"),
                escape(ev.get("file_id", "N/A")),
                escape(_describe(ev)),
                (rec.get("event_hash") or "N/A")[:16],
            )

        console.print(table)
        console.print(f"\n[bold]Total events:[/bold] {len(records)}")

    raise typer.Exit(0)


@app.command()
def inspect(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to event log file"),
    from_seq: Optional[int] = typer.Option(None, "--from", help="Start from sequence number"),
    to_seq: Optional[int] = typer.Option(None, "--to", help="End at sequence number"),
    event_type: Optional[str] = typer.Option(None, "--event-type", "-t", help="Filter by type (edit, switch_file)"),
    file_id: Optional[str] = typer.Option(None, "--file", "-f", help="Filter by file URI"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Inspect saved log events with filters.

    Examples:
        codereplay log inspect --from 0 --to 10
        codereplay log inspect --event-type switch_file
        codereplay log inspect --file file:///work/app.py --json
    """
    try:
        records = FileEventLogStore(log_path).records()
    except (FileNotFoundError, CodeReplayError) as e:
        _fail(json_output, log_path, e)

    if from_seq is not None:
        records = [rec for rec in records if rec.get("seq", 0) >= from_seq]
    if to_seq is not None:
        records = [rec for rec in records if rec.get("seq", 0) <= to_seq]
    if event_type:
        records = [rec for rec in records if rec.get("event", {}).get("type") == event_type]
    if file_id:
        records = [rec for rec in records if rec.get("event", {}).get("file_id") == file_id]

    if not records:
        if not json_output:
            console.print("[yellow]No events match the filters[/yellow]")
        else:
            print(json.dumps({"events": [], "count": 0}))
        raise typer.Exit(0)

    if json_output:
        print(json.dumps({"events": records, "count": len(records)}, indent=2, ensure_ascii=False))
    else:
        for rec in records:
            ev = rec.get("event", {})
            console.print(f"\n[bold cyan]Event {rec.get('seq', 'N/A')}[/bold cyan]")
            console.print(f"  Type: [green]{ev.get('type', 'N/A')}[/green]")
            console.print(f"  File: [yellow]{escape(ev.get('file_id', 'N/A'))}[/yellow]")
            console.print(f"  Timestamp: {ev.get('timestamp', 'N/A')}")
            console.print(f"  Hash: {rec.get('event_hash', 'N/A')}")
            console.print(f"  Prev Hash: {rec.get('prev_hash', 'N/A')}")
            if ev.get("type") == "edit":
                console.print("  Edit:")
                console.print(Syntax(json.dumps(ev, indent=2, ensure_ascii=False), "json", theme="monokai"))

        console.print(f"\n[bold]Total events:[/bold] {len(records)}")

    raise typer.Exit(0)


@app.command()
def verify(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to event log file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify the hash chain of a saved log.

    Exit code 1 when the chain is broken.
    """
    try:
        result = FileEventLogStore(log_path).verify()
    except (FileNotFoundError, CodeReplayError) as e:
        _fail(json_output, log_path, e)

    if json_output:
        print(json.dumps({
            "ok": result.ok,
            "count": result.count,
            "broken_at": result.broken_at,
            "reason": result.reason,
        }))
    elif result.ok:
        console.print(f"[green]✓ Hash chain valid ({result.count} events)[/green]")
    else:
        console.print(f"[red]✗ Hash chain broken at record {result.broken_at}:[/red] {result.reason}")

    raise typer.Exit(0 if result.ok else 1)
