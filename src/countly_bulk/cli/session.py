"""CLI: countly-bulk heartbeats <seconds>"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from countly_bulk.session import coerce_seconds, split_session

console = Console()


@click.command("heartbeats")
@click.argument("seconds")
@click.option("--timestamp", type=int, default=None, help="Session start timestamp")
@click.option("--json-output", "--json", is_flag=True)
def heartbeats_cmd(seconds: str, timestamp: Optional[int], json_output: bool):
    """Show the session_duration heartbeats for a session of SECONDS."""
    beats = split_session(seconds, timestamp)
    if json_output:
        click.echo(json.dumps(beats, indent=2))
        return

    table = Table(title=f"Heartbeats for {coerce_seconds(seconds)}s")
    table.add_column("#", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Timestamp", justify="right")
    for i, beat in enumerate(beats, 1):
        table.add_row(str(i), str(beat["session_duration"]), str(beat.get("timestamp", "-")))
    console.print(table)
