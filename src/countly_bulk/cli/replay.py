"""CLI: countly-bulk replay <script>"""

import json
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from countly_bulk.errors import ScriptError
from countly_bulk.script import load_script, replay

console = Console()

REQUEST_KINDS = (
    ("begin_session", "begin_session"),
    ("session_duration", "heartbeat"),
    ("events", "events"),
    ("user_details", "user_details"),
    ("crash", "crash"),
    ("campaign_id", "conversion"),
)
IDENTITY_FIELDS = ("device_id", "ip_address")


def request_kind(request: dict[str, Any]) -> str:
    for field, kind in REQUEST_KINDS:
        if field in request:
            return kind
    return "other"


@click.command("replay")
@click.argument("script_path", type=click.Path(dir_okay=False))
@click.option("--json-output", "--json", is_flag=True)
def replay_cmd(script_path, json_output):
    """Replay an action script and print the requests it produces."""
    try:
        queue = replay(load_script(script_path))
    except ScriptError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    requests = queue.requests
    if json_output:
        click.echo(json.dumps(requests, indent=2))
        return

    table = Table(title=f"Requests ({len(requests)} total)")
    table.add_column("#", justify="right")
    table.add_column("Device", style="bold")
    table.add_column("Kind")
    table.add_column("Payload")
    for i, request in enumerate(requests, 1):
        payload = {k: v for k, v in request.items() if k not in IDENTITY_FIELDS}
        table.add_row(
            str(i),
            escape(str(request.get("device_id", ""))),
            request_kind(request),
            escape(json.dumps(payload)),
        )
    console.print(table)
