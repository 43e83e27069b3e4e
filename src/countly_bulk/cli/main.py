"""
countly-bulk CLI.

Commands:
  countly-bulk replay <script>        Replay an action script, print the requests
  countly-bulk heartbeats <seconds>   Preview how a session is split into heartbeats
"""

import logging

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install countly-bulk[cli]")

from countly_bulk import __version__

console = Console()


def _setup_logging() -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(__version__)
@click.option("--debug", is_flag=True, help="Log every request handed to the queue.")
def main(debug: bool):
    """countly-bulk — encode user actions into Countly bulk requests."""
    if debug:
        _setup_logging()


# Register subcommands from separate modules
from countly_bulk.cli.replay import replay_cmd
from countly_bulk.cli.session import heartbeats_cmd

main.add_command(replay_cmd)
main.add_command(heartbeats_cmd)


if __name__ == "__main__":
    main()
