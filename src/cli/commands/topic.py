"""Topic CLI command."""

from typing import Optional

import click
import structlog
from rich.console import Console

from cli.utils import config_path_from, get_components, store_errors

console = Console()
logger = structlog.get_logger()


@click.command()
@click.argument("name", required=False)
@click.pass_context
@store_errors
def topic(ctx: click.Context, name: Optional[str]):
    """Show the current topic, or switch to NAME (created on first use)."""
    c = get_components(config_path_from(ctx))
    store = c["store"]

    if name is None:
        current = store.current_topic()
        if current:
            console.print(f"current topic is [bold]{current}[/]")
        else:
            console.print("no topic set")
        return

    logger.debug("topic_command", name=name)
    t = store.switch_topic(name)
    console.print(f"[green]Switched to topic[/] [bold]{t.name}[/]")
