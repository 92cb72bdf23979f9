"""Show CLI command."""

from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown

from cli.utils import config_path_from, get_components, store_errors

console = Console()


@click.command()
@click.option("-t", "--topic", help="Switch to this topic first")
@click.option("--latest", is_flag=True, help="Show the newest entry if today's is missing")
@click.pass_context
@store_errors
def show(ctx: click.Context, topic: Optional[str], latest: bool):
    """Show today's note of the current topic."""
    c = get_components(config_path_from(ctx))
    store = c["store"]

    if topic:
        store.switch_topic(topic)
    entry = store.entry()
    if not entry.exists() and latest:
        entry = store.latest_entry()
    if entry is None or not entry.exists():
        console.print("[yellow]No note for today.[/]")
        return

    current = store.current_topic() or "main"
    console.print(f"[dim]{current} / {entry.name}[/]\n")
    console.print(Markdown(entry.read()))
