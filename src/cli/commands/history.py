"""Journal CLI command: history of a topic."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cli.utils import config_path_from, get_components, store_errors

console = Console()


@click.command()
@click.option("-t", "--topic", help="Switch to this topic first")
@click.option("-b", "--brief", is_flag=True, help="Show only date and summary of each entry")
@click.pass_context
@store_errors
def journal(ctx: click.Context, topic: Optional[str], brief: bool):
    """Show the journal of the current topic, newest first."""
    c = get_components(config_path_from(ctx))
    points = c["store"].history(topic)

    if brief:
        table = Table(show_header=True)
        table.add_column("Date", style="cyan")
        table.add_column("Id", style="dim")
        table.add_column("Summary")
        for p in points:
            table.add_row(f"{p.timestamp:%Y-%m-%d}", p.short_id, Text(p.summary))
        console.print(table)
        return

    for p in points:
        console.print(f"\n[cyan]{p.timestamp:%Y-%m-%d %H:%M}[/] [dim]{p.short_id} {p.author}[/]")
        console.print(p.message.rstrip(), markup=False, highlight=False)
