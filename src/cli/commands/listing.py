"""List CLI command."""

import click
from rich.console import Console

from cli.utils import config_path_from, get_components, print_bullets, store_errors

console = Console()

KIND_ALIASES = {
    "t": "topics",
    "topics": "topics",
    "e": "entries",
    "entries": "entries",
    "notes": "entries",
}


@click.command("list")
@click.argument(
    "kind", required=False, default="topics", type=click.Choice(sorted(KIND_ALIASES))
)
@click.pass_context
@store_errors
def list_cmd(ctx: click.Context, kind: str):
    """List topics (default) or the entries of the current topic."""
    c = get_components(config_path_from(ctx))
    store = c["store"]
    kind = KIND_ALIASES[kind]

    items = store.list_topics() if kind == "topics" else store.list_entries()
    if not items:
        console.print(f"[yellow]No {kind} found.[/]")
        return
    print_bullets(kind.capitalize(), items)
