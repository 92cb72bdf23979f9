"""Note CLI command: edit today's entry and commit it."""

import shlex
import subprocess
import sys
from typing import Optional

import click
import structlog
from rich.console import Console

from cli.utils import config_path_from, get_components, resolve_editor, store_errors

console = Console()
logger = structlog.get_logger()


@click.command()
@click.option("-t", "--topic", help="Switch to this topic first")
@click.option("-a", "--amend", is_flag=True, help="Amend last note (not supported yet)")
@click.pass_context
@store_errors
def note(ctx: click.Context, topic: Optional[str], amend: bool):
    """Take a note in the current topic using $EDITOR."""
    c = get_components(config_path_from(ctx))
    store = c["store"]
    editor = resolve_editor(c["config"].editor)

    if topic:
        store.switch_topic(topic)
    entry = store.entry()
    logger.debug("current_note", path=str(entry.path))
    before = entry.path.read_bytes() if entry.exists() else None

    try:
        subprocess.run([*shlex.split(editor), str(entry.path)], check=True)
    except subprocess.CalledProcessError:
        logger.warning("editing_aborted", entry=entry.name)
        # Restore the pre-edit file
        if before is None:
            entry.path.unlink(missing_ok=True)
        else:
            entry.path.write_bytes(before)
        console.print("[yellow]Editing was aborted, discarding changes.[/]")
        return
    except FileNotFoundError:
        console.print(f"[red]Editor not found:[/] {editor}")
        sys.exit(1)

    if not entry.exists():
        console.print("[yellow]No note written, nothing to commit.[/]")
        return

    point = store.commit_entry(entry.name, amend=amend)
    logger.info("committed", entry=entry.name, point=point)
    console.print(f"[green]Committed:[/] {entry.name} ({point[:7]})")
