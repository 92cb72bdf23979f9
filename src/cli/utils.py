"""Shared CLI utilities."""

import functools
import os
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from journal import JournalStoreError

console = Console()
logger = structlog.get_logger()


def get_components(config_path: Optional[Path] = None) -> dict:
    """Load config (persisting defaults on first run) and open the store."""
    from cli.config import load_config, save_config
    from journal import JournalStore

    config = load_config(config_path)
    if not config.location.exists():
        save_config(config)

    store = JournalStore.open_or_init(config.paths.repo_path)
    return {"config": config, "store": store}


def config_path_from(ctx: click.Context) -> Optional[Path]:
    obj = ctx.find_object(dict) or {}
    return obj.get("config_path")


def resolve_editor(configured: Optional[str]) -> str:
    """Editor command: configured value, else $VISUAL/$EDITOR.

    Raises:
        click.UsageError: If no editor is available
    """
    editor = configured or os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if not editor:
        raise click.UsageError("EDITOR env var not set - don't know which editor to use!")
    return editor


def print_bullets(title: str, items: list[str]) -> None:
    lines = [f"## {title}", ""] + [f"* {i}" for i in items]
    console.print(Markdown("\n".join(lines)))


def store_errors(func):
    """Report store errors in red and exit 1 instead of dumping a traceback."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except JournalStoreError as e:
            logger.error("store_error", error=str(e), kind=type(e).__name__)
            console.print(f"[red]{type(e).__name__}:[/] {escape(str(e))}")
            sys.exit(1)
        except ValueError as e:
            console.print(f"[red]Error:[/] {escape(str(e))}")
            sys.exit(1)

    return wrapper
