"""CLI entry point for jot."""

from pathlib import Path
from typing import Optional

import click

from cli.commands import journal, list_cmd, note, show, topic
from cli.config import load_config
from cli.logging_config import setup_logging


class AliasedGroup(click.Group):
    """Group accepting one-letter command aliases."""

    ALIASES = {"t": "topic", "l": "list", "n": "note", "s": "show", "j": "journal"}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


@click.group(cls=AliasedGroup)
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: $XDG_CONFIG_HOME/jot/config.yaml or ~/.jot/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool, config_path: Optional[Path]):
    """jot - a journal kept in git, one branch per topic."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    setup_logging(json_mode=json_logs, level="DEBUG" if verbose else "WARNING")
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))
    setup_logging(
        json_mode=json_logs or config.logging.json_mode,
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.paths.log_file,
    )


cli.add_command(topic)
cli.add_command(list_cmd)
cli.add_command(note)
cli.add_command(show)
cli.add_command(journal)


if __name__ == "__main__":
    cli()
