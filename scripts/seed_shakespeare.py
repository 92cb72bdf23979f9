"""Seed a jot store with Shakespeare's works: one topic per work, one entry per day."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cli.config import load_config  # noqa: E402
from cli.logging_config import setup_logging  # noqa: E402
from journal import JournalStore, JournalStoreError  # noqa: E402
from journal.seed import SOURCE_URL, seed  # noqa: E402


@click.command()
@click.option("-c", "--config", "config_path", type=click.Path(path_type=Path), help="Config file")
@click.option(
    "--repo", type=click.Path(file_okay=False, path_type=Path), help="Override store root"
)
@click.option(
    "--cache",
    default="shakespeare.txt",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Local copy of the source text",
)
@click.option("--url", default=SOURCE_URL, show_default=True, help="Source text URL")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(config_path: Path, repo: Path, cache: Path, url: str, verbose: bool):
    setup_logging(json_mode=False, level="DEBUG" if verbose else "INFO")
    config = load_config(config_path)
    store = JournalStore.open_or_init(repo or config.paths.repo_path)
    try:
        commits, topics = seed(store, cache, url)
    except JournalStoreError as e:
        click.echo(f"Seeding failed: {e}", err=True)
        sys.exit(1)
    click.echo(f"done! wrote {commits} commits for {topics} topics.")


if __name__ == "__main__":
    main()
