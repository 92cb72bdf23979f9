"""Seed a store with dated entries cut from the complete works of Shakespeare.

One topic per work, one entry per day starting 2020-01-01, paragraphs spread
so every work fills roughly a year.
"""

import re
from datetime import date, timedelta
from pathlib import Path

import httpx
import structlog

from .models import entry_name_for
from .store import JournalStore

logger = structlog.get_logger()

SOURCE_URL = "https://www.gutenberg.org/cache/epub/100/pg100.txt"
START_DATE = date(2020, 1, 1)
DAYS_PER_WORK = 365

_MARKDOWN_CHARS = re.compile(r"([`'*_#])")
# A run of blank lines; lines holding only whitespace or digits count as blank
_PARAGRAPH_BREAK = re.compile(r"\n(?:[\s\d]*\n)+")


def fetch_text(cache_path: Path, url: str = SOURCE_URL, timeout: float = 60.0) -> str:
    """Return the source text, downloading it once into cache_path."""
    if cache_path.exists():
        return cache_path.read_text(encoding="utf-8")
    logger.info("seed_download", url=url)
    resp = httpx.get(url, timeout=timeout, follow_redirects=True)
    resp.raise_for_status()
    text = resp.text
    cache_path.write_text(text, encoding="utf-8")
    return text


def topic_slug(title: str) -> str:
    """Sanitize a work title into a topic name. Only [a-z0-9-] allowed."""
    slug = title.lower().replace(" ", "-")
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return re.sub(r"-{2,}", "-", slug).strip("-")[:50]


def parse_contents(text: str) -> tuple[list[str], int]:
    """Read the table of contents.

    Returns:
        (titles, offset) where offset is where the body starts after the contents

    Raises:
        ValueError: If no contents section is found
    """
    marker = text.find("Contents")
    if marker < 0:
        raise ValueError("Could not find table of contents")
    pos = marker + len("Contents")
    while pos < len(text) and text[pos] in "\r\t \n":
        pos += 1
    end = text.find("\n\n", pos)
    if end < 0:
        raise ValueError("Could not find end of table of contents")
    titles = [line.strip() for line in text[pos:end].split("\n") if line.strip()]
    return titles, end


def split_works(body: str, titles: list[str]) -> dict[str, str]:
    """Cut body into one section per title, in contents order.

    Raises:
        ValueError: If a title's heading is missing from the body
    """
    starts = []
    pos = 0
    for title in titles:
        m = re.compile(rf"\s*{re.escape(title)}\s*\n").search(body, pos)
        if m is None:
            raise ValueError(f"Could not find work: {title}")
        starts.append(m.start())
        pos = m.end()
    ends = starts[1:] + [len(body)]
    return {t: body[s:e] for t, s, e in zip(titles, starts, ends)}


def escape_markdown(text: str) -> str:
    return _MARKDOWN_CHARS.sub(r"\\\1", text)


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def daily_entries(title: str, paragraphs: list[str], start: date = START_DATE) -> dict[str, str]:
    """Group paragraphs into one entry per day, named YYYY-MM-DD.md."""
    per_day = max(len(paragraphs) // DAYS_PER_WORK, 1)
    entries = {}
    day = start
    for i in range(0, len(paragraphs), per_day):
        chunk = paragraphs[i : i + per_day]
        entries[entry_name_for(day)] = f"Working on {title}\n\n" + "\n\n".join(chunk) + "\n"
        day += timedelta(days=1)
    return entries


def build_entries(text: str) -> dict[str, dict[str, str]]:
    """Parse the source text into {topic: {entry name: content}}."""
    text = text.replace("\r\n", "\n")
    titles, offset = parse_contents(text)
    works = split_works(text[offset:], titles)
    data: dict[str, dict[str, str]] = {}
    for title, section in works.items():
        topic = topic_slug(title)
        if not topic:
            logger.warning("seed_skip_title", title=title)
            continue
        paragraphs = split_paragraphs(escape_markdown(section))
        data.setdefault(topic, {}).update(daily_entries(title, paragraphs))
    return data


def commit_entries(store: JournalStore, data: dict[str, dict[str, str]]) -> tuple[int, int]:
    """Write and commit every entry, topic by topic, in date order.

    Returns:
        (commits, topics)
    """
    commits = 0
    for topic, entries in data.items():
        store.switch_topic(topic)
        for name in sorted(entries):
            (store.root_path / name).write_text(entries[name], encoding="utf-8")
            store.commit_entry(name)
            commits += 1
        logger.debug("seed_topic_done", topic=topic, entries=len(entries))
    logger.info("seed_done", commits=commits, topics=len(data))
    return commits, len(data)


def seed(store: JournalStore, cache_path: Path, url: str = SOURCE_URL) -> tuple[int, int]:
    return commit_entries(store, build_entries(fetch_text(cache_path, url)))
