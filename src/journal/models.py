"""Value objects for topics, entries and recorded points."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import StrEnum
from pathlib import Path
from typing import Optional

TRUNK = "main"
TOPIC_PREFIX = "topic/"
NOTE_EXTENSION = "md"
GENESIS_MESSAGE = "initial commit"

_ENTRY_NAME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})\.[A-Za-z0-9]+$")
# Characters git refuses in a reference component
_BAD_REF_CHARS = re.compile(r"[\x00-\x20\x7f~^:?*\[\\]")


class LineFilter(StrEnum):
    TOPICS = "topics"
    TRUNK = "trunk"


def validate_topic_name(name: str) -> str:
    """Ensure name is usable as a single-segment topic.

    Raises:
        ValueError: If name is empty, contains '/', or is not a valid ref component
    """
    if not name or not name.strip():
        raise ValueError("Topic name must not be empty")
    if name != name.strip():
        raise ValueError(f"Topic name has surrounding whitespace: {name!r}")
    if "/" in name:
        raise ValueError(f"Topic name must not contain '/': {name!r}")
    if (
        _BAD_REF_CHARS.search(name)
        or name.startswith(".")
        or name.endswith(".")
        or name.endswith(".lock")
        or ".." in name
        or "@{" in name
        or name == "@"
    ):
        raise ValueError(f"Topic name is not a valid reference name: {name!r}")
    return name


def topic_line_name(name: str) -> str:
    """Map a topic name to its line identifier, e.g. 'work' -> 'topic/work'."""
    return f"{TOPIC_PREFIX}{validate_topic_name(name)}"


def topic_from_line(line_name: str) -> Optional[str]:
    """Inverse of topic_line_name. Returns None for lines outside the scheme."""
    if not line_name.startswith(TOPIC_PREFIX):
        return None
    name = line_name[len(TOPIC_PREFIX):]
    if not name or "/" in name:
        return None
    return name


def entry_name_for(day: date, ext: str = NOTE_EXTENSION) -> str:
    return f"{day:%Y-%m-%d}.{ext}"


def today_entry_name(now: Optional[datetime] = None) -> str:
    """Name of today's entry, using the UTC calendar date."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return entry_name_for(now.date())


def first_line(text: str) -> str:
    """Summary of a note: its first line, right-trimmed."""
    return text.split("\n", 1)[0].rstrip()


@dataclass(frozen=True)
class Topic:
    """A named line of history. name=None is the trunk."""

    name: Optional[str] = None

    @property
    def is_trunk(self) -> bool:
        return self.name is None

    @property
    def line_name(self) -> str:
        return TRUNK if self.name is None else topic_line_name(self.name)

    def __str__(self) -> str:
        return self.name or TRUNK


@dataclass(frozen=True)
class Line:
    """Handle to a line of history: short name plus hex id of its tip."""

    name: str
    target: str


@dataclass(frozen=True)
class Point:
    """Read-side view of one recorded point."""

    id: str
    message: str
    author: str
    timestamp: datetime
    parent_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def summary(self) -> str:
        return first_line(self.message)

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def is_genesis(self) -> bool:
        return not self.parent_ids


@dataclass(frozen=True)
class Entry:
    """One journal file under the store root."""

    root: Path
    name: str

    @property
    def path(self) -> Path:
        return self.root / self.name

    @property
    def date(self) -> Optional[date]:
        m = _ENTRY_NAME.match(self.name)
        if not m:
            return None
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        """Read entry text. Raises OSError if the file is missing or unreadable."""
        return self.path.read_bytes().decode("utf-8", errors="replace")

    def summary(self) -> str:
        return first_line(self.read())
