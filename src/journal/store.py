"""Journal store facade over a history backend."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import structlog

from .backends import GitBackend, HistoryBackend
from .errors import IoFailure, StagingFailure
from .models import Entry, LineFilter, Point, Topic, today_entry_name, topic_from_line

logger = structlog.get_logger()

BackendFactory = Callable[[Path], HistoryBackend]


class JournalStore:
    """Topics, entries and commits for CLI and import clients.

    Holds no state of its own beyond the backend it was given; the backend's
    current line is the only thing switch_topic mutates.
    """

    def __init__(self, backend: HistoryBackend):
        self.backend = backend

    @classmethod
    def open_or_init(
        cls, root_path: str | Path, backend_factory: BackendFactory = GitBackend.open_or_init
    ) -> "JournalStore":
        """Open storage at root_path, initializing a fresh repository if needed."""
        return cls(backend_factory(Path(root_path).expanduser()))

    @property
    def root_path(self) -> Path:
        return self.backend.root_path

    def switch_topic(self, name: Optional[str] = None) -> Topic:
        """Select topic name, creating it from the trunk tip on first use.

        With name=None nothing changes and the current topic is returned.
        """
        if name is None:
            return Topic(self.current_topic())
        line = self.backend.resolve_topic_line(name)
        self.backend.switch_to(line)
        return Topic(name)

    def current_topic(self) -> Optional[str]:
        return topic_from_line(self.backend.current_line_name())

    @staticmethod
    def current_entry_name(now: Optional[datetime] = None) -> str:
        return today_entry_name(now)

    def entry(self, name: Optional[str] = None) -> Entry:
        return Entry(self.root_path, name or self.current_entry_name())

    def latest_entry(self) -> Optional[Entry]:
        """Newest dated entry in the working state; undated files are skipped."""
        dated = [e for e in map(self.entry, self.list_entries()) if e.date is not None]
        return max(dated, key=lambda e: e.date) if dated else None

    def commit_entry(self, name: str, amend: bool = False) -> str:
        """Record the entry file as a new point on the current topic.

        The message is the entry's first line. amend is accepted but not honored:
        a new point is always chained to the previous tip.

        Returns:
            Id of the new point
        """
        if amend:
            logger.warning("amend_not_supported", entry=name)
        entry = self.entry(name)
        try:
            summary = entry.summary()
        except FileNotFoundError as e:
            raise StagingFailure(f"Cannot stage {name}: no such file") from e
        except OSError as e:
            raise IoFailure(f"Cannot read {entry.path}: {e}") from e
        return self.backend.record_point([name], summary)

    def list_topics(self) -> list[str]:
        return self.backend.list_lines(LineFilter.TOPICS)

    def list_lines(self, filter: LineFilter) -> list[str]:
        return self.backend.list_lines(filter)

    def list_entries(self) -> list[str]:
        return self.backend.list_working_files()

    def history(self, topic: Optional[str] = None) -> list[Point]:
        if topic is not None:
            self.switch_topic(topic)
        return self.backend.history()
