"""History backend abstraction."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..errors import IoFailure
from ..models import Line, LineFilter, Point, topic_from_line


class HistoryBackend(ABC):
    """Version-control store for topics and entries.

    A backend owns one repository rooted at root_path. Its "current line"
    is per-instance state; nothing is shared between instances.
    """

    @property
    @abstractmethod
    def root_path(self) -> Path:
        """Working directory root holding the entry files."""
        ...

    @abstractmethod
    def resolve_topic_line(self, name: str) -> Line:
        """Return the line for topic name, creating it from the trunk tip if missing.

        Raises:
            ValueError: If name is not a valid topic name
            ReferenceResolutionFailure: If the trunk tip cannot be resolved
        """
        ...

    @abstractmethod
    def switch_to(self, line: Line) -> None:
        """Check out the snapshot at the line's tip and make it the current line.

        Raises:
            ReferenceResolutionFailure: If the tip cannot be resolved to a snapshot
            IoFailure: If the working files cannot be updated
        """
        ...

    @abstractmethod
    def current_line_name(self) -> str:
        """Short name of the current line, e.g. 'main' or 'topic/work'."""
        ...

    @abstractmethod
    def record_point(self, paths: list[str], message: str) -> str:
        """Stage paths and record a new point on the current line.

        Args:
            paths: File paths relative to root_path
            message: Point message

        Returns:
            Hex id of the new point

        Raises:
            StagingFailure: If a path does not exist or cannot be read
            IdentityMissing: If no author identity is configured
        """
        ...

    @abstractmethod
    def line_names(self) -> list[str]:
        """All line names, sorted."""
        ...

    @abstractmethod
    def history(self, line_name: Optional[str] = None) -> list[Point]:
        """Points reachable from the tip of line_name (default: current), newest first."""
        ...

    def list_lines(self, filter: LineFilter = LineFilter.TOPICS) -> list[str]:
        """Topic names (prefix stripped) or the non-topic lines."""
        names = self.line_names()
        if filter == LineFilter.TOPICS:
            return [t for t in (topic_from_line(n) for n in names) if t is not None]
        return [n for n in names if topic_from_line(n) is None]

    def list_working_files(self) -> list[str]:
        """Non-directory entries directly under root_path, sorted."""
        try:
            return sorted(p.name for p in self.root_path.iterdir() if not p.is_dir())
        except OSError as e:
            raise IoFailure(f"Cannot list {self.root_path}: {e}") from e
