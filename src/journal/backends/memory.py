"""In-memory history backend over a real working directory.

History (lines, points, snapshots) lives in Python dicts; entry files live on
disk under root_path so editors and the store facade can read and write them.
Used by tests and dry runs where no git identity or libgit2 is wanted.
"""

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from ..errors import (
    BackendUnavailable,
    IdentityMissing,
    IoFailure,
    ReferenceResolutionFailure,
    StagingFailure,
)
from ..models import GENESIS_MESSAGE, TRUNK, Line, Point, topic_line_name
from .base import HistoryBackend

logger = structlog.get_logger()

DEFAULT_AUTHOR = "Journal <journal@localhost>"


@dataclass(frozen=True)
class _Commit:
    point: Point
    snapshot: dict[str, bytes]


class MemoryBackend(HistoryBackend):
    """Single-process fake: branches and commits kept in memory."""

    def __init__(self, root_path: str | Path, author: Optional[str] = DEFAULT_AUTHOR):
        self._root = Path(root_path).expanduser()
        self.author = author
        self._commits: dict[str, _Commit] = {}
        self._lines: dict[str, str] = {}
        self._head = TRUNK
        self._stage: dict[str, bytes] = {}
        self._counter = 0

    @classmethod
    def open_or_init(
        cls, root_path: str | Path, author: Optional[str] = DEFAULT_AUTHOR
    ) -> "MemoryBackend":
        """Create the working directory and a trunk with an empty genesis point."""
        backend = cls(root_path, author=author)
        try:
            backend._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendUnavailable(f"Cannot initialize store at {backend._root}: {e}") from e
        oid = backend._new_commit(GENESIS_MESSAGE, {}, ())
        backend._lines[TRUNK] = oid
        logger.info("repository_initialized", path=str(backend._root), genesis=oid)
        return backend

    def _new_commit(self, message: str, snapshot: dict[str, bytes], parents: tuple) -> str:
        if self.author is None:
            raise IdentityMissing("No author identity configured")
        self._counter += 1
        digest = hashlib.sha1(
            f"{self._counter}:{message}:{':'.join(parents)}".encode()
        ).hexdigest()
        self._commits[digest] = _Commit(
            point=Point(
                id=digest,
                message=message,
                author=self.author,
                timestamp=datetime.now(timezone.utc),
                parent_ids=tuple(parents),
            ),
            snapshot=dict(snapshot),
        )
        return digest

    @property
    def root_path(self) -> Path:
        return self._root

    def _tip(self, line_name: str) -> _Commit:
        oid = self._lines.get(line_name)
        if oid is None or oid not in self._commits:
            raise ReferenceResolutionFailure(f"No such line: {line_name}")
        return self._commits[oid]

    def resolve_topic_line(self, name: str) -> Line:
        line_name = topic_line_name(name)
        if line_name in self._lines:
            return Line(name=line_name, target=self._lines[line_name])
        trunk_tip = self._tip(TRUNK)
        self._lines[line_name] = trunk_tip.point.id
        logger.info("topic_line_created", topic=name, start=trunk_tip.point.id)
        return Line(name=line_name, target=trunk_tip.point.id)

    def switch_to(self, line: Line) -> None:
        target = self._tip(line.name)
        current = self._commits[self._lines[self._head]] if self._head in self._lines else None
        old = current.snapshot if current else {}
        try:
            for name in old:
                if name not in target.snapshot:
                    (self._root / name).unlink(missing_ok=True)
            for name, data in target.snapshot.items():
                (self._root / name).write_bytes(data)
        except OSError as e:
            raise IoFailure(f"Cannot check out {line.name}: {e}") from e
        self._stage = dict(target.snapshot)
        self._head = line.name
        logger.debug("switched_line", line=line.name, tip=target.point.id)

    def current_line_name(self) -> str:
        return self._head

    def record_point(self, paths: list[str], message: str) -> str:
        if self.author is None:
            raise IdentityMissing("No author identity configured")
        staged = dict(self._stage)
        for path in paths:
            full = self._root / path
            if not full.is_file():
                raise StagingFailure(f"Cannot stage {path}: no such file")
            try:
                staged[Path(path).as_posix()] = full.read_bytes()
            except OSError as e:
                raise StagingFailure(f"Cannot stage {path}: {e}") from e

        parents = (self._lines[self._head],) if self._head in self._lines else ()
        oid = self._new_commit(message, staged, parents)
        self._lines[self._head] = oid
        self._stage = staged
        logger.info("point_recorded", line=self._head, point=oid)
        return oid

    def line_names(self) -> list[str]:
        return sorted(self._lines)

    def history(self, line_name: Optional[str] = None) -> list[Point]:
        commit = self._tip(line_name or self._head)
        points = []
        while True:
            points.append(commit.point)
            if not commit.point.parent_ids:
                return points
            commit = self._commits[commit.point.parent_ids[0]]

    def snapshot(self, point_id: str) -> dict[str, bytes]:
        """Files recorded at point_id."""
        return dict(self._commits[point_id].snapshot)
