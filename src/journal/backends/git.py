"""Git history backend (libgit2 via pygit2)."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pygit2
import structlog
from pygit2.enums import RepositoryOpenFlag, SortMode

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

# pygit2 reports missing objects/refs as KeyError and bad specs as ValueError
_GIT_ERRORS = (pygit2.GitError, KeyError, ValueError)
_LOCK_FILES = ("index.lock", "HEAD.lock")
_HEADS = "refs/heads/"


def _is_locked(path: Path) -> bool:
    git_dir = path / ".git"
    return any((git_dir / name).exists() for name in _LOCK_FILES)


def _to_point(commit: pygit2.Commit) -> Point:
    tz = timezone(timedelta(minutes=commit.commit_time_offset))
    return Point(
        id=str(commit.id),
        message=commit.message,
        author=f"{commit.author.name} <{commit.author.email}>",
        timestamp=datetime.fromtimestamp(commit.commit_time, tz=tz),
        parent_ids=tuple(str(p) for p in commit.parent_ids),
    )


class GitBackend(HistoryBackend):
    """Topics as branches, entries as files committed to a non-bare repository."""

    def __init__(self, repo: pygit2.Repository):
        self.repo = repo
        self._root = Path(repo.workdir)

    @classmethod
    def open_or_init(cls, root_path: str | Path) -> "GitBackend":
        """Open the repository at exactly root_path, initializing it if that fails.

        A repository whose .git directory holds a lock file is never re-initialized,
        and a bare repository is refused.

        Raises:
            BackendUnavailable: If the repository can be neither opened nor initialized
            IdentityMissing: If a fresh repository cannot sign its genesis point
        """
        path = Path(root_path).expanduser()
        try:
            repo = pygit2.Repository(str(path), RepositoryOpenFlag.NO_SEARCH)
        except _GIT_ERRORS as e:
            if _is_locked(path):
                raise BackendUnavailable(f"Repository at {path} is locked: {e}") from e
            logger.warning("repository_reinitializing", path=str(path), error=str(e))
            return cls(cls._init_repo(path))

        if repo.is_bare:
            raise BackendUnavailable(f"Repository at {path} is bare")
        logger.debug("repository_opened", path=str(path))
        return cls(repo)

    @staticmethod
    def _init_repo(path: Path) -> pygit2.Repository:
        try:
            repo = pygit2.init_repository(str(path), bare=False, initial_head=TRUNK)
        except (*_GIT_ERRORS, OSError) as e:
            raise BackendUnavailable(f"Cannot initialize repository at {path}: {e}") from e

        if repo.branches.local.get(TRUNK) is None:
            sig = GitBackend._signature(repo)
            tree = repo.TreeBuilder().write()
            oid = repo.create_commit(_HEADS + TRUNK, sig, sig, GENESIS_MESSAGE, tree, [])
            logger.info("repository_initialized", path=str(path), genesis=str(oid))
        return repo

    @staticmethod
    def _signature(repo: pygit2.Repository) -> pygit2.Signature:
        try:
            return repo.default_signature
        except _GIT_ERRORS as e:
            raise IdentityMissing(
                f"No author identity configured (set user.name and user.email): {e}"
            ) from e

    @property
    def root_path(self) -> Path:
        return self._root

    def _tip(self, line_name: str) -> pygit2.Commit:
        branch = self.repo.branches.local.get(line_name)
        if branch is None:
            raise ReferenceResolutionFailure(f"No such line: {line_name}")
        try:
            return branch.peel(pygit2.Commit)
        except _GIT_ERRORS as e:
            raise ReferenceResolutionFailure(f"Cannot resolve tip of {line_name}: {e}") from e

    def resolve_topic_line(self, name: str) -> Line:
        line_name = topic_line_name(name)
        branch = self.repo.branches.local.get(line_name)
        if branch is not None:
            return Line(name=line_name, target=str(branch.target))

        trunk_tip = self._tip(TRUNK)
        try:
            self.repo.branches.local.create(line_name, trunk_tip)
        except _GIT_ERRORS as e:
            raise ReferenceResolutionFailure(f"Cannot create line {line_name}: {e}") from e
        logger.info("topic_line_created", topic=name, start=str(trunk_tip.id))
        return Line(name=line_name, target=str(trunk_tip.id))

    def switch_to(self, line: Line) -> None:
        commit = self._tip(line.name)
        try:
            # SAFE strategy refuses before touching files if local edits would be lost
            self.repo.checkout_tree(commit.tree)
        except _GIT_ERRORS as e:
            raise IoFailure(f"Cannot check out {line.name}: {e}") from e
        self.repo.set_head(_HEADS + line.name)
        logger.debug("switched_line", line=line.name, tip=str(commit.id))

    def current_line_name(self) -> str:
        target = self.repo.references["HEAD"].target
        if isinstance(target, str):
            return target[len(_HEADS):] if target.startswith(_HEADS) else target
        # Detached HEAD
        return str(target)

    def _relative(self, path: str) -> str:
        p = Path(path)
        if p.is_absolute():
            try:
                p = p.relative_to(self._root)
            except ValueError as e:
                raise StagingFailure(f"{path} is outside {self._root}") from e
        return p.as_posix()

    def record_point(self, paths: list[str], message: str) -> str:
        sig = self._signature(self.repo)
        index = self.repo.index
        try:
            for path in paths:
                rel = self._relative(path)
                if not (self._root / rel).is_file():
                    raise StagingFailure(f"Cannot stage {rel}: no such file")
                try:
                    index.add(rel)
                except (*_GIT_ERRORS, OSError) as e:
                    raise StagingFailure(f"Cannot stage {rel}: {e}") from e
            tree = index.write_tree()
        except StagingFailure:
            index.read(force=True)
            raise

        parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
        try:
            oid = self.repo.create_commit("HEAD", sig, sig, message, tree, parents)
            index.write()
        except _GIT_ERRORS as e:
            raise ReferenceResolutionFailure(f"Cannot record point: {e}") from e
        logger.info("point_recorded", line=self.current_line_name(), point=str(oid))
        return str(oid)

    def line_names(self) -> list[str]:
        return sorted(self.repo.branches.local)

    def history(self, line_name: Optional[str] = None) -> list[Point]:
        tip = self._tip(line_name or self.current_line_name())
        walker = self.repo.walk(tip.id, SortMode.TOPOLOGICAL | SortMode.TIME)
        return [_to_point(c) for c in walker]
