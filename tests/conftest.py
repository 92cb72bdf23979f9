"""Shared test fixtures for jot."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from journal import JournalStore, MemoryBackend  # noqa: E402

GIT_IDENTITY = "[user]\n\tname = Test Writer\n\temail = writer@example.com\n"


@pytest.fixture
def git_config_dir(tmp_path):
    """Point libgit2's system/xdg/global config lookup at an empty temp dir."""
    from pygit2 import settings
    from pygit2.enums import ConfigLevel

    levels = [ConfigLevel.SYSTEM, ConfigLevel.XDG, ConfigLevel.GLOBAL]
    saved = {level: settings.search_path[level] for level in levels}
    cfg_dir = tmp_path / "gitconfig"
    cfg_dir.mkdir()
    for level in levels:
        settings.search_path[level] = str(cfg_dir)
    yield cfg_dir
    for level, path in saved.items():
        settings.search_path[level] = path


@pytest.fixture
def git_identity(git_config_dir):
    """Global git config with user.name and user.email set."""
    (git_config_dir / ".gitconfig").write_text(GIT_IDENTITY)
    return git_config_dir


@pytest.fixture
def repo_dir(tmp_path):
    return tmp_path / "db"


@pytest.fixture
def git_store(repo_dir, git_identity):
    return JournalStore.open_or_init(repo_dir)


@pytest.fixture
def memory_store(repo_dir):
    return JournalStore.open_or_init(repo_dir, backend_factory=MemoryBackend.open_or_init)


@pytest.fixture(params=["git", "memory"])
def store(request):
    """Fresh store on each backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def add_entry():
    """Write an entry file and commit it; returns the point id."""

    def _add(store: JournalStore, name: str, content: str) -> str:
        (store.root_path / name).write_text(content)
        return store.commit_entry(name)

    return _add

