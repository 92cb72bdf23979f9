"""History backends: git for real stores, memory for tests."""

from .base import HistoryBackend
from .git import GitBackend
from .memory import MemoryBackend

__all__ = ["HistoryBackend", "GitBackend", "MemoryBackend"]
