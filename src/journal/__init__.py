from .backends import GitBackend, HistoryBackend, MemoryBackend
from .errors import (
    BackendUnavailable,
    IdentityMissing,
    IoFailure,
    JournalStoreError,
    ReferenceResolutionFailure,
    StagingFailure,
)
from .models import Entry, Line, LineFilter, Point, Topic
from .store import JournalStore

__all__ = [
    "JournalStore",
    "HistoryBackend",
    "GitBackend",
    "MemoryBackend",
    "Entry",
    "Line",
    "LineFilter",
    "Point",
    "Topic",
    "JournalStoreError",
    "BackendUnavailable",
    "ReferenceResolutionFailure",
    "StagingFailure",
    "IdentityMissing",
    "IoFailure",
]
