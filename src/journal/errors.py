"""Journal store error taxonomy."""


class JournalStoreError(Exception):
    """Base journal store error."""


class BackendUnavailable(JournalStoreError):
    """Repository could not be opened nor initialized."""


class ReferenceResolutionFailure(JournalStoreError):
    """A line of history or its tip could not be resolved."""


class StagingFailure(JournalStoreError):
    """A file to be recorded is missing or unreadable."""


class IdentityMissing(JournalStoreError):
    """No author identity configured for recording points."""


class IoFailure(JournalStoreError):
    """Filesystem error while listing, reading or updating the working state."""
