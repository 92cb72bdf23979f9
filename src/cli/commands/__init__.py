"""CLI command modules."""

from .history import journal
from .listing import list_cmd
from .note import note
from .show import show
from .topic import topic

__all__ = [
    "topic",
    "list_cmd",
    "note",
    "show",
    "journal",
]
