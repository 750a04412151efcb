"""Directory listing model: entry types, filesystem scan, navigation."""

from .fs import entry_sort_key, list_directory
from .model import DirectoryModel
from .types import Entry, EntryKind

__all__ = [
    "DirectoryModel",
    "Entry",
    "EntryKind",
    "entry_sort_key",
    "list_directory",
]
