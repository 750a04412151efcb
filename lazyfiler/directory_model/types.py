"""Core entry types for directory listings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """Closed set of entry kinds the browser distinguishes."""

    FILE = "file"
    DIRECTORY = "directory"
    EXECUTABLE = "executable"


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory, snapshotted at listing time."""

    name: str
    path: Path
    kind: EntryKind
    size_bytes: int = 0

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is not EntryKind.DIRECTORY
