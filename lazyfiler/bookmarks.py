"""Persistent named directory bookmarks, addressable by slot 1-9.

Stored as a JSON list of ``{"name", "path"}`` objects. A missing or
malformed file loads as an empty store. Paths that are not valid UTF-8 are
written with ``surrogateescape`` so they survive a round trip. Mutations are
rolled back when the file cannot be written.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

LOGGER = logging.getLogger(__name__)

MAX_BOOKMARKS = 9
FS_ERRORS = "surrogateescape"

EMPTY_NAME = "empty_name"
DUPLICATE_NAME = "duplicate_name"
DUPLICATE_PATH = "duplicate_path"
FULL = "full"


@dataclass(frozen=True)
class Bookmark:
    name: str
    path: Path


def _normalize_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


class BookmarkStore:
    """In-memory bookmark list backed by a JSON file."""

    def __init__(self, storage_path: Path) -> None:
        self.storage_path = Path(storage_path)
        self._bookmarks: list[Bookmark] = []

    def __len__(self) -> int:
        return len(self._bookmarks)

    def load(self) -> bool:
        """Replace the in-memory list with the file contents.

        Returns ``True`` even when the file is absent or unreadable; in that
        case the store is simply empty.
        """
        self._bookmarks = []
        try:
            raw = json.loads(self.storage_path.read_text(encoding="utf-8", errors=FS_ERRORS))
        except FileNotFoundError:
            return True
        except (OSError, ValueError) as exc:
            LOGGER.warning("ignoring unreadable bookmarks %s: %s", self.storage_path, exc)
            return True
        if not isinstance(raw, list):
            return True
        for item in raw:
            if not isinstance(item, dict):
                continue
            name = item.get("name")
            path = item.get("path")
            if not isinstance(name, str) or not name.strip() or not isinstance(path, str) or not path:
                continue
            if self.rejection_reason(Path(path), name) is not None:
                continue
            self._bookmarks.append(Bookmark(name=name.strip(), path=Path(path)))
        return True

    def save(self) -> bool:
        payload = [{"name": b.name, "path": str(b.path)} for b in self.list()]
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
                errors=FS_ERRORS,
            )
        except (OSError, ValueError) as exc:
            LOGGER.warning("could not write bookmarks %s: %s", self.storage_path, exc)
            return False
        return True

    def rejection_reason(self, path: Path, name: str) -> str | None:
        """Return why ``add(path, name)`` would be refused, or ``None``."""
        cleaned = name.strip()
        if not cleaned:
            return EMPTY_NAME
        if any(b.name == cleaned for b in self._bookmarks):
            return DUPLICATE_NAME
        target = _normalize_path(path)
        if any(_normalize_path(b.path) == target for b in self._bookmarks):
            return DUPLICATE_PATH
        if len(self._bookmarks) >= MAX_BOOKMARKS:
            return FULL
        return None

    def _commit(self, bookmarks: list[Bookmark]) -> bool:
        previous = self._bookmarks
        self._bookmarks = bookmarks
        if self.save():
            return True
        self._bookmarks = previous
        return False

    def add(self, path: Path, name: str) -> bool:
        """Add and persist; ``False`` if rejected or the file could not be written."""
        if self.rejection_reason(path, name) is not None:
            return False
        return self._commit([*self._bookmarks, Bookmark(name=name.strip(), path=_normalize_path(path))])

    def remove(self, name: str) -> bool:
        """Remove and persist; ``False`` if absent or the file could not be written."""
        remaining = [b for b in self._bookmarks if b.name != name]
        if len(remaining) == len(self._bookmarks):
            return False
        return self._commit(remaining)

    def list(self) -> list[Bookmark]:
        """Bookmarks in slot order, alphabetical by name."""
        return sorted(self._bookmarks, key=lambda b: b.name)

    def get_path(self, name: str) -> Path | None:
        for bookmark in self._bookmarks:
            if bookmark.name == name:
                return bookmark.path
        return None

    def find_by_number(self, number: int) -> Bookmark | None:
        """Return the bookmark in 1-based slot ``number``."""
        ordered = self.list()
        if 1 <= number <= len(ordered):
            return ordered[number - 1]
        return None
