"""Current-location model: one path plus the snapshot of its entries.

Navigation never leaves partial state behind: the new listing is taken first
and ``current_path``/``entries`` are swapped only when it succeeds.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import NavigationFailure
from .fs import list_directory
from .types import Entry

LOGGER = logging.getLogger(__name__)


class DirectoryModel:
    """Single source of truth for what exists at the current location."""

    def __init__(self, start_path: Path) -> None:
        """List ``start_path``; raises ``NavigationFailure`` when it cannot be listed."""
        resolved = Path(start_path).expanduser().resolve()
        self._entries = list_directory(resolved)
        self._current_path = resolved
        self.last_failure: NavigationFailure | None = None

    @property
    def current_path(self) -> Path:
        return self._current_path

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def find_index(self, name: str) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.name == name:
                return index
        return None

    def _replace(self, path: Path) -> bool:
        try:
            entries = list_directory(path)
        except NavigationFailure as exc:
            LOGGER.info("navigation to %s refused: %s", path, exc)
            self.last_failure = exc
            return False
        self._current_path = path
        self._entries = entries
        self.last_failure = None
        return True

    def navigate_into(self, name: str) -> bool:
        """Descend into the directory entry ``name`` of the current listing."""
        index = self.find_index(name)
        if index is None or not self._entries[index].is_dir:
            self.last_failure = NavigationFailure(
                self._current_path / name, NavigationFailure.NOT_A_DIRECTORY
            )
            return False
        return self._replace(self._current_path / name)

    def navigate_to_parent(self) -> bool:
        """Ascend one level; a no-op returning ``False`` at the filesystem root."""
        parent = self._current_path.parent
        if parent == self._current_path:
            self.last_failure = None
            return False
        return self._replace(parent)

    def navigate_to_path(self, path: Path) -> bool:
        """Jump to an absolute directory path, e.g. for bookmarks."""
        target = Path(path).expanduser()
        if not target.is_absolute():
            target = self._current_path / target
        if not target.is_dir():
            reason = NavigationFailure.NOT_A_DIRECTORY if target.exists() else NavigationFailure.NOT_FOUND
            self.last_failure = NavigationFailure(target, reason)
            return False
        return self._replace(target.resolve())

    def refresh(self) -> bool:
        """Relist the unchanged current path, keeping the old snapshot on failure."""
        return self._replace(self._current_path)
