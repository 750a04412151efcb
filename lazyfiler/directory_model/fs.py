"""Filesystem listing for the directory model.

``list_directory`` is a read-only stat pass; failures are raised as
``NavigationFailure`` with a machine-readable reason.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from ..errors import NavigationFailure
from .types import Entry, EntryKind

LOGGER = logging.getLogger(__name__)


def entry_sort_key(entry: Entry) -> tuple[str, str]:
    """Case-insensitive name order with the raw name as tie-breaker."""
    return entry.name.casefold(), entry.name


def _classify(child: os.DirEntry) -> tuple[EntryKind, int]:
    """Return ``(kind, size_bytes)`` for one scandir entry."""
    try:
        is_dir = child.is_dir()
    except OSError:
        is_dir = False
    if is_dir:
        return EntryKind.DIRECTORY, 0

    try:
        size = int(child.stat().st_size)
    except OSError:
        # Dangling symlink or entry removed mid-scan.
        size = 0
    if os.access(child.path, os.X_OK):
        return EntryKind.EXECUTABLE, size
    return EntryKind.FILE, size


def _failure_for(path: Path, exc: OSError) -> NavigationFailure:
    if isinstance(exc, FileNotFoundError):
        reason = NavigationFailure.NOT_FOUND
    elif isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
        reason = NavigationFailure.NOT_A_DIRECTORY
    elif isinstance(exc, PermissionError):
        reason = NavigationFailure.PERMISSION_DENIED
    else:
        reason = NavigationFailure.READ_ERROR
    return NavigationFailure(path, reason, exc.strerror or "")


def list_directory(path: Path) -> tuple[Entry, ...]:
    """List the direct children of ``path`` as sorted ``Entry`` records."""
    entries: list[Entry] = []
    try:
        with os.scandir(path) as it:
            for child in it:
                kind, size = _classify(child)
                entries.append(Entry(name=child.name, path=path / child.name, kind=kind, size_bytes=size))
    except OSError as exc:
        LOGGER.debug("listing %s failed: %s", path, exc)
        raise _failure_for(path, exc) from exc

    entries.sort(key=entry_sort_key)
    return tuple(entries)
