"""Substring filter over entry names."""

from __future__ import annotations

from collections.abc import Iterable

from ..directory_model import Entry


def filter_entries(entries: Iterable[Entry], query: str) -> tuple[Entry, ...]:
    """Return entries whose name contains ``query`` case-insensitively, order kept."""
    if not query:
        return tuple(entries)
    needle = query.casefold()
    return tuple(entry for entry in entries if needle in entry.name.casefold())
