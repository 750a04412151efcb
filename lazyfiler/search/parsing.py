"""Parsers for the text output of external search tools."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_LOCATION_RE = re.compile(r"^(.+?):(\d+):")


@dataclass(frozen=True)
class Location:
    path: Path
    line: int  # 1-based


@dataclass(frozen=True)
class HistoryEntry:
    path: Path
    score: float


def parse_location_line(line: str, base: Path | None = None) -> Location | None:
    """Parse a grep-style ``path:line:`` prefix, resolving relative paths against ``base``."""
    match = _LOCATION_RE.match(line.strip())
    if match is None:
        return None
    path = Path(match.group(1))
    if base is not None and not path.is_absolute():
        path = base / path
    return Location(path=path, line=int(match.group(2)))


def parse_selected_path(output: str, base: Path) -> Path | None:
    """Return the first non-empty line of picker output as a path under ``base``."""
    for raw in output.splitlines():
        candidate = raw.strip()
        if candidate:
            path = Path(candidate)
            return path if path.is_absolute() else (base / path)
    return None


def parse_zoxide_scores(output: str) -> list[HistoryEntry]:
    """Parse ``zoxide query --list --score`` lines of the form ``  12.5 /path``."""
    entries: list[HistoryEntry] = []
    for raw in output.splitlines():
        parts = raw.strip().split(None, 1)
        if len(parts) != 2:
            continue
        try:
            score = float(parts[0])
        except ValueError:
            continue
        entries.append(HistoryEntry(path=Path(parts[1]), score=score))
    return entries
