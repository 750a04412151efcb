"""Bulk move/copy/delete over the selection set.

Per-item failures are collected and never abort the rest of the batch.
Delete outcomes are decided by re-checking the path, not by the call result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..file_ops import FileOperations

LOGGER = logging.getLogger(__name__)

MOVE = "move"
COPY = "copy"


@dataclass
class BulkResult:
    """Aggregated outcome of one bulk operation."""

    succeeded: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def all_succeeded(self) -> bool:
        return not self.failures and not self.skipped


def run_bulk_transfer(
    names: list[str],
    source_dir: Path,
    dest_dir: Path,
    mode: str,
    fs: FileOperations,
) -> BulkResult:
    """Move or copy each named item from ``source_dir`` into ``dest_dir``."""
    if mode not in {MOVE, COPY}:
        raise ValueError(f"unknown transfer mode: {mode}")
    result = BulkResult()
    for name in names:
        source = source_dir / name
        destination = dest_dir / name
        if not fs.exists(source):
            result.failures.append(f"{name}: not found")
            continue
        if fs.exists(destination):
            result.skipped.append(f"{name}: already exists in {dest_dir}")
            continue
        try:
            if mode == MOVE:
                fs.move(source, destination)
            else:
                fs.copy(source, destination)
        except OSError as exc:
            LOGGER.warning("%s %s -> %s failed: %s", mode, source, destination, exc)
            result.failures.append(f"{name}: {exc.strerror or exc}")
            continue
        result.succeeded.append(name)
    return result


def run_bulk_delete(names: list[str], source_dir: Path, fs: FileOperations) -> BulkResult:
    """Delete each named item, verifying afterwards that it is really gone."""
    result = BulkResult()
    for name in names:
        target = source_dir / name
        if not fs.exists(target):
            result.failures.append(f"{name}: not found")
            continue
        try:
            fs.delete(target)
        except OSError as exc:
            LOGGER.warning("delete %s failed: %s", target, exc)
            result.failures.append(f"{name}: {exc.strerror or exc}")
            continue
        if fs.exists(target):
            result.failures.append(f"{name}: still present after delete")
            continue
        result.succeeded.append(name)
    return result
