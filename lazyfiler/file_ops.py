"""Filesystem mutation primitives used by create and bulk actions.

Each call either completes or raises ``OSError``; deciding when to call them
and how to report failures is the caller's job.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path


class FileOperations:
    """Thin wrapper over ``os``/``shutil`` so actions can be tested with fakes."""

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def create_file(self, path: Path) -> None:
        # raises FileExistsError rather than truncating
        with open(path, "x", encoding="utf-8"):
            pass

    def create_directory(self, path: Path) -> None:
        path.mkdir()

    def move(self, source: Path, destination: Path) -> None:
        shutil.move(str(source), str(destination))

    def copy(self, source: Path, destination: Path) -> None:
        if source.is_dir() and not source.is_symlink():
            shutil.copytree(source, destination, symlinks=True)
        else:
            shutil.copy2(source, destination, follow_symlinks=False)

    def delete(self, path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
