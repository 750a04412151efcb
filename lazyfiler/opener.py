"""External application launching for files and directories.

Chooses an application by file extension, builds the platform-specific
command line, and runs it while the TUI is suspended. Returns an error
message string instead of raising, for UI-friendly handling.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

from .runtime.config import AppConfig

LOGGER = logging.getLogger(__name__)

SYSTEM_OPENER = "open"
_VIM_LIKE = frozenset({"vi", "vim", "nvim", "view", "nano", "emacs", "micro", "kak", "hx"})


def platform_open_command(target: Path, platform: str | None = None) -> list[str]:
    """Return the OS "open with default application" command for ``target``."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return ["open", str(target)]
    if platform.startswith("win"):
        return ["cmd", "/c", "start", "", str(target)]
    return ["xdg-open", str(target)]


def build_open_command(
    application: str,
    target: Path,
    line: int | None = None,
    platform: str | None = None,
) -> list[str]:
    """Build argv for opening ``target`` (optionally at ``line``) with ``application``."""
    if application == SYSTEM_OPENER:
        return platform_open_command(target, platform)
    argv = shlex.split(application)
    if not argv:
        return platform_open_command(target, platform)
    if line is None:
        return [*argv, str(target)]
    program = Path(argv[0]).name
    if "code" in program:
        return [*argv, "--goto", f"{target}:{line}"]
    if program in _VIM_LIKE:
        return [*argv, f"+{line}", str(target)]
    return [*argv, str(target)]


class FileOpener:
    """Launch files and directories in external programs."""

    def __init__(
        self,
        config: AppConfig,
        suspend_tui: Callable[[], AbstractContextManager[object]] | None = None,
        platform: str | None = None,
    ) -> None:
        self.config = config
        self._suspend_tui = suspend_tui if suspend_tui is not None else nullcontext
        self._platform = platform

    def _run(self, argv: list[str]) -> str | None:
        if shutil.which(argv[0]) is None:
            return f"{argv[0]} is not installed"
        LOGGER.info("launching %s", argv)
        with self._suspend_tui():
            try:
                subprocess.run(argv, check=False)
            except OSError as exc:
                return f"failed to launch {argv[0]}: {exc}"
        return None

    def open_file(self, target: Path, line: int | None = None) -> str | None:
        """Open ``target`` in its configured application, optionally at ``line``."""
        if not target.exists():
            return f"{target}: not found"
        application = self.config.application_for(target)
        try:
            argv = build_open_command(application, target, line, self._platform)
        except ValueError as exc:
            return f"Cannot open: invalid command {application!r} ({exc})"
        return self._run(argv)

    def open_directory_in_explorer(self, directory: Path) -> str | None:
        """Show ``directory`` in the system file manager."""
        return self._run(platform_open_command(directory, self._platform))
