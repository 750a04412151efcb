"""Terminal control helpers for the TUI session.

Owns the raw-mode lifecycle and alternate-screen switching. ``suspended``
hands the real terminal back to a child process for its duration.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import termios
import tty

LOGGER = logging.getLogger(__name__)

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"
BELL = b"\a"


class TerminalController:
    """Manage terminal mode transitions around the browser session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, restore tty attributes."""
        os.write(self.stdout_fd, LEAVE_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._active = False

    def bell(self) -> None:
        os.write(self.stdout_fd, BELL)

    @staticmethod
    def size() -> tuple[int, int]:
        """Return ``(columns, rows)`` of the controlling terminal."""
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Temporarily restore the normal terminal for an external program."""
        if not self._active:
            yield
            return
        LOGGER.debug("suspending TUI mode")
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()
            LOGGER.debug("resumed TUI mode")
