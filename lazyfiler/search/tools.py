"""Subprocess adapter for fzf, ripgrep-all/ripgrep, find and zoxide.

All text-format assumptions about tool output live in ``search.parsing``;
this module only runs processes. Interactive pickers run with the TUI
suspended so they can own the terminal.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from pathlib import Path

from ..errors import ToolUnavailable
from .parsing import HistoryEntry, Location, parse_location_line, parse_selected_path, parse_zoxide_scores

LOGGER = logging.getLogger(__name__)

FZF = "fzf"
CONTENT_SEARCH_TOOLS = ("rga", "rg")
ZOXIDE = "zoxide"


@dataclass(frozen=True)
class ToolResult:
    output: str
    returncode: int


class ExternalToolRunner:
    """Runs external programs synchronously and captures their stdout."""

    def __init__(self, suspend_tui: Callable[[], AbstractContextManager[object]] | None = None) -> None:
        self._suspend_tui = suspend_tui if suspend_tui is not None else nullcontext

    def is_available(self, name: str) -> bool:
        return shutil.which(name) is not None

    def run(
        self,
        cmd: Sequence[str],
        cwd: Path | None = None,
        input_text: str | None = None,
        interactive: bool = False,
    ) -> ToolResult:
        """Run ``cmd`` to completion; raises ``ToolUnavailable`` if it is not installed."""
        if not self.is_available(cmd[0]):
            raise ToolUnavailable(cmd[0])
        LOGGER.debug("running %s in %s", list(cmd), cwd)
        context = self._suspend_tui() if interactive else nullcontext()
        with context:
            proc = subprocess.run(
                list(cmd),
                cwd=cwd,
                input=input_text,
                stdout=subprocess.PIPE,
                stderr=None if interactive else subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        return ToolResult(output=proc.stdout or "", returncode=proc.returncode)


def require_tool(runner: ExternalToolRunner, *candidates: str) -> str:
    """Return the first installed tool among ``candidates``."""
    for name in candidates:
        if runner.is_available(name):
            return name
    raise ToolUnavailable(" / ".join(candidates))


def pick_file_by_name(runner: ExternalToolRunner, directory: Path) -> Path | None:
    """List files below ``directory`` and let the operator pick one with fzf."""
    require_tool(runner, FZF)
    listing = runner.run(["find", ".", "-type", "f"], cwd=directory)
    if not listing.output.strip():
        return None
    picked = runner.run([FZF, "--preview", "cat {}"], cwd=directory, input_text=listing.output, interactive=True)
    if picked.returncode != 0:
        return None
    return parse_selected_path(picked.output, directory)


def search_content(runner: ExternalToolRunner, directory: Path, query: str) -> str:
    """Return raw ``path:line:text`` matches for ``query`` below ``directory``."""
    tool = require_tool(runner, *CONTENT_SEARCH_TOOLS)
    result = runner.run([tool, "--line-number", "--with-filename", "--", query, "."], cwd=directory)
    return result.output


def pick_location(runner: ExternalToolRunner, directory: Path, matches: str) -> Location | None:
    """Let the operator choose one match line with fzf and parse its location."""
    require_tool(runner, FZF)
    picked = runner.run([FZF], cwd=directory, input_text=matches, interactive=True)
    if picked.returncode != 0:
        return None
    for line in picked.output.splitlines():
        location = parse_location_line(line, directory)
        if location is not None:
            return location
    return None


def zoxide_history(runner: ExternalToolRunner) -> list[HistoryEntry]:
    """Return the zoxide directory database ordered by score, or ``[]`` if unavailable."""
    if not runner.is_available(ZOXIDE):
        return []
    result = runner.run([ZOXIDE, "query", "--list", "--score"])
    if result.returncode != 0:
        return []
    return parse_zoxide_scores(result.output)
