"""Frame rendering for the two-pane browser and floating dialogs.

Frames are drawn incrementally: every row is written at an absolute cursor
position and padded to its exact cell width, so the screen is only cleared
when a full redraw was requested (startup, refresh, closed dialog).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..directory_model import Entry, EntryKind
from ..preview import FilePreview, PreviewKind, PreviewResult
from ..runtime.messages import MessageKey, Messages
from ..ui_theme import UITheme
from .highlight import colorize_span
from .text import (
    SIZE_FIELD_WIDTH,
    display_width,
    format_size,
    pad_to_width,
    tail_to_width,
    truncate_to_width,
    wrap_line_spans,
)

if TYPE_CHECKING:
    from ..interaction.state import InteractionState

LOGGER = logging.getLogger(__name__)

HEADER_ROWS = 2
TITLE_PREFIX = "📁 lazyfiler - "
SELECTION_MARK = "✓ "
NO_MARK = "  "
DIVIDER = "│"
PREVIEW_TOP_ROWS = 2

_ICONS_BY_SUFFIX = {
    ".py": "🐍",
    ".rb": "💎",
    ".js": "📜",
    ".ts": "📜",
}


def stdout_writer(data: str) -> None:
    os.write(sys.stdout.fileno(), data.encode("utf-8", errors="replace"))


@dataclass(frozen=True)
class ScreenGeometry:
    """Terminal size snapshot, re-read only at explicit refresh points."""

    width: int
    height: int

    @property
    def left_width(self) -> int:
        return self.width // 2

    @property
    def right_width(self) -> int:
        return self.width - self.left_width

    @property
    def content_height(self) -> int:
        return max(0, self.height - 4)

    @property
    def footer_row(self) -> int:
        return max(1, self.height - 1)

    @property
    def preview_safe_width(self) -> int:
        """Cells usable right of the divider, keeping one cell of margin."""
        return max(0, self.right_width - 2)


@dataclass(frozen=True)
class FloatingWindow:
    """Screen rectangle occupied by a floating window (1-based origin)."""

    x: int
    y: int
    width: int
    height: int


def entry_icon(entry: Entry) -> str:
    if entry.kind is EntryKind.DIRECTORY:
        return "📁"
    if entry.kind is EntryKind.EXECUTABLE:
        return "⚡"
    return _ICONS_BY_SUFFIX.get(entry.path.suffix.lower(), "📄")


def move_to(row: int, col: int = 1) -> str:
    return f"\033[{max(1, row)};{max(1, col)}H"


def abbreviate_left(prefix: str, body: str, suffix: str, width: int) -> str:
    """Fit ``prefix + body + suffix`` into ``width`` by eliding the start of ``body``.

    The suffix stays visible whenever it fits on its own.
    """
    full = prefix + body + suffix
    if display_width(full) <= width:
        return full
    room = width - display_width(prefix) - display_width(suffix)
    if room >= 4:
        return prefix + tail_to_width(body, room) + suffix
    return tail_to_width(body + suffix, width)


def screen_center(geometry: ScreenGeometry, box_width: int, box_height: int) -> tuple[int, int]:
    """Return the 1-based top-left corner that centres a box on screen."""
    x = (geometry.width - box_width) // 2 + 1
    y = (geometry.height - box_height) // 2 + 1
    return max(1, x), max(1, y)


class Renderer:
    """Draws frames and floating windows for one terminal."""

    def __init__(
        self,
        geometry: ScreenGeometry,
        theme: UITheme,
        messages: Messages,
        preview: FilePreview,
        base_directory: Path | None = None,
        writer: Callable[[str], None] = stdout_writer,
    ) -> None:
        self.geometry = geometry
        self.theme = theme
        self.messages = messages
        self.preview = preview
        self.base_directory = base_directory
        self._write = writer
        self._preview_cache: dict[Path, PreviewResult] = {}

    def update_geometry(self, geometry: ScreenGeometry) -> None:
        self.geometry = geometry

    def invalidate_preview_cache(self) -> None:
        self._preview_cache.clear()

    # Frame

    def render_frame(self, state: InteractionState) -> None:
        out: list[str] = []
        if state.needs_full_redraw:
            self.invalidate_preview_cache()
            out.append("\033[2J")
        out.append("\033[H")
        out.extend(self.header_rows(state))
        out.extend(self.body_rows(state))
        out.append(self.footer_row(state))
        self._write("".join(out))
        state.needs_full_redraw = False
        state.dirty = False

    def header_rows(self, state: InteractionState) -> list[str]:
        theme = self.theme
        width = self.geometry.width
        suffix = ""
        if state.filter.engaged:
            suffix = " " + self.messages.get(MessageKey.FILTER_TAG, query=state.filter.query)
        title = abbreviate_left(TITLE_PREFIX, str(state.model.current_path), suffix, width)

        base = self.base_directory if self.base_directory is not None else state.model.current_path
        base_label = self.messages.get(MessageKey.STATUS_BASE, path="")
        selected = " | " + self.messages.get(MessageKey.STATUS_SELECTED, count=len(state.selection))
        status = abbreviate_left(base_label, str(base), selected, width)
        return [
            move_to(1) + theme.reverse + pad_to_width(title, width) + theme.reset,
            move_to(2) + theme.status_bar + pad_to_width(status, width) + theme.reset,
        ]

    def list_row(self, entry: Entry | None, *, is_cursor: bool, is_selected: bool) -> str:
        """Return one left-pane row occupying exactly ``left_width`` cells."""
        theme = self.theme
        row_width = self.geometry.left_width
        content_width = max(0, row_width - 1)
        if row_width <= 0:
            return ""
        if entry is None:
            return " " * row_width

        mark = SELECTION_MARK if is_selected else NO_MARK
        icon = entry_icon(entry)
        lead = f"{mark}{icon} "
        size = format_size(entry.size_bytes) if not entry.is_dir else " " * SIZE_FIELD_WIDTH
        name_width = content_width - display_width(lead) - 1 - SIZE_FIELD_WIDTH
        if name_width < 4:
            size = ""
            name_width = content_width - display_width(lead)
        name = pad_to_width(truncate_to_width(entry.name, max(0, name_width)), max(0, name_width))
        tail = f" {size}" if size else ""

        if is_cursor or is_selected:
            style = theme.cursor if is_cursor else theme.marked
            plain = pad_to_width(lead + name + tail, content_width)
            return style + plain + theme.reset + " "

        name_color = {
            EntryKind.DIRECTORY: theme.directory,
            EntryKind.EXECUTABLE: theme.executable,
        }.get(entry.kind, theme.file)
        used = display_width(lead + name + tail)
        if used > content_width:
            return pad_to_width(lead + name + tail, content_width) + " "
        return (
            lead
            + name_color + name + theme.reset
            + (theme.size + tail + theme.reset if tail else "")
            + " " * (content_width - used)
            + " "
        )

    def visible_window(self, state: InteractionState) -> tuple[int, tuple[Entry, ...]]:
        height = self.geometry.content_height
        entries = state.active_entries()
        start = max(state.cursor - height // 2, 0)
        return start, entries[start : start + height]

    def preview_for(self, entry: Entry) -> PreviewResult:
        cached = self._preview_cache.get(entry.path)
        if cached is None:
            cached = self.preview.preview_file(entry.path)
            self._preview_cache[entry.path] = cached
        return cached

    def preview_rows(self, entry: Entry | None) -> list[str]:
        """Return the right pane's rows, each exactly ``right_width - 1`` cells."""
        geometry = self.geometry
        theme = self.theme
        safe = geometry.preview_safe_width
        pane_cells = max(0, geometry.right_width - 1)
        trailer = " " * (pane_cells - safe)
        blank = " " * pane_cells
        rows = [blank] * geometry.content_height
        if entry is None or not rows:
            return rows

        rows[0] = theme.preview_header + pad_to_width(f" {entry.name} ", safe) + theme.reset + trailer
        if entry.is_dir:
            return rows

        result = self.preview_for(entry)
        text_width = max(1, safe - 1)
        available = geometry.content_height - PREVIEW_TOP_ROWS
        body: list[str] = []
        if result.kind is PreviewKind.TEXT:
            for line_index, line in enumerate(result.lines):
                if len(body) >= available:
                    break
                token_row = result.token_rows[line_index] if line_index < len(result.token_rows) else None
                for start, end in wrap_line_spans(line, text_width):
                    if len(body) >= available:
                        break
                    segment = line[start:end]
                    padding = " " * max(0, text_width - display_width(segment))
                    if token_row:
                        segment = colorize_span(token_row, start, end)
                    body.append(" " + segment + padding)
        else:
            if result.kind is PreviewKind.BINARY:
                placeholder = [
                    f"({self.messages.get(MessageKey.FILE_BINARY)})",
                    self.messages.get(MessageKey.FILE_CANNOT_PREVIEW),
                ]
            else:
                placeholder = [f"{self.messages.get(MessageKey.FILE_ERROR_PREFIX)}:", result.message]
            body = [" " + pad_to_width(line, text_width) for line in placeholder[:available]]

        for offset, text in enumerate(body):
            rows[PREVIEW_TOP_ROWS + offset] = text + trailer
        return rows

    def body_rows(self, state: InteractionState) -> list[str]:
        geometry = self.geometry
        theme = self.theme
        start, window = self.visible_window(state)
        preview = self.preview_rows(state.current_entry())
        divider_col = geometry.left_width + 1
        out: list[str] = []
        for offset in range(geometry.content_height):
            screen_row = HEADER_ROWS + 1 + offset
            index = start + offset
            entry = window[offset] if offset < len(window) else None
            out.append(move_to(screen_row))
            out.append(
                self.list_row(
                    entry,
                    is_cursor=entry is not None and index == state.cursor,
                    is_selected=entry is not None and state.is_selected(entry),
                )
            )
            out.append(move_to(screen_row, divider_col) + theme.divider + DIVIDER + theme.reset)
            out.append(preview[offset])
        return out

    def footer_text(self, state: InteractionState) -> str:
        width = self.geometry.width
        if state.status_message:
            return state.status_message
        if state.filter.editing:
            return self.messages.get(MessageKey.HELP_FILTER_EDITING)
        if state.filter.engaged:
            return self.messages.get(MessageKey.HELP_FILTER_ACTIVE)
        full = self.messages.get(MessageKey.HELP_FULL)
        if display_width(full) <= width:
            return full
        return self.messages.get(MessageKey.HELP_SHORT)

    def footer_row(self, state: InteractionState) -> str:
        theme = self.theme
        return (
            move_to(self.geometry.footer_row)
            + theme.footer
            + pad_to_width(self.footer_text(state), self.geometry.width)
            + theme.reset
        )

    # Floating windows

    def floating_window_rect(self, lines: Sequence[str], title: str | None = None) -> FloatingWindow:
        geometry = self.geometry
        content_width = max([display_width(line) for line in lines] + [display_width(title or ""), 10])
        box_width = min(content_width + 4, max(4, geometry.width - 2))
        box_height = len(lines) + 2 + (2 if title else 0)
        box_height = min(box_height, max(3, geometry.height))
        x, y = screen_center(geometry, box_width, box_height)
        return FloatingWindow(x=x, y=y, width=box_width, height=box_height)

    def draw_floating_window(
        self,
        lines: Sequence[str],
        title: str | None = None,
        content_color: str = "",
    ) -> FloatingWindow:
        """Draw a centred bordered box; only its rectangle is written."""
        theme = self.theme
        rect = self.floating_window_rect(lines, title)
        inner = rect.width - 4
        border = theme.dialog_border
        reset = theme.reset
        rows: list[str] = [border + "┌" + "─" * (rect.width - 2) + "┐" + reset]
        if title:
            rows.append(
                border + "│" + reset + " " + theme.dialog_title + pad_to_width(title, inner) + reset + " "
                + border + "│" + reset
            )
            rows.append(border + "├" + "─" * (rect.width - 2) + "┤" + reset)
        interior_rows = rect.height - len(rows) - 1
        text_color = content_color or theme.dialog_text
        for index in range(max(0, interior_rows)):
            line = lines[index] if index < len(lines) else ""
            rows.append(
                border + "│" + reset + " " + text_color + pad_to_width(line, inner) + reset + " "
                + border + "│" + reset
            )
        rows.append(border + "└" + "─" * (rect.width - 2) + "┘" + reset)
        self._write("".join(move_to(rect.y + i, rect.x) + row for i, row in enumerate(rows)))
        return rect

    def clear_floating_window(self, rect: FloatingWindow) -> None:
        """Overwrite exactly ``rect`` with blanks."""
        blank = " " * rect.width
        self._write("".join(move_to(rect.y + i, rect.x) + blank for i in range(rect.height)))
