"""Mutable interaction state shared by key dispatch and the renderer.

``InteractionState`` owns cursor, filter session, selection and redraw
flags. ``FilterState`` is an immutable record replaced on every change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..directory_model import DirectoryModel, Entry
from .filtering import filter_entries


@dataclass(frozen=True)
class FilterState:
    """One incremental filter session over a captured entry snapshot."""

    editing: bool = False
    query: str = ""
    snapshot: tuple[Entry, ...] = ()
    filtered: tuple[Entry, ...] = ()

    @property
    def engaged(self) -> bool:
        """Filtering drives the view while editing or while a query persists."""
        return self.editing or bool(self.query)

    def with_query(self, query: str) -> FilterState:
        return replace(self, query=query, filtered=filter_entries(self.snapshot, query))


EMPTY_FILTER = FilterState()


@dataclass
class InteractionState:
    """Everything a keystroke can change, apart from the directory listing."""

    model: DirectoryModel
    cursor: int = 0
    filter: FilterState = EMPTY_FILTER
    selection: set[str] = field(default_factory=set)
    dirty: bool = True
    needs_full_redraw: bool = True
    status_message: str = ""
    quit_requested: bool = False

    @property
    def filter_editing(self) -> bool:
        return self.filter.editing

    def active_entries(self) -> tuple[Entry, ...]:
        if self.filter.engaged:
            return self.filter.filtered
        return self.model.entries

    def current_entry(self) -> Entry | None:
        entries = self.active_entries()
        if 0 <= self.cursor < len(entries):
            return entries[self.cursor]
        return None

    def mark_dirty(self, *, full: bool = False) -> None:
        self.dirty = True
        if full:
            self.needs_full_redraw = True

    def report(self, message: str) -> None:
        """Show a transient message in the footer until the next key."""
        self.status_message = message
        self.dirty = True

    # Cursor

    def clamp_cursor(self) -> None:
        upper = max(0, len(self.active_entries()) - 1)
        self.cursor = max(0, min(self.cursor, upper))

    def move_cursor(self, delta: int) -> bool:
        previous = self.cursor
        self.cursor += delta
        self.clamp_cursor()
        if self.cursor != previous:
            self.dirty = True
            return True
        return False

    def move_to_top(self) -> bool:
        return self.move_cursor(-self.cursor)

    def move_to_bottom(self) -> bool:
        return self.move_cursor(len(self.active_entries()))

    def select_name(self, name: str) -> bool:
        """Place the cursor on the active entry called ``name`` if present."""
        for index, entry in enumerate(self.active_entries()):
            if entry.name == name:
                self.cursor = index
                self.dirty = True
                return True
        return False

    # Filter session

    def begin_filter(self) -> None:
        """Resume editing a persisted query, or start a fresh session."""
        if self.filter.query:
            self.filter = replace(self.filter, editing=True)
        else:
            snapshot = self.active_entries()
            self.filter = FilterState(editing=True, query="", snapshot=snapshot, filtered=snapshot)
            self.cursor = 0
        self.dirty = True

    def apply_filter_query(self, query: str) -> None:
        self.filter = self.filter.with_query(query)
        self.clamp_cursor()
        self.dirty = True

    def finish_filter_editing(self) -> None:
        """Leave editing while keeping the query and filtered subset."""
        self.filter = replace(self.filter, editing=False)
        self.clamp_cursor()
        self.dirty = True

    def clear_filter(self) -> None:
        self.filter = EMPTY_FILTER
        self.cursor = 0
        self.dirty = True

    # Selection

    def toggle_selection(self) -> bool:
        entry = self.current_entry()
        if entry is None:
            return False
        if entry.name in self.selection:
            self.selection.discard(entry.name)
        else:
            self.selection.add(entry.name)
        self.dirty = True
        return True

    def is_selected(self, entry: Entry) -> bool:
        return entry.name in self.selection

    def selected_names(self) -> list[str]:
        return sorted(self.selection, key=lambda name: (name.casefold(), name))

    def clear_selection(self) -> None:
        if self.selection:
            self.selection.clear()
            self.dirty = True

    # Listing changes

    def reset_after_directory_change(self) -> None:
        """Cursor to the top, filter and selection dropped after a location change."""
        self.cursor = 0
        self.filter = EMPTY_FILTER
        self.selection.clear()
        self.mark_dirty(full=True)

    def reload_after_refresh(self) -> None:
        """Re-snapshot an engaged filter against the fresh listing, else clamp."""
        if self.filter.engaged:
            snapshot = self.model.entries
            self.filter = replace(self.filter, snapshot=snapshot).with_query(self.filter.query)
        self.clamp_cursor()
        self.mark_dirty(full=True)
