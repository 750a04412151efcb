"""Filter-editing keyboard handling."""

from __future__ import annotations

from ..interaction.modals import is_text_input
from ..interaction.state import InteractionState


def handle_filter_key(key: str, state: InteractionState) -> bool:
    """Edit the live filter query; every key is consumed while editing."""
    if not state.filter_editing:
        return False
    if key == "ESC":
        state.clear_filter()
        return True
    if key == "ENTER":
        state.finish_filter_editing()
        return True
    if key == "BACKSPACE":
        query = state.filter.query
        if query:
            state.apply_filter_query(query[:-1])
        else:
            state.clear_filter()
        return True
    if key == "SPACE":
        key = " "
    if is_text_input(key):
        state.apply_filter_query(state.filter.query + key)
    return True
