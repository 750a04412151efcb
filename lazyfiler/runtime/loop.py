"""Main interactive event loop for the terminal UI.

The loop is wiring only: rendering, key decoding, and dispatch are
injected so behaviour lives in the renderer and the key handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..interaction.state import InteractionState

LOGGER = logging.getLogger(__name__)


def run_main_loop(
    state: InteractionState,
    render: Callable[[InteractionState], None],
    read_key: Callable[[], str],
    dispatch: Callable[[str], bool],
) -> None:
    """Run until an action requests quit.

    Each iteration renders when dirty, blocks for one key, clears the
    previous transient status message, and dispatches the key.
    """
    while not state.quit_requested:
        if state.dirty:
            render(state)
        try:
            key = read_key()
        except KeyboardInterrupt:
            continue
        if not key:
            continue
        if state.status_message:
            state.status_message = ""
            state.dirty = True
        LOGGER.debug("key %r", key)
        dispatch(key)
