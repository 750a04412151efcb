"""Route a key token to the handler for the current interaction mode."""

from __future__ import annotations

from ..interaction.state import InteractionState
from .key_filter import handle_filter_key
from .key_normal import handle_normal_key
from .key_registry import KeyComboRegistry


class KeyDispatcher:
    """Filter editing captures every key; otherwise keybindings apply."""

    def __init__(self, state: InteractionState, registry: KeyComboRegistry) -> None:
        self.state = state
        self.registry = registry

    def dispatch(self, key: str) -> bool:
        if not key:
            return False
        if self.state.filter_editing:
            return handle_filter_key(key, self.state)
        return handle_normal_key(key, self.registry)
