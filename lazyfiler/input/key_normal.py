"""Normal-mode keyboard handling."""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping

from ..bookmarks import MAX_BOOKMARKS
from ..interaction.actions import BrowserActions
from .key_registry import KeyComboBinding, KeyComboRegistry, normalize_key_token

LOGGER = logging.getLogger(__name__)


def build_normal_registry(
    actions: BrowserActions,
    keybinds: Mapping[str, tuple[str, ...]],
) -> KeyComboRegistry:
    """Bind each configured action name to its ``BrowserActions`` method.

    Digits ``1``-``9`` jump to the matching bookmark unless a keybind claims them.
    """
    registry = KeyComboRegistry(normalize=normalize_key_token)
    for number in range(1, MAX_BOOKMARKS + 1):
        registry.register_binding(
            KeyComboBinding((str(number),), functools.partial(actions.jump_to_bookmark, number))
        )
    for action_name, combos in keybinds.items():
        handler = getattr(actions, action_name, None)
        if handler is None or action_name.startswith("_") or not callable(handler):
            LOGGER.warning("ignoring keybind for unknown action %r", action_name)
            continue
        for combo in combos:
            if combo in registry:
                LOGGER.info("key %r rebound to %s", combo, action_name)
        registry.register_binding(KeyComboBinding(tuple(combos), handler))
    return registry


def handle_normal_key(key: str, registry: KeyComboRegistry) -> bool:
    """Dispatch ``key``; unbound keys are ignored and return ``False``."""
    handled = registry.dispatch(key)
    return bool(handled)
