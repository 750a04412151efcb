"""Key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens bound to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


def normalize_key_token(key: str) -> str:
    """Fold config spellings of special keys onto reader tokens."""
    upper = key.upper()
    if key == " " or upper == "SPACE":
        return "SPACE"
    if upper in {"ENTER", "RETURN"}:
        return "ENTER"
    if upper in {"ESC", "ESCAPE"}:
        return "ESC"
    if upper == "BACKSPACE":
        return "BACKSPACE"
    return key


class KeyComboRegistry:
    """Key-dispatch table with an optional normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def __contains__(self, key: str) -> bool:
        return self._normalize(key) in self._handlers

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        return handler()
