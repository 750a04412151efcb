"""Modal dialog state machines.

Each modal consumes one key at a time through ``handle_key`` and returns
``None`` while it still awaits input, or a ``ModalResolution`` once it is
done. Drawing and the key loop live in ``modal_runner``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..ui_theme import UITheme

CANCEL_KEYS = frozenset({"ESC", "q"})


@dataclass(frozen=True)
class ModalResolution:
    accepted: bool
    value: object = None


CANCELLED = ModalResolution(accepted=False)


def is_text_input(key: str) -> bool:
    """Printable ASCII or any non-ASCII character counts as typed text."""
    if len(key) != 1:
        return False
    code = ord(key)
    return 32 <= code < 127 or code > 127


class Modal:
    """Base class: a title, body lines, and a key transition function."""

    title: str | None = None
    destructive: bool = False

    def lines(self) -> list[str]:
        raise NotImplementedError

    def content_color(self, theme: UITheme) -> str:
        return theme.dialog_text

    def handle_key(self, key: str) -> ModalResolution | None:
        raise NotImplementedError


class ConfirmModal(Modal):
    """Yes/no question that defaults to "no"."""

    def __init__(self, title: str, body: Sequence[str], hint: str, destructive: bool = False) -> None:
        self.title = title
        self.body = list(body)
        self.hint = hint
        self.destructive = destructive

    def lines(self) -> list[str]:
        return [*self.body, "", self.hint]

    def content_color(self, theme: UITheme) -> str:
        return theme.dialog_error if self.destructive else theme.dialog_text

    def handle_key(self, key: str) -> ModalResolution | None:
        if key in {"y", "Y"}:
            return ModalResolution(accepted=True)
        if key in {"n", "N", "ENTER"} or key in CANCEL_KEYS:
            return CANCELLED
        return None


class NoticeModal(Modal):
    """Message box dismissed by any key."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"

    def __init__(self, title: str | None, body: Sequence[str], footer: str = "", tone: str = INFO) -> None:
        self.title = title
        self.body = list(body)
        self.footer = footer
        self.tone = tone

    def lines(self) -> list[str]:
        if self.footer:
            return [*self.body, "", self.footer]
        return list(self.body)

    def content_color(self, theme: UITheme) -> str:
        if self.tone == self.SUCCESS:
            return theme.dialog_success
        if self.tone == self.ERROR:
            return theme.dialog_error
        return theme.dialog_text

    def handle_key(self, key: str) -> ModalResolution | None:
        return ModalResolution(accepted=True)


class MenuModal(Modal):
    """Single-key menu: each option key resolves to its mapped value."""

    def __init__(self, title: str, body: Sequence[str], options: Mapping[str, object]) -> None:
        self.title = title
        self.body = list(body)
        self.options = dict(options)

    def lines(self) -> list[str]:
        return list(self.body)

    def handle_key(self, key: str) -> ModalResolution | None:
        if key in self.options:
            return ModalResolution(accepted=True, value=self.options[key])
        if key in CANCEL_KEYS:
            return CANCELLED
        return None


class PromptModal(Modal):
    """Single-line text input; Enter submits, Escape cancels."""

    CURSOR = "_"

    def __init__(self, title: str | None, prompt: str, initial: str = "") -> None:
        self.title = title
        self.prompt = prompt
        self.value = initial

    def lines(self) -> list[str]:
        return [f"{self.prompt}{self.value}{self.CURSOR}"]

    def handle_key(self, key: str) -> ModalResolution | None:
        if key == "ENTER":
            return ModalResolution(accepted=True, value=self.value)
        if key == "ESC":
            return CANCELLED
        if key == "BACKSPACE":
            self.value = self.value[:-1]
            return None
        if key == "SPACE":
            key = " "
        if is_text_input(key):
            self.value += key
        return None
