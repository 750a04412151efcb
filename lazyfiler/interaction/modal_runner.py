"""Blocking driver for modal dialogs.

Modals are kept on an explicit stack. The runner draws the top modal as a
floating window, feeds it keys from the same reader the main loop uses, and
on resolution clears the window and requests a full redraw.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..render import FloatingWindow, Renderer
from .modals import Modal, ModalResolution
from .state import InteractionState

LOGGER = logging.getLogger(__name__)


class ModalRunner:
    """Runs modals to completion against one renderer and key source."""

    def __init__(
        self,
        renderer: Renderer,
        read_key: Callable[[], str],
        state: InteractionState,
        bell: Callable[[], None] = lambda: None,
    ) -> None:
        self._renderer = renderer
        self._read_key = read_key
        self._state = state
        self._bell = bell
        self._stack: list[Modal] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _draw(self, modal: Modal) -> FloatingWindow:
        return self._renderer.draw_floating_window(
            modal.lines(),
            title=modal.title,
            content_color=modal.content_color(self._renderer.theme),
        )

    def run(self, modal: Modal) -> ModalResolution:
        """Block until ``modal`` resolves and return its resolution."""
        self._stack.append(modal)
        LOGGER.debug("modal opened: %s (depth %d)", type(modal).__name__, len(self._stack))
        if modal.destructive:
            self._bell()
        rect = self._draw(modal)
        try:
            while True:
                key = self._read_key()
                if not key:
                    continue
                resolution = modal.handle_key(key)
                if resolution is not None:
                    return resolution
                next_rect = self._renderer.floating_window_rect(modal.lines(), modal.title)
                if next_rect != rect:
                    self._renderer.clear_floating_window(rect)
                rect = self._draw(modal)
        finally:
            self._stack.pop()
            self._renderer.clear_floating_window(rect)
            for parent in self._stack:
                self._draw(parent)
            self._state.mark_dirty(full=True)
