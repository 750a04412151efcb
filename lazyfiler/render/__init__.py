"""Terminal rendering: text layout, preview colouring, frames and dialogs."""

from .renderer import FloatingWindow, Renderer, ScreenGeometry, screen_center, stdout_writer

__all__ = [
    "FloatingWindow",
    "Renderer",
    "ScreenGeometry",
    "screen_center",
    "stdout_writer",
]
