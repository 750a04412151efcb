"""Runtime composition layer for lazyfiler.

Builds the model, interaction state and collaborators, wires them into the
key dispatcher, and runs the loop inside the terminal session.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..bookmarks import BookmarkStore
from ..directory_model import DirectoryModel
from ..file_ops import FileOperations
from ..input import KeyDispatcher, build_normal_registry, read_key
from ..interaction import ActionDependencies, BrowserActions, InteractionState, ModalRunner
from ..opener import FileOpener
from ..preview import FilePreview
from ..render import Renderer, ScreenGeometry
from ..search import ExternalToolRunner
from ..ui_theme import resolve_theme
from .config import AppConfig
from .loop import run_main_loop
from .messages import MessageKey, Messages
from .terminal import TerminalController

LOGGER = logging.getLogger(__name__)


def run_browser(start_path: Path, config: AppConfig) -> None:
    """Browse ``start_path`` interactively until the user quits.

    Raises ``NavigationFailure`` before touching the terminal when the start
    directory cannot be listed.
    """
    messages = Messages(config.language)
    model = DirectoryModel(start_path)
    state = InteractionState(model)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise SystemExit("lazyfiler needs an interactive terminal.")
    terminal = TerminalController(stdin_fd, stdout_fd)

    theme = resolve_theme(config.theme, no_color=config.no_color, overrides=config.colors)
    renderer = Renderer(
        ScreenGeometry(*terminal.size()),
        theme,
        messages,
        FilePreview(highlight=not config.no_color),
        base_directory=config.base_directory,
    )

    def read() -> str:
        return read_key(stdin_fd)

    def refresh_screen() -> None:
        renderer.update_geometry(ScreenGeometry(*terminal.size()))
        state.mark_dirty(full=True)

    bookmarks = BookmarkStore(config.bookmarks_path)
    bookmarks.load()
    deps = ActionDependencies(
        config=config,
        messages=messages,
        file_ops=FileOperations(),
        opener=FileOpener(config, suspend_tui=terminal.suspended),
        bookmarks=bookmarks,
        tools=ExternalToolRunner(suspend_tui=terminal.suspended),
        modals=ModalRunner(renderer, read, state, bell=terminal.bell),
        refresh_screen=refresh_screen,
    )
    actions = BrowserActions(state, deps)
    dispatcher = KeyDispatcher(state, build_normal_registry(actions, config.keybinds))

    LOGGER.info("browsing %s (language=%s, theme=%s)", model.current_path, config.language, theme.name)
    with terminal.raw_mode():
        run_main_loop(state, renderer.render_frame, read, dispatcher.dispatch)
    LOGGER.info("session ended in %s", model.current_path)
    print(messages.get(MessageKey.APP_TERMINATED))
