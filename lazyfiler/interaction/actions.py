"""Action handlers behind every browser keybinding.

Each public action returns ``True`` when it changed something. Actions run
inside ``action_boundary``: collaborator failures become a footer message
and a ``False`` result instead of propagating to the main loop.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..bookmarks import DUPLICATE_NAME, DUPLICATE_PATH, EMPTY_NAME, FULL, MAX_BOOKMARKS, BookmarkStore
from ..errors import InputRejected, LazyfilerError, MutationFailure, ToolUnavailable
from ..file_ops import FileOperations
from ..opener import FileOpener
from ..runtime.config import AppConfig
from ..runtime.messages import MessageKey, Messages
from ..search import ExternalToolRunner, pick_file_by_name, pick_location, search_content, zoxide_history
from .bulk import COPY, MOVE, BulkResult, run_bulk_delete, run_bulk_transfer
from .modal_runner import ModalRunner
from .modals import ConfirmModal, MenuModal, NoticeModal, PromptModal
from .state import InteractionState

LOGGER = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 9
_PATH_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class ActionDependencies:
    """Collaborators injected into ``BrowserActions``."""

    config: AppConfig
    messages: Messages
    file_ops: FileOperations
    opener: FileOpener
    bookmarks: BookmarkStore
    tools: ExternalToolRunner
    modals: ModalRunner
    refresh_screen: Callable[[], None] = lambda: None


def action_boundary(method: Callable[..., bool | None]) -> Callable[..., bool]:
    """Convert failures raised inside an action into a reported ``False``."""

    @functools.wraps(method)
    def wrapper(self: BrowserActions, *args, **kwargs) -> bool:
        try:
            return bool(method(self, *args, **kwargs))
        except ToolUnavailable as exc:
            LOGGER.info("%s: tool unavailable: %s", method.__name__, exc.tool)
            self.state.report(self.messages.get(MessageKey.TOOL_UNAVAILABLE, tool=exc.tool))
        except LazyfilerError as exc:
            LOGGER.info("%s rejected: %s", method.__name__, exc)
            self.state.report(str(exc))
        except OSError as exc:
            LOGGER.warning("%s failed: %s", method.__name__, exc)
            self.state.report(str(exc.strerror or exc))
        return False

    return wrapper


class BrowserActions:
    """Orchestrates model, interaction state and collaborators per key action."""

    def __init__(self, state: InteractionState, deps: ActionDependencies) -> None:
        self.state = state
        self.deps = deps
        self.messages = deps.messages

    @property
    def model(self):
        return self.state.model

    # Helpers

    def _navigated(self, succeeded: bool) -> bool:
        if succeeded:
            self.state.reset_after_directory_change()
            return True
        failure = self.model.last_failure
        if failure is not None:
            self.state.report(
                self.messages.get(
                    MessageKey.NAV_FAILED,
                    path=failure.path,
                    reason=failure.reason.replace("_", " "),
                )
            )
        return False

    def _prompt(self, prompt: MessageKey, title: str | None = None) -> str | None:
        resolution = self.deps.modals.run(PromptModal(title, self.messages.get(prompt)))
        if not resolution.accepted:
            return None
        return str(resolution.value).strip()

    def _notice(self, lines: list[str], title: str | None = None, tone: str = NoticeModal.INFO) -> None:
        self.deps.modals.run(
            NoticeModal(title, lines, footer=self.messages.get(MessageKey.PRESS_ANY_KEY), tone=tone)
        )

    def _reload(self) -> None:
        if not self.model.refresh():
            self._navigated(False)
        self.state.reload_after_refresh()

    # Cursor

    @action_boundary
    def move_down(self) -> bool:
        return self.state.move_cursor(1)

    @action_boundary
    def move_up(self) -> bool:
        return self.state.move_cursor(-1)

    @action_boundary
    def move_top(self) -> bool:
        return self.state.move_to_top()

    @action_boundary
    def move_bottom(self) -> bool:
        return self.state.move_to_bottom()

    # Navigation

    @action_boundary
    def parent(self) -> bool:
        return self._navigated(self.model.navigate_to_parent())

    @action_boundary
    def enter(self) -> bool:
        entry = self.state.current_entry()
        if entry is None or not entry.is_dir:
            return False
        return self._navigated(self.model.navigate_into(entry.name))

    @action_boundary
    def refresh(self) -> bool:
        """Re-read terminal size, relist, and re-apply an engaged filter."""
        self.deps.refresh_screen()
        self._reload()
        return True

    # Opening

    @action_boundary
    def open_file(self) -> bool:
        entry = self.state.current_entry()
        if entry is None or entry.is_dir:
            return False
        return self._open(entry.path)

    def _open(self, path: Path, line: int | None = None) -> bool:
        error = self.deps.opener.open_file(path, line)
        self.state.mark_dirty(full=True)
        if error:
            self.state.report(self.messages.get(MessageKey.OPEN_FAILED, detail=error))
            return False
        return True

    @action_boundary
    def open_explorer(self) -> bool:
        error = self.deps.opener.open_directory_in_explorer(self.model.current_path)
        self.state.mark_dirty(full=True)
        if error:
            self.state.report(self.messages.get(MessageKey.OPEN_FAILED, detail=error))
            return False
        return True

    # Selection and filter

    @action_boundary
    def toggle_selection(self) -> bool:
        return self.state.toggle_selection()

    @action_boundary
    def filter(self) -> bool:
        self.state.begin_filter()
        return True

    @action_boundary
    def clear_filter(self) -> bool:
        if not self.state.filter.query:
            return False
        self.state.clear_filter()
        return True

    @action_boundary
    def quit(self) -> bool:
        self.state.quit_requested = True
        return True

    # External search

    @action_boundary
    def name_search(self) -> bool:
        directory = self.model.current_path
        try:
            picked = pick_file_by_name(self.deps.tools, directory)
        finally:
            self.state.mark_dirty(full=True)
        if picked is None or not picked.is_file():
            return False
        return self._open(picked.resolve())

    @action_boundary
    def content_search(self) -> bool:
        query = self._prompt(MessageKey.SEARCH_TEXT)
        if not query:
            return False
        directory = self.model.current_path
        matches = search_content(self.deps.tools, directory, query)
        if not matches.strip():
            self._notice([self.messages.get(MessageKey.NO_MATCHES)])
            return True
        try:
            location = pick_location(self.deps.tools, directory, matches)
        finally:
            self.state.mark_dirty(full=True)
        if location is None or not location.path.exists():
            return False
        return self._open(location.path.resolve(), location.line)

    # Creation

    def _validated_new_name(self, prompt: MessageKey) -> str | None:
        name = self._prompt(prompt)
        if not name:
            return None
        if any(sep in name for sep in _PATH_SEPARATORS) or name in {".", ".."}:
            raise InputRejected(self.messages.get(MessageKey.INVALID_NAME))
        if self.deps.file_ops.exists(self.model.current_path / name):
            raise InputRejected(self.messages.get(MessageKey.ALREADY_EXISTS, name=name))
        return name

    def _create(self, prompt: MessageKey, created: MessageKey, make: Callable[[Path], None]) -> bool:
        name = self._validated_new_name(prompt)
        if name is None:
            return False
        target = self.model.current_path / name
        try:
            make(target)
        except OSError as exc:
            raise MutationFailure(
                target, self.messages.get(MessageKey.CREATION_ERROR, detail=exc.strerror or exc)
            ) from exc
        self._reload()
        self.state.select_name(name)
        self.state.report(self.messages.get(created, name=name))
        return True

    @action_boundary
    def create_file(self) -> bool:
        return self._create(MessageKey.INPUT_FILENAME, MessageKey.FILE_CREATED, self.deps.file_ops.create_file)

    @action_boundary
    def create_directory(self) -> bool:
        return self._create(
            MessageKey.INPUT_DIRNAME, MessageKey.DIRECTORY_CREATED, self.deps.file_ops.create_directory
        )

    # Bulk operations

    def _report_bulk(self, action_label: str, result: BulkResult) -> None:
        messages = self.messages
        if result.all_succeeded:
            summary = messages.get(MessageKey.BULK_SUMMARY, action=action_label, count=result.success_count)
            tone = NoticeModal.SUCCESS
        else:
            summary = messages.get(
                MessageKey.BULK_FAILED_SUMMARY,
                action=action_label,
                count=result.success_count,
                failed=len(result.failures) + len(result.skipped),
            )
            tone = NoticeModal.ERROR
        lines = [summary, *result.failures, *result.skipped]
        self._notice(lines, title=messages.get(MessageKey.BULK_RESULT_TITLE), tone=tone)

    def _finish_bulk(self) -> None:
        self.state.clear_selection()
        self._reload()

    def _transfer(self, mode: str) -> bool:
        names = self.state.selected_names()
        if not names:
            self.state.report(self.messages.get(MessageKey.NO_SELECTION))
            return False
        destination = self.deps.config.base_directory
        if destination is None:
            self.state.report(self.messages.get(MessageKey.NO_BASE_DIRECTORY))
            return False
        question = MessageKey.MOVE_CONFIRM if mode == MOVE else MessageKey.COPY_CONFIRM
        confirm = ConfirmModal(
            self.messages.get(MessageKey.CONFIRM_TITLE),
            [self.messages.get(question, count=len(names), dest=destination)],
            self.messages.get(MessageKey.CONFIRM_HINT),
        )
        if not self.deps.modals.run(confirm).accepted:
            return False
        try:
            result = run_bulk_transfer(names, self.model.current_path, destination, mode, self.deps.file_ops)
        finally:
            self._finish_bulk()
        label = MessageKey.ACTION_MOVE if mode == MOVE else MessageKey.ACTION_COPY
        self._report_bulk(self.messages.get(label), result)
        return True

    @action_boundary
    def move_selected(self) -> bool:
        return self._transfer(MOVE)

    @action_boundary
    def copy_selected(self) -> bool:
        return self._transfer(COPY)

    @action_boundary
    def delete_selected(self) -> bool:
        names = self.state.selected_names()
        if not names:
            self.state.report(self.messages.get(MessageKey.NO_SELECTION))
            return False
        preview = names[:5] + (["..."] if len(names) > 5 else [])
        confirm = ConfirmModal(
            self.messages.get(MessageKey.DELETE_TITLE),
            [
                self.messages.get(MessageKey.DELETE_CONFIRM, count=len(names)),
                *(f"  {name}" for name in preview),
                self.messages.get(MessageKey.DELETE_WARNING),
            ],
            self.messages.get(MessageKey.CONFIRM_HINT),
            destructive=True,
        )
        if not self.deps.modals.run(confirm).accepted:
            return False
        try:
            result = run_bulk_delete(names, self.model.current_path, self.deps.file_ops)
        finally:
            self._finish_bulk()
        self._report_bulk(self.messages.get(MessageKey.ACTION_DELETE), result)
        return True

    # Bookmarks

    @action_boundary
    def bookmark_menu(self) -> bool:
        messages = self.messages
        options: dict[str, object] = {"a": "add", "l": "list", "r": "remove"}
        options.update({str(n): n for n in range(1, MAX_BOOKMARKS + 1)})
        menu = MenuModal(
            messages.get(MessageKey.BOOKMARK_TITLE),
            [
                messages.get(MessageKey.BOOKMARK_MENU_ADD),
                messages.get(MessageKey.BOOKMARK_MENU_LIST),
                messages.get(MessageKey.BOOKMARK_MENU_REMOVE),
                messages.get(MessageKey.BOOKMARK_MENU_JUMP),
            ],
            options,
        )
        resolution = self.deps.modals.run(menu)
        if not resolution.accepted:
            return False
        choice = resolution.value
        if choice == "add":
            return self._add_bookmark()
        if choice == "list":
            self._notice(self._bookmark_lines(), title=messages.get(MessageKey.BOOKMARK_TITLE))
            return False
        if choice == "remove":
            return self._remove_bookmark()
        return self._jump_to_bookmark(int(choice))

    def _bookmark_lines(self) -> list[str]:
        bookmarks = self.deps.bookmarks.list()
        if not bookmarks:
            return [self.messages.get(MessageKey.BOOKMARK_EMPTY)]
        return [f"{number}. {b.name} - {b.path}" for number, b in enumerate(bookmarks, start=1)]

    def _add_bookmark(self) -> bool:
        store = self.deps.bookmarks
        name = self._prompt(MessageKey.BOOKMARK_NAME_PROMPT, self.messages.get(MessageKey.BOOKMARK_TITLE))
        if name is None:
            return False
        path = self.model.current_path
        reason = store.rejection_reason(path, name)
        if reason is not None:
            reasons = {
                EMPTY_NAME: self.messages.get(MessageKey.BOOKMARK_EMPTY_NAME),
                DUPLICATE_NAME: self.messages.get(MessageKey.BOOKMARK_DUPLICATE_NAME, name=name),
                DUPLICATE_PATH: self.messages.get(MessageKey.BOOKMARK_DUPLICATE_PATH),
                FULL: self.messages.get(MessageKey.BOOKMARK_FULL, max=MAX_BOOKMARKS),
            }
            raise InputRejected(reasons[reason])
        if not store.add(path, name):
            raise self._bookmark_save_failure()
        self.state.report(self.messages.get(MessageKey.BOOKMARK_ADDED, name=name))
        return True

    def _remove_bookmark(self) -> bool:
        raw = self._prompt(MessageKey.BOOKMARK_NUMBER_PROMPT, self.messages.get(MessageKey.BOOKMARK_TITLE))
        if not raw:
            return False
        number = int(raw) if raw.isdigit() else 0
        bookmark = self.deps.bookmarks.find_by_number(number)
        if bookmark is None:
            raise InputRejected(self.messages.get(MessageKey.BOOKMARK_NOT_FOUND, number=raw))
        if not self.deps.bookmarks.remove(bookmark.name):
            raise self._bookmark_save_failure()
        self.state.report(self.messages.get(MessageKey.BOOKMARK_REMOVED, name=bookmark.name))
        return True

    def _bookmark_save_failure(self) -> MutationFailure:
        path = self.deps.bookmarks.storage_path
        return MutationFailure(path, self.messages.get(MessageKey.BOOKMARK_SAVE_FAILED, path=path))

    def _jump_to_bookmark(self, number: int) -> bool:
        bookmark = self.deps.bookmarks.find_by_number(number)
        if bookmark is None:
            raise InputRejected(self.messages.get(MessageKey.BOOKMARK_NOT_FOUND, number=number))
        if not bookmark.path.is_dir():
            raise InputRejected(self.messages.get(MessageKey.BOOKMARK_PATH_MISSING, path=bookmark.path))
        return self._navigated(self.model.navigate_to_path(bookmark.path))

    @action_boundary
    def jump_to_bookmark(self, number: int) -> bool:
        return self._jump_to_bookmark(number)

    # Directory history

    @action_boundary
    def jump_history(self) -> bool:
        tools = self.deps.tools
        if not tools.is_available("zoxide"):
            raise ToolUnavailable("zoxide")
        entries = zoxide_history(tools)[:MAX_HISTORY_ITEMS]
        if not entries:
            self.state.report(self.messages.get(MessageKey.HISTORY_EMPTY))
            return False
        lines = [f"{number}. {entry.path}  ({entry.score:.1f})" for number, entry in enumerate(entries, start=1)]
        options = {str(number): entry.path for number, entry in enumerate(entries, start=1)}
        resolution = self.deps.modals.run(
            MenuModal(self.messages.get(MessageKey.HISTORY_TITLE), lines, options)
        )
        if not resolution.accepted:
            return False
        return self._navigated(self.model.navigate_to_path(Path(resolution.value)))
