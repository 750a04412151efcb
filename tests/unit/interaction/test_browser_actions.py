"""Tests for browser actions wired to scripted modals and fake collaborators.

Modal answers are queued up front; external tools and the opener are mocks,
while file operations and bookmarks run against a temporary directory.
"""

from __future__ import annotations

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyfiler.bookmarks import BookmarkStore
from lazyfiler.directory_model import DirectoryModel
from lazyfiler.errors import ToolUnavailable
from lazyfiler.file_ops import FileOperations
from lazyfiler.interaction.actions import ActionDependencies, BrowserActions
from lazyfiler.interaction.modals import CANCELLED, ConfirmModal, MenuModal, ModalResolution, NoticeModal
from lazyfiler.interaction.state import InteractionState
from lazyfiler.opener import FileOpener
from lazyfiler.runtime.config import AppConfig
from lazyfiler.runtime.messages import Messages
from lazyfiler.search import ExternalToolRunner, HistoryEntry, Location


class ScriptedModals:
    """Stands in for ``ModalRunner``: returns queued resolutions in order."""

    def __init__(self, *resolutions: ModalResolution) -> None:
        self.resolutions = list(resolutions)
        self.shown: list[object] = []

    def run(self, modal) -> ModalResolution:
        self.shown.append(modal)
        if not self.resolutions:
            return CANCELLED
        return self.resolutions.pop(0)


def accept(value: object = None) -> ModalResolution:
    return ModalResolution(accepted=True, value=value)


class BrowserActionsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name).resolve()
        self.root = base / "work"
        self.dest = base / "dest"
        self.root.mkdir()
        self.dest.mkdir()
        (self.root / "alpha.txt").write_text("a", encoding="utf-8")
        (self.root / "beta.txt").write_text("b", encoding="utf-8")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "deep.txt").write_text("d", encoding="utf-8")
        self.state = InteractionState(DirectoryModel(self.root))
        self.opener = mock.Mock(spec=FileOpener)
        self.opener.open_file.return_value = None
        self.opener.open_directory_in_explorer.return_value = None
        self.tools = mock.Mock(spec=ExternalToolRunner)
        self.bookmarks = BookmarkStore(base / "bookmarks.json")
        self.refresh_screen = mock.Mock()
        self.modals = ScriptedModals()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def actions(self, *resolutions: ModalResolution, base_directory: Path | None = None) -> BrowserActions:
        self.modals = ScriptedModals(*resolutions)
        deps = ActionDependencies(
            config=AppConfig(base_directory=base_directory if base_directory is not None else self.dest),
            messages=Messages("en"),
            file_ops=FileOperations(),
            opener=self.opener,
            bookmarks=self.bookmarks,
            tools=self.tools,
            modals=self.modals,
            refresh_screen=self.refresh_screen,
        )
        return BrowserActions(self.state, deps)

    def select(self, *names: str) -> None:
        for name in names:
            self.state.select_name(name)
            self.state.toggle_selection()


class NavigationActionTests(BrowserActionsTestCase):
    def test_cursor_movement(self) -> None:
        actions = self.actions()
        self.assertTrue(actions.move_down())
        self.assertTrue(actions.move_bottom())
        self.assertFalse(actions.move_down())
        self.assertTrue(actions.move_top())
        self.assertFalse(actions.move_up())

    def test_enter_directory_and_back(self) -> None:
        actions = self.actions()
        self.state.select_name("sub")
        self.select("alpha.txt")
        self.state.select_name("sub")
        self.assertTrue(actions.enter())
        self.assertEqual(self.state.model.current_path, self.root / "sub")
        self.assertEqual(self.state.cursor, 0)
        self.assertEqual(self.state.selection, set())
        self.assertTrue(actions.parent())
        self.assertEqual(self.state.model.current_path, self.root)

    def test_enter_on_file_does_nothing(self) -> None:
        actions = self.actions()
        self.assertFalse(actions.enter())
        self.assertEqual(self.state.model.current_path, self.root)

    def test_failed_navigation_reports_and_keeps_state(self) -> None:
        actions = self.actions()
        self.state.select_name("sub")
        (self.root / "sub" / "deep.txt").unlink()
        (self.root / "sub").rmdir()
        entries = self.state.model.entries
        self.assertFalse(actions.enter())
        self.assertEqual(self.state.model.current_path, self.root)
        self.assertEqual(self.state.model.entries, entries)
        self.assertIn("not found", self.state.status_message)

    def test_refresh_rereads_screen_and_listing(self) -> None:
        actions = self.actions()
        (self.root / "gamma.txt").write_text("", encoding="utf-8")
        self.assertTrue(actions.refresh())
        self.refresh_screen.assert_called_once_with()
        self.assertIsNotNone(self.state.model.find_index("gamma.txt"))

    def test_filter_clear_and_quit(self) -> None:
        actions = self.actions()
        self.assertFalse(actions.clear_filter())
        self.assertTrue(actions.filter())
        self.assertTrue(self.state.filter_editing)
        self.state.apply_filter_query("beta")
        self.state.finish_filter_editing()
        self.assertTrue(actions.clear_filter())
        self.assertFalse(self.state.filter.engaged)
        self.assertTrue(actions.quit())
        self.assertTrue(self.state.quit_requested)


class OpenActionTests(BrowserActionsTestCase):
    def test_open_file_uses_opener(self) -> None:
        actions = self.actions()
        self.assertTrue(actions.open_file())
        self.opener.open_file.assert_called_once_with(self.root / "alpha.txt", None)
        self.assertTrue(self.state.needs_full_redraw)

    def test_open_failure_is_reported(self) -> None:
        self.opener.open_file.return_value = "code is not installed"
        actions = self.actions()
        self.assertFalse(actions.open_file())
        self.assertEqual(self.state.status_message, "Open failed: code is not installed")

    def test_malformed_application_command_stays_inside_action(self) -> None:
        self.opener = FileOpener(AppConfig(applications=((("txt",), 'code "'),)), platform="linux")
        actions = self.actions()
        self.assertFalse(actions.open_file())
        self.assertIn("invalid command", self.state.status_message)

    def test_open_file_ignores_directories(self) -> None:
        actions = self.actions()
        self.state.select_name("sub")
        self.assertFalse(actions.open_file())
        self.opener.open_file.assert_not_called()

    def test_open_explorer_opens_current_directory(self) -> None:
        actions = self.actions()
        self.assertTrue(actions.open_explorer())
        self.opener.open_directory_in_explorer.assert_called_once_with(self.root)


class CreateActionTests(BrowserActionsTestCase):
    def test_create_file_selects_new_entry(self) -> None:
        actions = self.actions(accept("notes.md"))
        self.assertTrue(actions.create_file())
        self.assertTrue((self.root / "notes.md").is_file())
        self.assertEqual(self.state.current_entry().name, "notes.md")
        self.assertEqual(self.state.status_message, "File created: notes.md")

    def test_create_directory(self) -> None:
        actions = self.actions(accept("newdir"))
        self.assertTrue(actions.create_directory())
        self.assertTrue((self.root / "newdir").is_dir())
        self.assertEqual(self.state.status_message, "Directory created: newdir")

    def test_path_separators_are_rejected(self) -> None:
        for name in ("a/b", "a\\b"):
            with self.subTest(name=name):
                actions = self.actions(accept(name))
                self.assertFalse(actions.create_file())
                self.assertIn("Invalid name", self.state.status_message)

    def test_existing_name_is_rejected(self) -> None:
        actions = self.actions(accept("alpha.txt"))
        self.assertFalse(actions.create_file())
        self.assertEqual(self.state.status_message, "Already exists: alpha.txt")

    def test_cancelled_or_empty_prompt_does_nothing(self) -> None:
        for resolution in (CANCELLED, accept("   ")):
            actions = self.actions(resolution)
            self.assertFalse(actions.create_file())
        self.assertEqual(self.state.status_message, "")


class BulkActionTests(BrowserActionsTestCase):
    def test_delete_selected_after_confirmation(self) -> None:
        self.select("alpha.txt", "beta.txt")
        actions = self.actions(accept(), accept())
        self.assertTrue(actions.delete_selected())
        confirm, notice = self.modals.shown
        self.assertIsInstance(confirm, ConfirmModal)
        self.assertTrue(confirm.destructive)
        self.assertIsInstance(notice, NoticeModal)
        self.assertEqual(notice.tone, NoticeModal.SUCCESS)
        self.assertEqual(notice.body[0], "Delete: 2 succeeded")
        self.assertFalse((self.root / "alpha.txt").exists())
        self.assertEqual(self.state.selection, set())
        self.assertIsNone(self.state.model.find_index("alpha.txt"))

    def test_declined_delete_keeps_files(self) -> None:
        self.select("alpha.txt")
        actions = self.actions(CANCELLED)
        self.assertFalse(actions.delete_selected())
        self.assertTrue((self.root / "alpha.txt").exists())
        self.assertEqual(self.state.selection, {"alpha.txt"})

    def test_bulk_without_selection_reports(self) -> None:
        actions = self.actions()
        self.assertFalse(actions.move_selected())
        self.assertEqual(self.state.status_message, "Nothing selected")
        self.assertEqual(self.modals.shown, [])

    def test_move_selected_into_base_directory(self) -> None:
        self.select("beta.txt")
        actions = self.actions(accept(), accept())
        self.assertTrue(actions.move_selected())
        self.assertTrue((self.dest / "beta.txt").exists())
        self.assertFalse((self.root / "beta.txt").exists())

    def test_copy_with_collision_reports_failure_tone(self) -> None:
        (self.dest / "alpha.txt").write_text("existing", encoding="utf-8")
        self.select("alpha.txt", "beta.txt")
        actions = self.actions(accept(), accept())
        self.assertTrue(actions.copy_selected())
        notice = self.modals.shown[-1]
        self.assertEqual(notice.tone, NoticeModal.ERROR)
        self.assertEqual(notice.body[0], "Copy: 1 succeeded, 1 failed")
        self.assertEqual((self.dest / "alpha.txt").read_text(encoding="utf-8"), "existing")
        self.assertTrue((self.root / "alpha.txt").exists())


class BookmarkActionTests(BrowserActionsTestCase):
    def test_add_bookmark_from_menu(self) -> None:
        actions = self.actions(accept("add"), accept("work"))
        self.assertTrue(actions.bookmark_menu())
        self.assertIsInstance(self.modals.shown[0], MenuModal)
        self.assertEqual(self.bookmarks.get_path("work"), self.root)
        self.assertEqual(self.state.status_message, "Bookmark added: work")

    def test_unwritable_bookmark_file_is_reported(self) -> None:
        blocker = self.root.parent / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        self.bookmarks = BookmarkStore(blocker / "bookmarks.json")
        actions = self.actions(accept("add"), accept("work"))
        self.assertFalse(actions.bookmark_menu())
        self.assertEqual(len(self.bookmarks), 0)
        self.assertIn("Could not save bookmarks", self.state.status_message)

    def test_bookmark_non_utf8_directory(self) -> None:
        if sys.getfilesystemencoding().lower() not in {"utf-8", "utf8"}:
            self.skipTest("needs a UTF-8 filesystem encoding")
        raw = os.fsencode(self.root) + b"/dir\xff"
        try:
            os.mkdir(raw)
        except OSError:
            self.skipTest("filesystem rejects non-UTF-8 names")
        odd = Path(os.fsdecode(raw))
        self.state = InteractionState(DirectoryModel(odd))
        actions = self.actions(accept("add"), accept("odd"))
        self.assertTrue(actions.bookmark_menu())
        self.assertEqual(self.bookmarks.get_path("odd"), odd)

    def test_duplicate_path_is_rejected(self) -> None:
        self.bookmarks.add(self.root, "first")
        actions = self.actions(accept("add"), accept("second"))
        self.assertFalse(actions.bookmark_menu())
        self.assertEqual(len(self.bookmarks), 1)
        self.assertNotEqual(self.state.status_message, "")

    def test_jump_to_bookmark_slot(self) -> None:
        self.bookmarks.add(self.dest, "dest")
        actions = self.actions()
        self.assertTrue(actions.jump_to_bookmark(1))
        self.assertEqual(self.state.model.current_path, self.dest)

    def test_jump_to_empty_slot_reports(self) -> None:
        actions = self.actions()
        self.assertFalse(actions.jump_to_bookmark(3))
        self.assertEqual(self.state.status_message, "No bookmark in slot 3")

    def test_remove_bookmark_by_number(self) -> None:
        self.bookmarks.add(self.dest, "dest")
        actions = self.actions(accept("remove"), accept("1"))
        self.assertTrue(actions.bookmark_menu())
        self.assertEqual(len(self.bookmarks), 0)

    def test_menu_digit_jumps(self) -> None:
        self.bookmarks.add(self.dest, "dest")
        actions = self.actions(accept(1))
        self.assertTrue(actions.bookmark_menu())
        self.assertEqual(self.state.model.current_path, self.dest)


class ExternalToolActionTests(BrowserActionsTestCase):
    def test_name_search_opens_picked_file(self) -> None:
        actions = self.actions()
        with mock.patch(
            "lazyfiler.interaction.actions.pick_file_by_name", return_value=self.root / "sub" / "deep.txt"
        ):
            self.assertTrue(actions.name_search())
        self.opener.open_file.assert_called_once_with(self.root / "sub" / "deep.txt", None)

    def test_name_search_missing_tool_is_reported(self) -> None:
        actions = self.actions()
        with mock.patch("lazyfiler.interaction.actions.pick_file_by_name", side_effect=ToolUnavailable("fzf")):
            self.assertFalse(actions.name_search())
        self.assertEqual(self.state.status_message, "fzf is not installed")

    def test_content_search_without_matches_shows_notice(self) -> None:
        actions = self.actions(accept("needle"), accept())
        with mock.patch("lazyfiler.interaction.actions.search_content", return_value="") as search:
            self.assertTrue(actions.content_search())
        search.assert_called_once_with(self.tools, self.root, "needle")
        self.assertIsInstance(self.modals.shown[-1], NoticeModal)
        self.assertEqual(self.modals.shown[-1].body, ["No matches found."])

    def test_content_search_opens_chosen_line(self) -> None:
        actions = self.actions(accept("needle"))
        location = Location(self.root / "beta.txt", 7)
        with mock.patch(
            "lazyfiler.interaction.actions.search_content", return_value="beta.txt:7:needle\n"
        ), mock.patch("lazyfiler.interaction.actions.pick_location", return_value=location):
            self.assertTrue(actions.content_search())
        self.opener.open_file.assert_called_once_with(self.root / "beta.txt", 7)

    def test_content_search_with_empty_query_does_nothing(self) -> None:
        actions = self.actions(accept(""))
        with mock.patch("lazyfiler.interaction.actions.search_content") as search:
            self.assertFalse(actions.content_search())
        search.assert_not_called()

    def test_history_requires_zoxide(self) -> None:
        self.tools.is_available.return_value = False
        actions = self.actions()
        self.assertFalse(actions.jump_history())
        self.assertEqual(self.state.status_message, "zoxide is not installed")

    def test_history_jump_navigates_to_choice(self) -> None:
        self.tools.is_available.return_value = True
        actions = self.actions(accept(self.dest))
        history = [HistoryEntry(self.dest, 12.0), HistoryEntry(self.root, 3.5)]
        with mock.patch("lazyfiler.interaction.actions.zoxide_history", return_value=history):
            self.assertTrue(actions.jump_history())
        self.assertEqual(self.state.model.current_path, self.dest)
        menu = self.modals.shown[0]
        self.assertEqual(menu.options["2"], self.root)

    def test_empty_history_is_reported(self) -> None:
        self.tools.is_available.return_value = True
        actions = self.actions()
        with mock.patch("lazyfiler.interaction.actions.zoxide_history", return_value=[]):
            self.assertFalse(actions.jump_history())
        self.assertEqual(self.state.status_message, "No directory history")


if __name__ == "__main__":
    unittest.main()
