"""Tests for the persistent bookmark store.

Covers capacity, rejection reasons, slot numbering, tolerant loading and
rollback when the bookmark file cannot be written.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

from lazyfiler.bookmarks import (
    DUPLICATE_NAME,
    DUPLICATE_PATH,
    EMPTY_NAME,
    FULL,
    MAX_BOOKMARKS,
    BookmarkStore,
)


class BookmarkStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.storage = self.root / "config" / "bookmarks.json"
        self.store = BookmarkStore(self.storage)
        self.dirs = []
        for index in range(MAX_BOOKMARKS + 1):
            path = self.root / f"dir{index}"
            path.mkdir()
            self.dirs.append(path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_capacity_is_nine(self) -> None:
        for index in range(MAX_BOOKMARKS):
            self.assertTrue(self.store.add(self.dirs[index], f"mark{index}"))
        self.assertEqual(self.store.rejection_reason(self.dirs[9], "tenth"), FULL)
        self.assertFalse(self.store.add(self.dirs[9], "tenth"))
        self.assertEqual(len(self.store), MAX_BOOKMARKS)

    def test_rejection_reasons(self) -> None:
        self.store.add(self.dirs[0], "home")
        self.assertEqual(self.store.rejection_reason(self.dirs[1], "  "), EMPTY_NAME)
        self.assertEqual(self.store.rejection_reason(self.dirs[1], "home"), DUPLICATE_NAME)
        self.assertEqual(self.store.rejection_reason(self.dirs[0] / ".." / "dir0", "other"), DUPLICATE_PATH)
        self.assertIsNone(self.store.rejection_reason(self.dirs[1], "work"))

    def test_list_is_sorted_by_name_and_numbered_from_one(self) -> None:
        self.store.add(self.dirs[0], "zeta")
        self.store.add(self.dirs[1], "alpha")
        self.assertEqual([b.name for b in self.store.list()], ["alpha", "zeta"])
        self.assertEqual(self.store.find_by_number(1).name, "alpha")
        self.assertEqual(self.store.find_by_number(2).path, self.dirs[0])

    def test_find_by_number_out_of_range(self) -> None:
        self.store.add(self.dirs[0], "only")
        for number in (0, 2, -1, 10):
            self.assertIsNone(self.store.find_by_number(number))

    def test_add_and_remove_persist(self) -> None:
        self.store.add(self.dirs[0], "home")
        reloaded = BookmarkStore(self.storage)
        reloaded.load()
        self.assertEqual(reloaded.get_path("home"), self.dirs[0])

        self.assertTrue(reloaded.remove("home"))
        self.assertFalse(reloaded.remove("home"))
        again = BookmarkStore(self.storage)
        again.load()
        self.assertEqual(len(again), 0)

    def test_missing_and_malformed_files_load_empty(self) -> None:
        self.assertTrue(self.store.load())
        self.assertEqual(len(self.store), 0)
        self.storage.parent.mkdir(parents=True, exist_ok=True)
        self.storage.write_text("{broken", encoding="utf-8")
        self.assertTrue(self.store.load())
        self.assertEqual(len(self.store), 0)

    def test_invalid_items_are_skipped(self) -> None:
        self.storage.parent.mkdir(parents=True, exist_ok=True)
        payload = [
            {"name": "good", "path": str(self.dirs[0])},
            {"name": "", "path": str(self.dirs[1])},
            {"name": "nopath"},
            "junk",
            {"name": "good", "path": str(self.dirs[2])},
        ]
        self.storage.write_text(json.dumps(payload), encoding="utf-8")
        self.store.load()
        self.assertEqual([b.name for b in self.store.list()], ["good"])

    def test_failed_save_rolls_back_add_and_remove(self) -> None:
        blocker = self.root / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = BookmarkStore(blocker / "bookmarks.json")
        self.assertFalse(store.add(self.dirs[0], "home"))
        self.assertEqual(len(store), 0)

        self.assertTrue(self.store.add(self.dirs[0], "home"))
        self.store.storage_path = blocker / "bookmarks.json"
        self.assertFalse(self.store.remove("home"))
        self.assertEqual(self.store.get_path("home"), self.dirs[0])

    def test_non_utf8_directory_name_round_trips(self) -> None:
        if sys.getfilesystemencoding().lower() not in {"utf-8", "utf8"}:
            self.skipTest("needs a UTF-8 filesystem encoding")
        raw = os.fsencode(self.root) + b"/dir\xff"
        try:
            os.mkdir(raw)
        except OSError:
            self.skipTest("filesystem rejects non-UTF-8 names")
        odd = Path(os.fsdecode(raw))
        self.assertTrue(self.store.add(odd, "odd"))
        reloaded = BookmarkStore(self.storage)
        reloaded.load()
        self.assertEqual(os.fsencode(reloaded.get_path("odd")), raw)


if __name__ == "__main__":
    unittest.main()
