"""Tests for bulk move/copy/delete over a selection.

Per-item failures are collected and never abort the batch; delete outcomes
are verified by re-checking the filesystem.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyfiler.file_ops import FileOperations
from lazyfiler.interaction.bulk import COPY, MOVE, run_bulk_delete, run_bulk_transfer


class StubbornFileOperations(FileOperations):
    """Reports success for delete without removing anything."""

    def delete(self, path: Path) -> None:
        return None


class FailingCopyFileOperations(FileOperations):
    def copy(self, source: Path, destination: Path) -> None:
        raise PermissionError(13, "Permission denied")


class BulkOperationTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.source = root / "src"
        self.dest = root / "dest"
        self.source.mkdir()
        self.dest.mkdir()
        (self.source / "one.txt").write_text("1", encoding="utf-8")
        (self.source / "two.txt").write_text("2", encoding="utf-8")
        (self.source / "folder").mkdir()
        (self.source / "folder" / "nested.txt").write_text("n", encoding="utf-8")
        self.fs = FileOperations()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_delete_with_one_missing_item(self) -> None:
        result = run_bulk_delete(["one.txt", "ghost.txt", "two.txt"], self.source, self.fs)
        self.assertEqual(result.success_count, 2)
        self.assertEqual(len(result.failures), 1)
        self.assertIn("ghost.txt", result.failures[0])
        self.assertFalse((self.source / "one.txt").exists())
        self.assertFalse((self.source / "two.txt").exists())
        self.assertFalse(result.all_succeeded)

    def test_delete_removes_directories_recursively(self) -> None:
        result = run_bulk_delete(["folder"], self.source, self.fs)
        self.assertTrue(result.all_succeeded)
        self.assertFalse((self.source / "folder").exists())

    def test_delete_that_leaves_item_behind_is_a_failure(self) -> None:
        result = run_bulk_delete(["one.txt"], self.source, StubbornFileOperations())
        self.assertEqual(result.success_count, 0)
        self.assertEqual(result.failures, ["one.txt: still present after delete"])

    def test_copy_keeps_source_and_copies_tree(self) -> None:
        result = run_bulk_transfer(["one.txt", "folder"], self.source, self.dest, COPY, self.fs)
        self.assertTrue(result.all_succeeded)
        self.assertTrue((self.source / "one.txt").exists())
        self.assertEqual((self.dest / "folder" / "nested.txt").read_text(encoding="utf-8"), "n")

    def test_move_removes_source(self) -> None:
        result = run_bulk_transfer(["two.txt"], self.source, self.dest, MOVE, self.fs)
        self.assertEqual(result.succeeded, ["two.txt"])
        self.assertFalse((self.source / "two.txt").exists())
        self.assertTrue((self.dest / "two.txt").exists())

    def test_existing_destination_is_skipped_not_overwritten(self) -> None:
        (self.dest / "one.txt").write_text("keep", encoding="utf-8")
        result = run_bulk_transfer(["one.txt", "two.txt"], self.source, self.dest, MOVE, self.fs)
        self.assertEqual(result.succeeded, ["two.txt"])
        self.assertEqual(len(result.skipped), 1)
        self.assertEqual((self.dest / "one.txt").read_text(encoding="utf-8"), "keep")
        self.assertTrue((self.source / "one.txt").exists())

    def test_os_errors_are_collected_per_item(self) -> None:
        result = run_bulk_transfer(["one.txt", "two.txt"], self.source, self.dest, COPY, FailingCopyFileOperations())
        self.assertEqual(result.success_count, 0)
        self.assertEqual(result.failures, ["one.txt: Permission denied", "two.txt: Permission denied"])

    def test_unknown_mode_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            run_bulk_transfer(["one.txt"], self.source, self.dest, "link", self.fs)


if __name__ == "__main__":
    unittest.main()
