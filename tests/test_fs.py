"""Local filesystem listing and lazy tree traversal tests."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from manshell.shell.fs import (
    DirEntry,
    LocalFileSystem,
    TraversalError,
    TreeRow,
    sort_entries,
    tree_prefix,
    walk_tree,
)


class ListDirTests(unittest.TestCase):
    def test_directories_first_then_case_insensitive_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "b.txt").write_text("b", encoding="utf-8")
            (root / "A.txt").write_text("a", encoding="utf-8")
            (root / "zdir").mkdir()
            (root / ".hidden").write_text("h", encoding="utf-8")

            names = [entry.name for entry in LocalFileSystem().list_dir(root)]
            self.assertEqual(names, ["zdir", "A.txt", "b.txt"])

            names = [entry.name for entry in LocalFileSystem().list_dir(root, show_hidden=True)]
            self.assertEqual(names, ["zdir", ".hidden", "A.txt", "b.txt"])

    def test_symlinked_directory_is_flagged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            (root / "f.txt").write_text("12345", encoding="utf-8")
            (root / "link").symlink_to(root / "real", target_is_directory=True)
            entries = {entry.name: entry for entry in LocalFileSystem().list_dir(root)}
            self.assertTrue(entries["link"].is_dir)
            self.assertTrue(entries["link"].is_symlink)
            self.assertFalse(entries["real"].is_symlink)
            self.assertFalse(entries["f.txt"].is_dir)

    def test_missing_directory_raises_oserror(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                LocalFileSystem().list_dir(Path(tmp) / "nope")

    def test_real_path_follows_symlinks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "target").mkdir()
            os.symlink(root / "target", root / "link")
            self.assertEqual(LocalFileSystem().real_path(root / "link"), root / "target")

    def test_sort_entries_is_stable_for_mixed_input(self) -> None:
        entries = [
            DirEntry("b", Path("/b"), False),
            DirEntry("a", Path("/a"), True),
            DirEntry("C", Path("/C"), True),
        ]
        self.assertEqual([entry.name for entry in sort_entries(entries)], ["a", "C", "b"])


class FakeTreeFileSystem:
    def __init__(self, tree: dict[Path, list[DirEntry] | OSError]) -> None:
        self.tree = tree
        self.listed: list[Path] = []

    def list_dir(self, path: Path, show_hidden: bool = False) -> list[DirEntry]:
        self.listed.append(path)
        result = self.tree[path]
        if isinstance(result, OSError):
            raise result
        return result


class WalkTreeTests(unittest.TestCase):
    def setUp(self) -> None:
        root = Path("/r")
        self.root = root
        self.fs = FakeTreeFileSystem(
            {
                root: [DirEntry("docs", root / "docs", True), DirEntry("locked", root / "locked", True), DirEntry("z.txt", root / "z.txt", False)],
                root / "docs": [DirEntry("a.md", root / "docs" / "a.md", False)],
                root / "locked": PermissionError(13, "Permission denied"),
            }
        )

    def test_rows_come_depth_first_with_lineage(self) -> None:
        items = list(walk_tree(self.fs, self.root))
        rows = [(item.depth, item.entry.name, item.lineage) for item in items if isinstance(item, TreeRow)]
        self.assertEqual(
            rows,
            [
                (1, "docs", (False,)),
                (2, "a.md", (False, True)),
                (1, "locked", (False,)),
                (1, "z.txt", (True,)),
            ],
        )

    def test_unreadable_directory_is_reported_inline(self) -> None:
        items = list(walk_tree(self.fs, self.root))
        errors = [item for item in items if isinstance(item, TraversalError)]
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].path, self.root / "locked")
        self.assertEqual(errors[0].depth, 2)
        self.assertIsInstance(errors[0].error, PermissionError)
        self.assertIs(items[3], errors[0])

    def test_walk_is_lazy(self) -> None:
        iterator = walk_tree(self.fs, self.root)
        next(iterator)
        self.assertEqual(self.fs.listed, [self.root])

    def test_max_depth_stops_descent(self) -> None:
        items = list(walk_tree(self.fs, self.root, max_depth=1))
        self.assertEqual([item.entry.name for item in items], ["docs", "locked", "z.txt"])
        self.assertEqual(self.fs.listed, [self.root])

    def test_symlinked_directories_are_not_descended(self) -> None:
        fs = FakeTreeFileSystem({self.root: [DirEntry("loop", self.root / "loop", True, is_symlink=True)]})
        items = list(walk_tree(fs, self.root))
        self.assertEqual(len(items), 1)
        self.assertEqual(fs.listed, [self.root])

    def test_tree_prefix_draws_connectors(self) -> None:
        self.assertEqual(tree_prefix((False,)), "├── ")
        self.assertEqual(tree_prefix((True,)), "└── ")
        self.assertEqual(tree_prefix((False, True)), "│   └── ")
        self.assertEqual(tree_prefix((True, False)), "    ├── ")
        self.assertEqual(tree_prefix(()), "")


if __name__ == "__main__":
    unittest.main()
