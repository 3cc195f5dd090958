"""Path containment tests.

Every accepted path must stay under the root no matter how ``..`` segments
are arranged; rejected input must never reach the filesystem.
"""

from __future__ import annotations

import random
import unittest
from pathlib import Path

from manshell.errors import PathDenied
from manshell.shell.sandbox import PathSandbox, resolve_path

ROOT = Path("/repo")


class PathSandboxTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sandbox = PathSandbox(ROOT)

    def test_empty_candidate_is_root(self) -> None:
        self.assertEqual(self.sandbox.resolve("", ROOT / "sub"), ROOT)

    def test_relative_paths_resolve_from_current_dir(self) -> None:
        self.assertEqual(self.sandbox.resolve("docs", ROOT / "sub"), ROOT / "sub" / "docs")
        self.assertEqual(self.sandbox.resolve("./a/./b", ROOT), ROOT / "a" / "b")

    def test_parent_segments_inside_root_are_allowed(self) -> None:
        self.assertEqual(self.sandbox.resolve("..", ROOT / "sub"), ROOT)
        self.assertEqual(self.sandbox.resolve("a/../b", ROOT), ROOT / "b")

    def test_escape_above_root_is_denied(self) -> None:
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("../..", ROOT / "sub")
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("..", ROOT)

    def test_absolute_input_is_denied(self) -> None:
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("/etc/passwd", ROOT)
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("/repo/sub", ROOT)

    def test_nul_byte_is_denied(self) -> None:
        with self.assertRaises(PathDenied) as ctx:
            self.sandbox.resolve("a\x00b", ROOT)
        self.assertEqual(ctx.exception.candidate, "a\x00b")

    def test_sibling_with_shared_prefix_is_not_contained(self) -> None:
        self.assertFalse(self.sandbox.contains(Path("/repository")))
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("../repository", ROOT)

    def test_current_dir_outside_root_is_denied(self) -> None:
        with self.assertRaises(PathDenied):
            self.sandbox.resolve("x", Path("/elsewhere"))

    def test_relative_display_form(self) -> None:
        self.assertEqual(self.sandbox.relative(ROOT), ".")
        self.assertEqual(self.sandbox.relative(ROOT / "a" / "b"), "a/b")

    def test_root_must_be_absolute(self) -> None:
        with self.assertRaises(ValueError):
            PathSandbox("relative/root")

    def test_random_parent_chains_never_escape(self) -> None:
        rng = random.Random(1234)
        segments = ["..", ".", "a", "b", "c", ""]
        for _ in range(2000):
            depth = rng.randint(0, 3)
            current = ROOT.joinpath(*["d"] * depth)
            candidate = "/".join(rng.choice(segments) for _ in range(rng.randint(1, 8))).lstrip("/")
            try:
                resolved = self.sandbox.resolve(candidate, current)
            except PathDenied:
                continue
            with self.subTest(candidate=candidate, current=current):
                self.assertTrue(resolved == ROOT or resolved.is_relative_to(ROOT))
                self.assertNotIn("..", resolved.parts)

    def test_resolve_path_function_matches_method(self) -> None:
        self.assertEqual(resolve_path("sub", ROOT, ROOT), ROOT / "sub")
        with self.assertRaises(PathDenied):
            resolve_path("../..", ROOT / "sub", ROOT)


if __name__ == "__main__":
    unittest.main()
