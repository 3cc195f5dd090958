"""Line editor tests: buffer edits, cancellation, and history recall."""

from __future__ import annotations

import unittest

from fake_terminal import FakeTerminal, keys_for_text
from manshell.input import keys as keys_mod
from manshell.input.line_editor import EditBuffer, LineEditor


class EditBufferTests(unittest.TestCase):
    def test_insert_and_backspace_follow_cursor(self) -> None:
        buffer = EditBuffer()
        for ch in "cat":
            buffer.insert(ch)
        buffer.move_left()
        buffer.backspace()
        self.assertEqual(buffer.value, "ct")
        self.assertEqual(buffer.cursor, 1)

    def test_backspace_at_start_is_noop(self) -> None:
        buffer = EditBuffer()
        self.assertFalse(buffer.backspace())
        self.assertEqual(buffer.value, "")

    def test_cursor_moves_are_clamped(self) -> None:
        buffer = EditBuffer()
        buffer.replace("ab")
        self.assertFalse(buffer.move_right())
        buffer.move_home()
        self.assertFalse(buffer.move_left())
        self.assertEqual(buffer.cursor, 0)
        buffer.move_end()
        self.assertEqual(buffer.cursor, 2)


    def test_insert_after_moving_left_twice(self) -> None:
        buffer = EditBuffer()
        for ch in "abc":
            buffer.insert(ch)
        buffer.move_left()
        buffer.move_left()
        buffer.insert("X")
        self.assertEqual(buffer.value, "aXbc")
        self.assertEqual(buffer.cursor, 2)


class LineEditorTests(unittest.TestCase):
    def test_enter_returns_typed_text(self) -> None:
        terminal = FakeTerminal(keys_for_text("man shell\n"))
        self.assertEqual(LineEditor(terminal).read_line("> "), "man shell")
        self.assertTrue(terminal.output.endswith("\r\n"))

    def test_left_arrow_inserts_mid_line(self) -> None:
        keys = [*keys_for_text("ct"), keys_mod.LEFT, *keys_for_text("a\n")]
        terminal = FakeTerminal(keys)
        self.assertEqual(LineEditor(terminal).read_line(), "cat")

    def test_backspace_removes_character_before_cursor(self) -> None:
        keys = [*keys_for_text("lss"), keys_mod.BACKSPACE, keys_mod.ENTER]
        self.assertEqual(LineEditor(FakeTerminal(keys)).read_line(), "ls")

    def test_quit_on_empty_line_cancels(self) -> None:
        self.assertIsNone(LineEditor(FakeTerminal([keys_mod.QUIT])).read_line())

    def test_quit_with_text_is_ignored(self) -> None:
        keys = [*keys_for_text("pwd"), keys_mod.QUIT, keys_mod.ENTER]
        self.assertEqual(LineEditor(FakeTerminal(keys)).read_line(), "pwd")

    def test_end_of_input_returns_partial_line(self) -> None:
        terminal = FakeTerminal(keys_for_text("pw"))
        editor = LineEditor(terminal)
        self.assertEqual(editor.read_line(), "pw")
        self.assertTrue(terminal.at_eof)
        self.assertIsNone(editor.read_line())

    def test_other_keys_do_not_edit(self) -> None:
        keys = [keys_mod.OTHER, keys_mod.PAGE_UP, *keys_for_text("q\n")]
        self.assertEqual(LineEditor(FakeTerminal(keys)).read_line(), "q")

    def test_up_recalls_history_and_down_restores_draft(self) -> None:
        history = ["ls", "pwd"]
        editor = LineEditor(FakeTerminal(), history)
        for key in keys_for_text("ca"):
            editor.handle_key(key)

        editor.handle_key(keys_mod.UP)
        self.assertEqual(editor.buffer.value, "pwd")
        editor.handle_key(keys_mod.UP)
        self.assertEqual(editor.buffer.value, "ls")
        editor.handle_key(keys_mod.UP)
        self.assertEqual(editor.buffer.value, "ls")
        editor.handle_key(keys_mod.DOWN)
        self.assertEqual(editor.buffer.value, "pwd")
        editor.handle_key(keys_mod.DOWN)
        self.assertEqual(editor.buffer.value, "ca")

    def test_redraw_places_cursor_back_from_end(self) -> None:
        keys = [*keys_for_text("abc"), keys_mod.LEFT, keys_mod.LEFT, keys_mod.ENTER]
        terminal = FakeTerminal(keys)
        LineEditor(terminal).read_line("$ ")
        self.assertIn("\r$ abc\x1b[K\x1b[2D", terminal.writes)


if __name__ == "__main__":
    unittest.main()
