"""Single-line input editing over decoded keys.

Used by the shell prompt and the pager search prompt. The caller owns raw
mode; the editor only reads keys from and echoes to the terminal handle.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .keys import KeyKind, LogicalKey

if TYPE_CHECKING:
    from ..terminal import TerminalHandle


@dataclass
class EditBuffer:
    text: list[str] = field(default_factory=list)
    cursor: int = 0

    @property
    def value(self) -> str:
        return "".join(self.text)

    def insert(self, ch: str) -> None:
        self.text.insert(self.cursor, ch)
        self.cursor += 1

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        del self.text[self.cursor - 1]
        self.cursor -= 1
        return True

    def move_left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return True

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.text)

    def replace(self, value: str) -> None:
        self.text = list(value)
        self.cursor = len(self.text)

    def take(self) -> str:
        """Return the accumulated text and reset the buffer."""
        value = self.value
        self.text = []
        self.cursor = 0
        return value


class LineEditor:
    """Collect one line of input with cursor movement and history recall."""

    def __init__(self, terminal: TerminalHandle, history: Sequence[str] | None = None) -> None:
        self.terminal = terminal
        self.history = history if history is not None else ()
        self.buffer = EditBuffer()
        self._history_pos: int | None = None
        self._draft = ""

    def handle_key(self, key: LogicalKey) -> tuple[bool, str | None]:
        """Apply one key. Returns ``(done, result)``.

        ``done`` with ``result=None`` means the read was cancelled.
        """
        kind = key.kind
        if kind is KeyKind.CHAR:
            self.buffer.insert(key.char)
        elif kind is KeyKind.SPACE:
            self.buffer.insert(" ")
        elif kind is KeyKind.BACKSPACE:
            self.buffer.backspace()
        elif kind is KeyKind.LEFT:
            self.buffer.move_left()
        elif kind is KeyKind.RIGHT:
            self.buffer.move_right()
        elif kind is KeyKind.HOME:
            self.buffer.move_home()
        elif kind is KeyKind.END:
            self.buffer.move_end()
        elif kind is KeyKind.UP:
            self._recall(-1)
        elif kind is KeyKind.DOWN:
            self._recall(1)
        elif kind is KeyKind.ENTER:
            self._history_pos = None
            return True, self.buffer.take()
        elif kind is KeyKind.QUIT:
            # Ctrl-C/Ctrl-D only end input on an empty line.
            if not self.buffer.text:
                self._history_pos = None
                return True, None
            if self.terminal.at_eof:
                # No more input can arrive; hand back the partial line.
                self._history_pos = None
                return True, self.buffer.take()
        return False, None

    def _recall(self, step: int) -> None:
        if not self.history:
            return
        if self._history_pos is None:
            if step > 0:
                return
            self._draft = self.buffer.value
            self._history_pos = len(self.history)
        target = self._history_pos + step
        if target < 0:
            return
        if target >= len(self.history):
            self._history_pos = None
            self.buffer.replace(self._draft)
            return
        self._history_pos = target
        self.buffer.replace(self.history[target])

    def _redraw(self, prompt: str) -> None:
        text = self.buffer.value
        back = len(text) - self.buffer.cursor
        out = f"\r{prompt}{text}\x1b[K"
        if back > 0:
            out += f"\x1b[{back}D"
        self.terminal.write(out)

    def read_line(self, prompt: str = "") -> str | None:
        """Read keys until Enter (returns text) or cancellation (returns ``None``)."""
        self.buffer = EditBuffer()
        self._history_pos = None
        self._draft = ""
        self._redraw(prompt)
        while True:
            done, result = self.handle_key(self.terminal.read_key())
            if done:
                self.terminal.write("\r\n")
                return result
            self._redraw(prompt)
