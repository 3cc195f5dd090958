"""Raw terminal input decoding.

Translates byte chunks read from the input device into ``LogicalKey`` events.
``decode_key`` handles one read at a time; ``KeyDecoder`` splits streams that
carry several keystrokes per chunk or split escape sequences across reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ESC = 0x1B
CSI_PREFIX = b"\x1b["


class KeyKind(Enum):
    CHAR = "char"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    BACKSPACE = "backspace"
    QUIT = "quit"
    SPACE = "space"
    OTHER = "other"


@dataclass(frozen=True)
class LogicalKey:
    """One decoded keystroke; ``char`` is only set for ``KeyKind.CHAR``."""

    kind: KeyKind
    char: str = ""

    @classmethod
    def of_char(cls, ch: str) -> LogicalKey:
        return cls(KeyKind.CHAR, ch)

    def is_char(self, ch: str) -> bool:
        return self.kind is KeyKind.CHAR and self.char == ch


UP = LogicalKey(KeyKind.UP)
DOWN = LogicalKey(KeyKind.DOWN)
LEFT = LogicalKey(KeyKind.LEFT)
RIGHT = LogicalKey(KeyKind.RIGHT)
PAGE_UP = LogicalKey(KeyKind.PAGE_UP)
PAGE_DOWN = LogicalKey(KeyKind.PAGE_DOWN)
HOME = LogicalKey(KeyKind.HOME)
END = LogicalKey(KeyKind.END)
ENTER = LogicalKey(KeyKind.ENTER)
BACKSPACE = LogicalKey(KeyKind.BACKSPACE)
QUIT = LogicalKey(KeyKind.QUIT)
SPACE = LogicalKey(KeyKind.SPACE)
OTHER = LogicalKey(KeyKind.OTHER)

_CSI_FINAL_KEYS: dict[int, LogicalKey] = {
    ord("A"): UP,
    ord("B"): DOWN,
    ord("C"): RIGHT,
    ord("D"): LEFT,
    ord("H"): HOME,
    ord("F"): END,
}

_CSI_TILDE_KEYS: dict[int, LogicalKey] = {
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
}


def decode_key(chunk: bytes) -> LogicalKey:
    """Decode one read from the input device into a logical key.

    The chunk is expected to hold exactly one keystroke, as a local TTY in
    raw mode delivers it. Truncated or unknown escape sequences decode to
    ``OTHER``; nothing is carried over to the next call.
    """
    if not chunk:
        return QUIT

    if len(chunk) == 1:
        byte = chunk[0]
        if byte in (0x03, 0x04):
            return QUIT
        if byte == 0x20:
            return SPACE
        if byte in (0x0A, 0x0D):
            return ENTER
        if byte in (0x7F, 0x08):
            return BACKSPACE
        if 0x20 < byte <= 0x7E:
            return LogicalKey.of_char(chr(byte))
        return OTHER

    if len(chunk) >= 3 and chunk.startswith(CSI_PREFIX):
        code = chunk[2]
        key = _CSI_FINAL_KEYS.get(code)
        if key is not None:
            return key
        key = _CSI_TILDE_KEYS.get(code)
        if key is not None and len(chunk) >= 4 and chunk[3] == ord("~"):
            return key
        return OTHER

    return OTHER


def _csi_end(data: bytes, start: int) -> int | None:
    """Return the index just past a complete CSI sequence at ``start``.

    ``None`` means the sequence is still open at the end of ``data``.
    """
    i = start + 2
    while i < len(data):
        # Final bytes of a control sequence live in 0x40-0x7E.
        if 0x40 <= data[i] <= 0x7E:
            return i + 1
        i += 1
    return None


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyDecoder:
    """Split a byte stream into keystrokes and decode each one.

    With ``hold_partial`` an escape sequence cut off at the end of a chunk is
    kept and completed by the next ``feed``. Without it (local TTY semantics)
    the truncated prefix decodes to ``OTHER`` immediately.
    """

    def __init__(self, *, hold_partial: bool = False) -> None:
        self.hold_partial = hold_partial
        self._pending = b""

    @property
    def pending(self) -> bytes:
        return self._pending

    def feed(self, data: bytes) -> list[LogicalKey]:
        if not data:
            self._pending = b""
            return [QUIT]

        buffer = self._pending + data
        self._pending = b""
        keys: list[LogicalKey] = []
        i = 0
        n = len(buffer)
        while i < n:
            byte = buffer[i]
            if byte == ESC:
                if i + 1 < n and buffer[i + 1] != ord("["):
                    # Meta/alt prefixes are not part of the key vocabulary.
                    keys.append(OTHER)
                    i += 2
                    continue
                end = _csi_end(buffer, i) if i + 1 < n else None
                if end is None:
                    if self.hold_partial:
                        self._pending = buffer[i:]
                    else:
                        keys.append(OTHER)
                    break
                keys.append(decode_key(buffer[i:end]))
                i = end
                continue

            width = _utf8_length(byte)
            if width > 1:
                if i + width > n and self.hold_partial:
                    self._pending = buffer[i:]
                    break
                unit = buffer[i : i + width]
                keys.append(_decode_text_unit(unit))
                i += width
                continue

            keys.append(decode_key(buffer[i : i + 1]))
            i += 1
        return keys

    def flush(self) -> list[LogicalKey]:
        """Give up on a pending prefix, reporting it as ``OTHER``."""
        if not self._pending:
            return []
        self._pending = b""
        return [OTHER]


def _decode_text_unit(unit: bytes) -> LogicalKey:
    try:
        text = unit.decode("utf-8")
    except UnicodeDecodeError:
        return OTHER
    if len(text) == 1 and text.isprintable():
        return LogicalKey.of_char(text)
    return OTHER


__all__ = [
    "KeyKind",
    "LogicalKey",
    "KeyDecoder",
    "decode_key",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "PAGE_UP",
    "PAGE_DOWN",
    "HOME",
    "END",
    "ENTER",
    "BACKSPACE",
    "QUIT",
    "SPACE",
    "OTHER",
]
