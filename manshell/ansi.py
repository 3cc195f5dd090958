"""ANSI-aware text measurement and line shaping utilities.

Styled text stays measurable: stripping escape sequences recovers the plain
text, and widths are counted in terminal cells rather than code points.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def strip_ansi(text: str) -> str:
    """Remove escape sequences, leaving exactly the undecorated text."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies once printed."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    # Keep trailing style resets so a clipped line cannot bleed color.
    while i < n:
        match = ANSI_ESCAPE_RE.match(text, i) if text[i] == "\x1b" else None
        if match:
            out.append(match.group(0))
            i = match.end()
        else:
            i += 1
    return "".join(out)


def center(text: str, width: int) -> str:
    """Left-pad ``text`` so its visible part is centered in ``width`` cells."""
    padding = max(0, (width - display_width(text)) // 2)
    return " " * padding + text


def wrap_words(text: str, width: int, indent: str = "") -> list[str]:
    """Word-wrap plain ``text`` into lines no wider than ``width`` cells.

    Continuation lines are prefixed with ``indent``. Words longer than the
    available width are split hard. Leading indentation of ``text`` is kept
    on the first line.
    """
    if width <= 0:
        return [text]
    if display_width(text) <= width:
        return [text]

    stripped = text.lstrip(" ")
    lead = text[: len(text) - len(stripped)]
    lines: list[str] = []
    current = lead
    has_word = False
    for word in stripped.split():
        candidate = f"{current} {word}" if has_word else current + word
        if display_width(candidate) <= width:
            current = candidate
            has_word = True
            continue
        if has_word:
            lines.append(current)
            current = indent
            has_word = False
        while word and display_width(current + word) > width:
            room = max(1, width - display_width(current))
            lines.append(current + word[:room])
            word = word[room:]
            current = indent
        if word:
            current += word
            has_word = True
    if has_word or not lines:
        lines.append(current)
    return lines


__all__ = [
    "ANSI_ESCAPE_RE",
    "strip_ansi",
    "char_display_width",
    "display_width",
    "clip_ansi_line",
    "center",
    "wrap_words",
]
