"""File loading, sanitization, and syntax highlighting for ``cat``/``less``.

Control bytes are neutralized before anything reaches the terminal, so a
file can never move the cursor or ring the bell while it is displayed.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTER = TerminalFormatter(style=DEFAULT_STYLE)


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def colorize_source(source: str, path: Path) -> str:
    """Return ``source`` with ANSI syntax colors chosen by ``path``'s name.

    Unknown file types fall back to the plain-text lexer, which leaves the
    text unchanged apart from the trailing newline pygments guarantees.
    """
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    rendered = pygments_highlight(source, lexer, _FORMATTER)
    if not source.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


def display_source_lines(source: str, path: Path, *, colors: bool) -> list[str]:
    """Sanitize, optionally colorize, and split a file for line-wise display."""
    text = sanitize_terminal_text(source.replace("\t", "    "))
    if colors and text:
        text = colorize_source(text, path)
    return text.splitlines()


__all__ = [
    "read_text",
    "sanitize_terminal_text",
    "colorize_source",
    "display_source_lines",
]
