"""Pager frame composition and the key-help overlay.

Everything here is presentation-only and side-effect free: functions return
the full text of one redraw and the caller writes it to the terminal.
"""

from __future__ import annotations

import re

from ..ansi import clip_ansi_line, display_width
from ..document.renderer import highlight_matches, render_border
from ..ui_theme import DEFAULT_THEME, UITheme, style
from .state import PagerViewState

CLEAR_SCREEN = "\x1b[H\x1b[2J"
STATUS_ROWS = 2
KEY_HINT = "[q:quit j/k:scroll /:search ?:help]"

HELP_ROWS: tuple[tuple[str, str], ...] = (
    ("", "NAVIGATION"),
    ("j, Down", "Scroll down one line"),
    ("k, Up", "Scroll up one line"),
    ("Space, PgDn", "Page down"),
    ("b, PgUp", "Page up"),
    ("g, Home", "Go to top"),
    ("G, End", "Go to bottom"),
    ("", "SEARCH"),
    ("/", "Search forward"),
    ("n", "Next search result"),
    ("N", "Previous search result"),
    ("", "OTHER"),
    ("h, ?", "Show this help"),
    ("q", "Quit pager"),
)


def viewport_height_for(rows: int) -> int:
    """Rows available for document lines once the status bar is reserved."""
    return max(1, rows - STATUS_ROWS)


def scroll_percent(state: PagerViewState) -> int:
    if state.total_lines <= 0:
        return 100
    return min(100, (state.bottom_line * 100) // state.total_lines)


def status_text(state: PagerViewState, title: str = "") -> str:
    """Plain status bar text: position, percentage, search and notices."""
    if state.total_lines:
        position = f"Lines {state.top_line + 1}-{state.bottom_line}/{state.total_lines}"
    else:
        position = "Lines 0-0/0"
    parts = [f"{position} ({scroll_percent(state)}%)"]
    if state.search_term:
        count = len(state.match_lines)
        noun = "match" if count == 1 else "matches"
        parts.append(f'Search: "{state.search_term}" ({count} {noun})')
    if state.message:
        parts.append(state.message)
    label = f"{title}  " if title else ""
    return f"{label}{' | '.join(parts)}  {KEY_HINT}"


def help_overlay_lines(theme: UITheme = DEFAULT_THEME) -> list[str]:
    lines = [style("MANUAL PAGER CONTROLS", "header", theme), ""]
    for keys, text in HELP_ROWS:
        if not keys:
            if len(lines) > 2:
                lines.append("")
            lines.append(style(f"◆ {text} ◆", "section", theme))
            lines.append("")
            continue
        lines.append(f"  {keys.ljust(13)}{style(text, 'dim', theme)}")
    lines.append("")
    lines.append(style("Press any key to continue...", "dim", theme))
    return lines


def compose_frame(
    state: PagerViewState,
    lines: tuple[str, ...],
    *,
    pattern: re.Pattern[str] | None = None,
    title: str = "",
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Return the full-screen redraw for the current view."""
    width = max(1, state.viewport_width)
    out: list[str] = [CLEAR_SCREEN]

    if state.show_help:
        body = help_overlay_lines(theme)[: state.viewport_height + STATUS_ROWS]
        out.append("\r\n".join(clip_ansi_line(line, width) for line in body))
        return "".join(out)

    rows: list[str] = []
    for line in lines[state.top_line : state.bottom_line]:
        rows.append(clip_ansi_line(highlight_matches(line, pattern, theme), width))
    filler = state.viewport_height - len(rows)
    rows.extend(style("~", "dim", theme) for _ in range(filler))

    rows.append(render_border("bottom", width, theme))
    # Stay one cell short of the edge so the last row never autowraps.
    status = clip_ansi_line(status_text(state, title), max(1, width - 1))
    pad = " " * max(0, width - 1 - display_width(status))
    rows.append(style(status + pad, "status", theme))
    out.append("\r\n".join(rows))
    return "".join(out)


__all__ = [
    "CLEAR_SCREEN",
    "STATUS_ROWS",
    "viewport_height_for",
    "scroll_percent",
    "status_text",
    "help_overlay_lines",
    "compose_frame",
]
