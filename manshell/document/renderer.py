"""Manual page rendering.

Turns a ``ManualPage`` into the ordered display lines the pager scrolls
through. Rendering is a pure function of page, width and theme; the pager
keeps the returned tuple as its own snapshot.
"""

from __future__ import annotations

import re

from ..ansi import center, strip_ansi, wrap_words
from ..ui_theme import DEFAULT_THEME, UITheme, style
from .types import ManualPage, ManualSection

TERM_COLUMN_WIDTH = 20
TERM_ROW_RE = re.compile(r"\s{2,}")

_BORDERS: dict[str, tuple[str, str, str]] = {
    "top": ("╔", "═", "╗"),
    "middle": ("╠", "═", "╣"),
    "bottom": ("╚", "═", "╝"),
    "thin": ("─", "─", "─"),
}


def render_border(kind: str, width: int, theme: UITheme = DEFAULT_THEME) -> str:
    left, mid, right = _BORDERS[kind]
    width = max(2, width)
    if kind == "thin":
        return style(mid * width, "border", theme)
    return style(left + mid * (width - 2) + right, "border", theme)


def section_heading(title: str, theme: UITheme = DEFAULT_THEME) -> str:
    return style(f"◆ {title} ◆", "section", theme)


def _render_content_line(line: str, width: int, theme: UITheme, indent: str = "") -> list[str]:
    if not line.strip():
        return [""]

    stripped = line.strip()
    if line.startswith("  "):
        # Indented prose continues the previous item.
        body = f"{indent}    {stripped}"
        return [style(chunk, "option", theme) for chunk in wrap_words(body, width, indent=f"{indent}    ")]

    parts = TERM_ROW_RE.split(stripped, maxsplit=1)
    if len(parts) == 2 and parts[1]:
        term, desc = parts
        lead = f"{indent}  "
        hang = " " * (len(lead) + TERM_COLUMN_WIDTH + 1)
        term_cell = term.ljust(TERM_COLUMN_WIDTH)
        if len(term) > TERM_COLUMN_WIDTH or width - len(hang) < 10:
            # Long terms and narrow screens put the description on its own rows.
            hang = f"{lead}    "
            out = [style(chunk, "command", theme) for chunk in wrap_words(lead + term, width, indent=lead)]
            out.extend(style(chunk, "dim", theme) for chunk in wrap_words(hang + desc, width, indent=hang))
            return out
        chunks = wrap_words(desc, width - len(hang))
        out = [f"{lead}{style(term_cell, 'command', theme)} {style(chunks[0], 'dim', theme)}"]
        out.extend(f"{hang}{style(chunk, 'dim', theme)}" for chunk in chunks[1:])
        return out

    return wrap_words(f"{indent}{stripped}" if indent else line, width, indent=indent)


def _render_section(section: ManualSection, width: int, theme: UITheme, depth: int = 0) -> list[str]:
    lines: list[str] = []
    indent = "  " * depth
    if depth == 0:
        lines.append(render_border("thin", width, theme))
        lines.append("")
        lines.append(section_heading(section.title, theme))
    else:
        lines.append(f"{indent}{style('▸ ' + section.title, 'subheader', theme)}")
    lines.append("")
    for content_line in section.content:
        lines.extend(_render_content_line(content_line, width, theme, indent=indent))
    lines.append("")
    for subsection in section.subsections:
        lines.extend(_render_section(subsection, width, theme, depth + 1))
    return lines


def render_page(page: ManualPage, width: int = 80, theme: UITheme = DEFAULT_THEME) -> tuple[str, ...]:
    """Render ``page`` into display lines no wider than ``width`` cells."""
    width = max(20, width)
    lines: list[str] = [render_border("top", width, theme)]
    for chunk in wrap_words(f"MANUAL - {page.command.upper()}", width):
        lines.append(center(style(chunk, "header", theme), width))
    for chunk in wrap_words(page.synopsis, width):
        lines.append(center(style(chunk, "subheader", theme), width))
    lines.append(render_border("middle", width, theme))
    lines.append("")

    if page.philosophy:
        lines.append(style("◆ PHILOSOPHY ◆", "philosophy", theme))
        lines.append("")
        for line in page.philosophy:
            lines.extend(style(chunk, "dim", theme) for chunk in wrap_words(line, width))
        lines.append("")

    lines.append(section_heading("DESCRIPTION", theme))
    lines.append("")
    for line in page.description:
        lines.extend(wrap_words(line, width))
    lines.append("")

    for section in page.sections:
        lines.extend(_render_section(section, width, theme))

    if page.see_also:
        lines.append(render_border("thin", width, theme))
        lines.append("")
        lines.append(section_heading("SEE ALSO", theme))
        lines.append("")
        joined = ", ".join(page.see_also)
        for chunk in wrap_words(f"  {joined}", width, indent="  "):
            lines.append(style(chunk, "command", theme))
        lines.append("")

    if page.author or page.version:
        lines.append(render_border("thin", width, theme))
        lines.append("")
        if page.author:
            lines.extend(style(chunk, "dim", theme) for chunk in wrap_words(f"Author: {page.author}", width))
        if page.version:
            lines.extend(style(chunk, "dim", theme) for chunk in wrap_words(f"Version: {page.version}", width))

    return tuple(lines)


def render_topic_index(pages: list[tuple[str, ManualPage]], theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Topic listing: one row per page with its summary line."""
    if not pages:
        return [style("No manual pages installed.", "dim", theme)]
    name_width = max(len(name) for name, _page in pages) + 4
    return [
        f"  {style(name.ljust(name_width), 'command', theme)}{style(page.summary, 'dim', theme)}"
        for name, page in pages
    ]


def render_missing_topic(topic: str, available: list[str], theme: UITheme = DEFAULT_THEME) -> list[str]:
    lines = [
        style("◆ ERROR ◆", "accent", theme),
        style(f"No manual entry for '{topic}'", "error", theme),
        "",
        style("Available manual pages:", "dim", theme),
    ]
    lines.extend(f"  {style(name, 'command', theme)}" for name in available)
    return lines


def highlight_matches(line: str, pattern: re.Pattern[str] | None, theme: UITheme = DEFAULT_THEME) -> str:
    """Highlight every ``pattern`` match in the visible text of ``line``.

    Lines without a match are returned untouched. Matching lines lose their
    own styling so highlights never split an escape sequence.
    """
    if pattern is None:
        return line
    plain = strip_ansi(line)
    if pattern.search(plain) is None:
        return line
    if theme.is_plain:
        return plain
    return pattern.sub(lambda match: style(match.group(0), "highlight", theme), plain)


__all__ = [
    "render_page",
    "render_border",
    "section_heading",
    "highlight_matches",
    "render_topic_index",
    "render_missing_topic",
]
