"""Pager view state.

Owned by exactly one ``PagerEngine`` for the lifetime of one document view.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PagerViewState:
    total_lines: int
    viewport_height: int
    viewport_width: int
    top_line: int = 0
    search_term: str = ""
    match_lines: list[int] = field(default_factory=list)
    current_match_index: int = 0
    message: str = ""
    show_help: bool = False

    @property
    def max_top_line(self) -> int:
        """Return max valid vertical scroll offset for the current document."""
        return max(0, self.total_lines - max(1, self.viewport_height))

    @property
    def bottom_line(self) -> int:
        """Exclusive index of the last visible line."""
        return min(self.top_line + self.viewport_height, self.total_lines)

    @property
    def current_match_line(self) -> int | None:
        if not self.match_lines:
            return None
        return self.match_lines[self.current_match_index]
