"""Pager viewport controller.

``PagerEngine`` maps a rendered line sequence onto a bounded viewport and
applies one decoded key at a time. ``run`` is the blocking control loop;
transitions are plain methods so they can be driven without a terminal.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..ansi import strip_ansi
from ..errors import InvalidSearchPattern
from ..input.keys import KeyKind, LogicalKey
from ..input.line_editor import LineEditor
from ..terminal import TerminalHandle
from ..ui_theme import DEFAULT_THEME, UITheme
from .screen import compose_frame, viewport_height_for
from .state import PagerViewState

logger = logging.getLogger(__name__)

SearchPrompt = Callable[[], "str | None"]


class PagerEngine:
    def __init__(
        self,
        *,
        theme: UITheme = DEFAULT_THEME,
        regex_search: bool = False,
        title: str = "",
        search_prompt: SearchPrompt | None = None,
    ) -> None:
        self.theme = theme
        self.regex_search = regex_search
        self.title = title
        self.search_prompt = search_prompt
        self.lines: tuple[str, ...] = ()
        self._plain_lines: tuple[str, ...] = ()
        self._pattern: re.Pattern[str] | None = None
        self.state = PagerViewState(total_lines=0, viewport_height=1, viewport_width=1)

    def open(self, lines: tuple[str, ...] | list[str], viewport_width: int, viewport_height: int) -> PagerViewState:
        """Start a fresh view over a snapshot of ``lines``."""
        self.lines = tuple(lines)
        self._plain_lines = tuple(strip_ansi(line) for line in self.lines)
        self._pattern = None
        self.state = PagerViewState(
            total_lines=len(self.lines),
            viewport_height=max(1, viewport_height),
            viewport_width=max(1, viewport_width),
        )
        return self.state

    # -- scrolling ----------------------------------------------------------

    def scroll_down(self) -> None:
        state = self.state
        if state.top_line + state.viewport_height < state.total_lines:
            state.top_line += 1

    def scroll_up(self) -> None:
        if self.state.top_line > 0:
            self.state.top_line -= 1

    def page_down(self) -> None:
        state = self.state
        state.top_line = min(state.top_line + state.viewport_height, state.max_top_line)

    def page_up(self) -> None:
        state = self.state
        state.top_line = max(state.top_line - state.viewport_height, 0)

    def go_home(self) -> None:
        self.state.top_line = 0

    def go_end(self) -> None:
        self.state.top_line = self.state.max_top_line

    def resize(self, viewport_width: int, viewport_height: int) -> None:
        state = self.state
        state.viewport_width = max(1, viewport_width)
        state.viewport_height = max(1, viewport_height)
        state.top_line = min(state.top_line, state.max_top_line)

    # -- search -------------------------------------------------------------

    def _compile(self, term: str) -> re.Pattern[str]:
        if not self.regex_search:
            return re.compile(re.escape(term), re.IGNORECASE)
        try:
            pattern = re.compile(term, re.IGNORECASE)
        except re.error as exc:
            raise InvalidSearchPattern(term, str(exc)) from exc
        if pattern.search("") is not None:
            raise InvalidSearchPattern(term, "pattern matches empty text")
        return pattern

    def search(self, term: str) -> None:
        """Search every line for ``term`` and jump to the first match.

        An empty or all-blank term clears the search. A malformed pattern raises
        ``InvalidSearchPattern`` before any state changes.
        """
        state = self.state
        if not term.strip():
            state.search_term = ""
            state.match_lines = []
            state.current_match_index = 0
            self._pattern = None
            return

        pattern = self._compile(term)
        if self.regex_search:
            matches = [idx for idx, line in enumerate(self._plain_lines) if pattern.search(line)]
        else:
            folded = term.casefold()
            matches = [idx for idx, line in enumerate(self._plain_lines) if folded in line.casefold()]

        state.search_term = term
        state.match_lines = matches
        state.current_match_index = 0
        self._pattern = pattern
        logger.debug("search %r matched %d lines", term, len(matches))
        if matches:
            self._jump_to_current_match()
        else:
            state.message = "Pattern not found"

    def _jump_to_current_match(self) -> None:
        state = self.state
        line = state.current_match_line
        if line is None:
            return
        # A match near the end keeps the viewport full; it stays on screen.
        state.top_line = min(line, state.max_top_line)

    def next_match(self) -> None:
        state = self.state
        if not state.match_lines:
            return
        state.current_match_index = (state.current_match_index + 1) % len(state.match_lines)
        self._jump_to_current_match()

    def prev_match(self) -> None:
        state = self.state
        if not state.match_lines:
            return
        state.current_match_index = (state.current_match_index - 1) % len(state.match_lines)
        self._jump_to_current_match()

    def _prompt_and_search(self) -> None:
        if self.search_prompt is None:
            return
        term = self.search_prompt()
        try:
            self.search(term or "")
        except InvalidSearchPattern as exc:
            self.state.message = str(exc)

    # -- dispatch -----------------------------------------------------------

    def apply_key(self, key: LogicalKey) -> bool:
        """Apply one key; return ``False`` once the pager should close."""
        state = self.state
        state.message = ""
        if state.show_help:
            state.show_help = False
            return True

        kind = key.kind
        if kind is KeyKind.QUIT or key.is_char("q"):
            return False
        if kind in (KeyKind.DOWN, KeyKind.ENTER) or key.is_char("j"):
            self.scroll_down()
        elif kind is KeyKind.UP or key.is_char("k"):
            self.scroll_up()
        elif kind in (KeyKind.SPACE, KeyKind.PAGE_DOWN) or key.is_char("f"):
            self.page_down()
        elif kind is KeyKind.PAGE_UP or key.is_char("b"):
            self.page_up()
        elif kind is KeyKind.HOME or key.is_char("g"):
            self.go_home()
        elif kind is KeyKind.END or key.is_char("G"):
            self.go_end()
        elif key.is_char("/"):
            self._prompt_and_search()
        elif key.is_char("n"):
            self.next_match()
        elif key.is_char("N"):
            self.prev_match()
        elif key.is_char("h") or key.is_char("?"):
            state.show_help = True
        return True

    # -- terminal loop --------------------------------------------------------

    def frame(self) -> str:
        return compose_frame(
            self.state,
            self.lines,
            pattern=self._pattern,
            title=self.title,
            theme=self.theme,
        )

    def _terminal_search_prompt(self, terminal: TerminalHandle) -> SearchPrompt:
        def prompt() -> str | None:
            _columns, rows = terminal.size()
            terminal.write(f"\x1b[{rows};1H\x1b[2K\x1b[?25h")
            try:
                return LineEditor(terminal).read_line("/")
            finally:
                terminal.write("\x1b[?25l")

        return prompt

    def run(self, terminal: TerminalHandle) -> None:
        """Blocking control loop: redraw, read one key, apply, until quit."""
        if self.search_prompt is None:
            self.search_prompt = self._terminal_search_prompt(terminal)
        running = True
        while running:
            columns, rows = terminal.size()
            if (columns, viewport_height_for(rows)) != (self.state.viewport_width, self.state.viewport_height):
                self.resize(columns, viewport_height_for(rows))
            terminal.write(self.frame())
            running = self.apply_key(terminal.read_key())


def page_lines(
    terminal: TerminalHandle,
    lines: tuple[str, ...] | list[str],
    *,
    title: str = "",
    theme: UITheme = DEFAULT_THEME,
    regex_search: bool = False,
) -> PagerEngine:
    """Show ``lines`` full-screen until the user quits; return the engine."""
    engine = PagerEngine(theme=theme, regex_search=regex_search, title=title)
    columns, rows = terminal.size()
    engine.open(lines, columns, viewport_height_for(rows))
    with terminal.raw_mode(), terminal.alternate_screen():
        engine.run(terminal)
    return engine


__all__ = ["PagerEngine", "page_lines"]
