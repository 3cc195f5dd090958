"""Restricted interactive shell with manual page access.

``ShellSession`` reads one line at a time through ``LineEditor`` and
dispatches it to a ``_cmd_*`` handler. Every path argument goes through
``PathSandbox`` before any filesystem call. Recoverable errors are printed at
the command boundary and the loop keeps going.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..config import Settings
from ..document.registry import ManualRegistry, default_registry
from ..document.renderer import render_border, render_missing_topic, render_page
from ..errors import (
    IsADirectory,
    ManshellError,
    NotADirectory,
    PathDenied,
    PathNotFound,
    TopicNotFound,
)
from ..highlight import display_source_lines
from ..input.line_editor import LineEditor
from ..pager.engine import page_lines
from ..pager.screen import CLEAR_SCREEN
from ..terminal import TerminalHandle
from ..ui_theme import DEFAULT_THEME, UITheme, style
from .fs import FileSystem, LocalFileSystem, TraversalError, tree_prefix, walk_tree
from .sandbox import PathSandbox

logger = logging.getLogger(__name__)

PROMPT_NAME = "man-shell"
BANNER_WIDTH = 72

HELP_COMMANDS: tuple[tuple[str, str], ...] = (
    ("man <topic>", "Display manual page for topic"),
    ("cd [dir]", "Change directory (restricted to the root and below)"),
    ("ls [-a] [dir]", "List directory contents"),
    ("pwd", "Print working directory"),
    ("cat <file>", "Display file contents"),
    ("less <file>", "View file in the pager"),
    ("tree [dir]", "Display directory tree structure"),
    ("clear", "Clear the screen"),
    ("history", "Show command history"),
    ("help", "Show this help message"),
    ("exit", "Exit the shell"),
)

Handler = Callable[[list[str]], None]


class ShellSession:
    """One interactive session bound to a terminal and a sandbox root."""

    def __init__(
        self,
        terminal: TerminalHandle,
        root: Path | str,
        *,
        registry: ManualRegistry | None = None,
        fs: FileSystem | None = None,
        theme: UITheme = DEFAULT_THEME,
        settings: Settings | None = None,
    ) -> None:
        self.terminal = terminal
        self.sandbox = PathSandbox(root)
        self.registry = registry if registry is not None else default_registry()
        self.fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self.theme = theme
        self.settings = settings if settings is not None else Settings()
        self.current_dir = self.sandbox.root
        self.history: list[str] = []
        self.running = False
        self._commands: dict[str, Handler] = {
            "man": self._cmd_man,
            "cd": self._cmd_cd,
            "ls": self._cmd_ls,
            "pwd": self._cmd_pwd,
            "cat": self._cmd_cat,
            "less": self._cmd_less,
            "more": self._cmd_less,
            "tree": self._cmd_tree,
            "clear": self._cmd_clear,
            "cls": self._cmd_clear,
            "history": self._cmd_history,
            "help": self._cmd_help,
            "?": self._cmd_help,
            "exit": self._cmd_exit,
            "quit": self._cmd_exit,
            "q": self._cmd_exit,
        }

    # -- output ---------------------------------------------------------------

    def _style(self, text: str, tag: str) -> str:
        return style(text, tag, self.theme)

    def echo(self, text: str = "") -> None:
        self.terminal.write(text + "\n")

    def _error(self, label: str, detail: str = "") -> None:
        suffix = f" {detail}" if detail else ""
        self.echo(f"{self._style('✗ ' + label, 'error')}{suffix}")

    def _usage(self, usage: str) -> None:
        self._error("Usage:", usage)
        self.echo()

    def prompt(self) -> str:
        rel = self.sandbox.relative(self.current_dir)
        return (
            f"{self._style(PROMPT_NAME, 'prompt')}:"
            f"{self._style(rel, 'prompt_path')} {self._style('▸', 'accent')} "
        )

    def show_banner(self) -> None:
        width = BANNER_WIDTH
        title = "MAN SHELL"
        tagline = "Interactive Manual Browser with Shell"
        self.echo(render_border("top", width, self.theme))
        self.echo(self._style(title.center(width), "header"))
        self.echo(self._style(tagline.center(width), "accent"))
        self.echo(render_border("bottom", width, self.theme))
        self.echo()
        self.echo(f"{self._style('▸', 'philosophy')} Root Directory: {self._style(str(self.sandbox.root), 'dim')}")
        self.echo(
            f"{self._style('▸', 'philosophy')} Access Level:   "
            f"{self._style('Restricted to the root directory and below', 'dim')}"
        )
        self.echo()
        self.echo(self._style("Type 'help' to see available commands", "section"))
        self.echo(self._style("Type 'man <topic>' to view documentation", "section"))
        self.echo(self._style("Type 'exit' to quit", "section"))
        self.echo()

    # -- dispatch -------------------------------------------------------------

    def _record(self, line: str) -> None:
        self.history.append(line)
        limit = self.settings.history_limit
        if limit > 0 and len(self.history) > limit:
            del self.history[: len(self.history) - limit]

    def process_command(self, line: str) -> None:
        """Run one input line; recoverable failures are printed, not raised."""
        trimmed = line.strip()
        if not trimmed:
            return
        self._record(trimmed)

        command, *args = trimmed.split()
        handler = self._commands.get(command.lower())
        if handler is None:
            self._error("Unknown command:", command)
            self.echo(self._style("Type 'help' for available commands", "dim"))
            self.echo()
            return

        try:
            handler(args)
        except ManshellError as exc:
            logger.info("%s failed: %s", command, exc)
            self._error(str(exc))
            self.echo()
        except OSError as exc:
            logger.warning("%s failed with I/O error", command, exc_info=True)
            self._error("Error:", exc.strerror or str(exc))
            self.echo()

    def _resolve_arg(self, candidate: str) -> Path:
        """Sandbox-check ``candidate``, then confirm symlinks stay under the root."""
        target = self.sandbox.resolve(candidate, self.current_dir)
        real_root = self.fs.real_path(self.sandbox.root)
        if not PathSandbox(real_root).contains(self.fs.real_path(target)):
            logger.info("denied %r: resolves outside the root through a link", candidate)
            raise PathDenied(candidate)
        return target

    def _require_dir(self, candidate: str) -> Path:
        target = self._resolve_arg(candidate)
        if not self.fs.exists(target):
            raise PathNotFound(candidate)
        if not self.fs.is_dir(target):
            raise NotADirectory(candidate)
        return target

    def _require_file(self, candidate: str) -> Path:
        target = self._resolve_arg(candidate)
        if not self.fs.exists(target):
            raise PathNotFound(candidate)
        if self.fs.is_dir(target):
            raise IsADirectory(candidate)
        return target

    # -- commands -------------------------------------------------------------

    def _cmd_man(self, args: list[str]) -> None:
        if not args:
            self._usage("man <topic>")
            return
        topic = args[0]
        try:
            page = self.registry.require(topic)
        except TopicNotFound as exc:
            for line in render_missing_topic(exc.topic, exc.available, self.theme):
                self.echo(line)
            self.echo()
            return
        columns, _rows = self.terminal.size()
        lines = render_page(page, columns, self.theme)
        page_lines(
            self.terminal,
            lines,
            title=f"man {page.command}",
            theme=self.theme,
            regex_search=self.settings.search_regex,
        )

    def _cmd_cd(self, args: list[str]) -> None:
        if not args:
            self.current_dir = self.sandbox.root
            return
        self.current_dir = self._require_dir(args[0])

    def _cmd_ls(self, args: list[str]) -> None:
        show_hidden = self.settings.show_hidden
        operands: list[str] = []
        for arg in args:
            if arg in {"-a", "--all"}:
                show_hidden = True
            elif arg.startswith("-") and arg != "-":
                self._usage("ls [-a] [dir]")
                return
            else:
                operands.append(arg)

        target = self._require_dir(operands[0]) if operands else self.current_dir
        entries = self.fs.list_dir(target, show_hidden=show_hidden)
        self.echo()
        if not entries:
            self.echo(self._style("  (empty)", "dim"))
        for entry in entries:
            if entry.is_dir:
                self.echo(f"  📁 {self._style(entry.name + '/', 'directory')}")
            else:
                self.echo(f"  📄 {self._style(entry.name, 'file')}")
        self.echo()

    def _cmd_pwd(self, args: list[str]) -> None:
        rel = self.sandbox.relative(self.current_dir)
        display = "." if rel == "." else f"./{rel}"
        self.echo()
        self.echo(self._style(str(self.current_dir), "prompt"))
        self.echo(self._style(f"(relative: {display})", "dim"))
        self.echo()

    def _read_lines(self, candidate: str) -> tuple[Path, list[str]]:
        target = self._require_file(candidate)
        source = self.fs.read_text(target)
        return target, display_source_lines(source, target, colors=not self.theme.is_plain)

    def _cmd_cat(self, args: list[str]) -> None:
        if not args:
            self._usage("cat <file>")
            return
        _target, lines = self._read_lines(args[0])
        self.echo()
        for line in lines:
            self.echo(line)
        self.echo()

    def _cmd_less(self, args: list[str]) -> None:
        if not args:
            self._usage("less <file>")
            return
        target, lines = self._read_lines(args[0])
        page_lines(
            self.terminal,
            lines,
            title=self.sandbox.relative(target),
            theme=self.theme,
            regex_search=self.settings.search_regex,
        )

    def _cmd_tree(self, args: list[str]) -> None:
        target = self._require_dir(args[0]) if args else self.current_dir
        directories = 0
        files = 0
        self.echo()
        self.echo(self._style(self.sandbox.relative(target), "prompt"))
        for item in walk_tree(
            self.fs,
            target,
            show_hidden=self.settings.show_hidden,
            max_depth=self.settings.tree_max_depth,
        ):
            if isinstance(item, TraversalError):
                reason = item.error.strerror or str(item.error)
                self.echo(f"{tree_prefix((*item.lineage, True))}{self._style(f'[unreadable: {reason}]', 'error')}")
                continue
            entry = item.entry
            if entry.is_dir:
                directories += 1
                name = self._style(entry.name + "/", "directory")
            else:
                files += 1
                name = self._style(entry.name, "file")
            self.echo(f"{tree_prefix(item.lineage)}{name}")
        dir_noun = "directory" if directories == 1 else "directories"
        file_noun = "file" if files == 1 else "files"
        self.echo()
        self.echo(self._style(f"{directories} {dir_noun}, {files} {file_noun}", "dim"))
        self.echo()

    def _cmd_clear(self, args: list[str]) -> None:
        self.terminal.write(CLEAR_SCREEN)
        self.show_banner()

    def _cmd_history(self, args: list[str]) -> None:
        self.echo()
        if not self.history:
            self.echo(self._style("No command history", "dim"))
            self.echo()
            return
        self.echo(self._style("═══ COMMAND HISTORY ═══", "header"))
        self.echo()
        for index, entry in enumerate(self.history, start=1):
            self.echo(f"  {self._style(str(index).rjust(3), 'dim')} {self._style('▸', 'philosophy')} {entry}")
        self.echo()

    def _cmd_help(self, args: list[str]) -> None:
        self.echo()
        self.echo(self._style("═══ MAN SHELL ═══", "header"))
        self.echo()
        self.echo(self._style("▸ Available Commands", "accent"))
        self.echo()
        for name, desc in HELP_COMMANDS:
            self.echo(f"  {self._style(name.ljust(20), 'philosophy')}{self._style(desc, 'dim')}")
        self.echo()
        self.echo(
            f"{self._style('⚠  Security:', 'warning')} "
            f"{self._style(f'Navigation restricted to {self.sandbox.root} and subdirectories', 'dim')}"
        )
        self.echo()

    def _cmd_exit(self, args: list[str]) -> None:
        edge = "─" * 60
        self.echo()
        self.echo(self._style(f"╭{edge}╮", "prompt"))
        self.echo(f"{self._style('│', 'prompt')}  {self._style('Exiting Man Shell...', 'accent')}")
        self.echo(f"{self._style('│', 'prompt')}  {self._style('Happy hacking!', 'dim')}")
        self.echo(self._style(f"╰{edge}╯", "prompt"))
        self.echo()
        self.running = False

    # -- loop -----------------------------------------------------------------

    def read_command(self) -> str | None:
        with self.terminal.raw_mode():
            return LineEditor(self.terminal, self.history).read_line(self.prompt())

    def run(self) -> int:
        """Blocking REPL loop; returns the process exit status."""
        logger.info("shell started at %s", self.sandbox.root)
        self.running = True
        self.terminal.write(CLEAR_SCREEN)
        self.show_banner()
        while self.running:
            line = self.read_command()
            if line is None:
                self._cmd_exit([])
                break
            self.process_command(line)
        logger.info("shell exited after %d commands", len(self.history))
        return 0


__all__ = ["ShellSession", "HELP_COMMANDS"]
