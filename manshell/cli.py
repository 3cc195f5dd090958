"""Command-line front door for manshell.

Parses CLI options, resolves theme and config, and either prints a manual
page, lists topics, or drops into the restricted interactive shell.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import TextIO

from . import __version__
from .config import Settings, load_settings
from .document.registry import ManualRegistry, default_registry
from .document.renderer import render_missing_topic, render_page, render_topic_index
from .errors import TerminalRestoreError, TopicNotFound
from .log import LOG_LEVELS, configure_logging
from .pager.engine import page_lines
from .shell.session import ShellSession
from .terminal import open_terminal
from .ui_theme import UITheme, available_theme_names, resolve_theme, style

logger = logging.getLogger(__name__)

PROG = "manshell"

PAGER_CONTROLS: tuple[tuple[str, str], ...] = (
    ("j/k or arrows", "Navigate line by line"),
    ("space/b", "Page down/up"),
    ("g/G", "Go to top/bottom"),
    ("/", "Search, then n/N for next/previous match"),
    ("h or ?", "Show pager help"),
    ("q", "Quit"),
)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Browse manual pages in a terminal pager or a restricted shell.",
        add_help=False,
    )
    parser.add_argument("topic", nargs="?", default=None, help="Manual topic to display.")
    parser.add_argument("-l", "--list", action="store_true", help="List all available manual pages.")
    parser.add_argument("-h", "--help", action="store_true", help="Show usage and pager controls.")
    parser.add_argument("-v", "--version", action="store_true", help="Show version information.")
    parser.add_argument("--pager", action="store_true", help="Page TOPIC interactively instead of printing it.")
    parser.add_argument("--root", default=None, help="Sandbox root for the shell (default: current directory).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}, plain).",
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Render width for printed pages (default: terminal width).",
    )
    parser.add_argument("--log-file", default=None, help="Write diagnostic logs to this file.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level for --log-file (default: WARNING).",
    )
    return parser


def resolve_cli_theme(theme_name: str | None, no_color: bool, stream: TextIO) -> UITheme:
    """Pick the theme; ``plain`` wins for --no-color and non-TTY output."""
    plain = no_color or (theme_name or "").strip().lower() == "plain" or not stream.isatty()
    return resolve_theme(theme_name, no_color=plain)


def _write_lines(stream: TextIO, lines) -> None:
    for line in lines:
        stream.write(line + "\n")


def print_help(theme: UITheme, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    lines = [
        style("◆ MANSHELL MANUAL SYSTEM ◆", "header", theme),
        "",
        style("Usage:", "section", theme),
        f"  {PROG} <topic>           Print manual for topic",
        f"  {PROG} <topic> --pager   View manual for topic in the pager",
        f"  {PROG} --list            List all available manuals",
        f"  {PROG} --help            Show this help",
        f"  {PROG} --version         Show version information",
        f"  {PROG}                   Start the interactive shell",
        "",
        style("Options:", "section", theme),
        "  --root DIR          Sandbox root for the shell",
        "  --theme NAME        UI theme",
        "  --no-color          Disable colors",
        "  --width N           Render width for printed pages",
        "  --log-file PATH     Write diagnostic logs to PATH",
        "  --log-level LEVEL   Log level for --log-file",
        "",
        style("Pager Controls:", "section", theme),
    ]
    lines.extend(f"  {keys.ljust(16)}{text}" for keys, text in PAGER_CONTROLS)
    _write_lines(stream, lines)


def print_version(theme: UITheme, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write(style(f"Manshell Manual System v{__version__}", "header", theme) + "\n")
    stream.write(style("Built with Python and the Unix philosophy", "dim", theme) + "\n")


def list_topics(registry: ManualRegistry, theme: UITheme, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    lines = [
        style("◆ MANSHELL MANUAL SYSTEM ◆", "header", theme),
        "",
        style("Available manual pages:", "section", theme),
        "",
        *render_topic_index(list(registry.items()), theme),
        "",
        style(f"Usage: {PROG} <topic>", "dim", theme),
    ]
    _write_lines(stream, lines)


def show_topic(
    registry: ManualRegistry,
    topic: str,
    theme: UITheme,
    *,
    width: int,
    use_pager: bool = False,
    settings: Settings | None = None,
    stream: TextIO | None = None,
) -> int:
    """Print or page ``topic``; return 1 and list topics when it is unknown."""
    stream = stream or sys.stdout
    try:
        page = registry.require(topic)
    except TopicNotFound as exc:
        logger.info("unknown topic %r", topic)
        _write_lines(stream, render_missing_topic(exc.topic, exc.available, theme))
        return 1

    if not use_pager:
        _write_lines(stream, render_page(page, width, theme))
        return 0

    settings = settings or Settings()
    terminal = open_terminal(sys.stdin.fileno(), stream.fileno())
    columns, _rows = terminal.size()
    page_lines(
        terminal,
        render_page(page, columns, theme),
        title=f"man {page.command}",
        theme=theme,
        regex_search=settings.search_regex,
    )
    return 0


def run_shell(root: Path, theme: UITheme, settings: Settings, registry: ManualRegistry) -> int:
    terminal = open_terminal(sys.stdin.fileno(), sys.stdout.fileno())
    session = ShellSession(terminal, root, registry=registry, theme=theme, settings=settings)
    return session.run()


def main(argv: list[str] | None = None, registry: ManualRegistry | None = None) -> int:
    """Parse CLI arguments and dispatch; returns the process exit status.

    ``registry`` is primarily for tests; when omitted the built-in pages are
    used.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    settings = load_settings()
    theme = resolve_cli_theme(args.theme or settings.theme, args.no_color, sys.stdout)
    registry = registry if registry is not None else default_registry()

    if args.version:
        print_version(theme)
        return 0
    if args.help:
        print_help(theme)
        return 0
    if args.list:
        list_topics(registry, theme)
        return 0
    if args.topic is not None:
        width = args.width if args.width is not None else _default_render_width()
        return show_topic(
            registry,
            args.topic,
            theme,
            width=width,
            use_pager=args.pager,
            settings=settings,
        )

    root = Path(args.root) if args.root is not None else Path.cwd()
    if not root.is_dir():
        parser.error(f"root is not a directory: {root}")
    try:
        return run_shell(Path(os.path.realpath(root)), theme, settings, registry)
    except TerminalRestoreError as exc:
        logger.critical("%s", exc)
        sys.stderr.write(f"{PROG}: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
