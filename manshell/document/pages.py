"""Built-in manual pages shipped with manshell."""

from __future__ import annotations

from .. import __version__
from .types import ManualPage, ManualSection

MANSHELL_PAGE = ManualPage(
    command="manshell",
    synopsis="manshell [topic] [--list] [--root DIR] [--theme NAME]",
    description=(
        "Terminal manual viewer with a restricted interactive shell.",
        "",
        "Run with a topic to print its manual page. Run without arguments to",
        "enter the shell, where man, ls, cd and friends browse the directory",
        "tree below the sandbox root.",
    ),
    philosophy=(
        '"Make each program do one thing well." - Doug McIlroy',
        "",
        "Documentation lives next to the system it describes and is read",
        "with the same keys everywhere.",
    ),
    sections=(
        ManualSection(
            title="OPTIONS",
            content=(
                "-l, --list      List available manual topics",
                "-v, --version   Print the version and exit",
                "-h, --help      Print usage and pager controls",
                "--pager         Page the topic interactively instead of printing it",
                "--root DIR      Sandbox root for the shell (default: current directory)",
                "--theme NAME    Color theme (default, ocean)",
                "--no-color      Disable ANSI styling",
                "--width N       Render width for printed pages",
            ),
        ),
        ManualSection(
            title="FILES",
            content=(
                "Preferences are read from config.json in the user config directory.",
                "",
                "theme           Color theme name",
                "show_hidden     List dot-files in ls and tree",
                "history_limit   Number of shell commands remembered",
                "tree_max_depth  Deepest level printed by tree",
                "search_regex    Treat pager searches as regular expressions",
            ),
        ),
        ManualSection(
            title="EXAMPLES",
            content=(
                "# Print the pager controls",
                "manshell pager",
                "",
                "# Browse a project in the restricted shell",
                "manshell --root ~/src/project",
            ),
        ),
    ),
    see_also=("pager", "shell", "sandbox"),
    version=__version__,
)

PAGER_PAGE = ManualPage(
    command="pager",
    synopsis="man <topic> | less <file>",
    description=(
        "Full-screen viewer with vim-style navigation and substring search.",
        "",
        "The pager shows one document at a time. The status bar reports the",
        "visible line range, scroll percentage and the active search.",
    ),
    sections=(
        ManualSection(
            title="NAVIGATION",
            content=(
                "j, Down, Enter   Scroll down one line",
                "k, Up            Scroll up one line",
                "Space, f, PgDn   Page down",
                "b, PgUp          Page up",
                "g, Home          Go to top",
                "G, End           Go to bottom",
            ),
        ),
        ManualSection(
            title="SEARCH",
            content=(
                "/                Search (case-insensitive substring)",
                "n                Next match, wrapping to the first",
                "N                Previous match, wrapping to the last",
                "",
                "An empty search clears the highlighted matches.",
            ),
        ),
        ManualSection(
            title="OTHER",
            content=(
                "h, ?             Show the key help overlay",
                "q, Ctrl-C        Quit the pager",
            ),
        ),
    ),
    see_also=("manshell", "shell"),
)

SHELL_PAGE = ManualPage(
    command="shell",
    synopsis="manshell",
    description=(
        "Restricted shell for reading manuals and browsing files.",
        "",
        "Every path argument is checked against the sandbox root before any",
        "file is touched. There are no pipes, redirections or globs.",
    ),
    sections=(
        ManualSection(
            title="COMMANDS",
            content=(
                "man <topic>     Display the manual page for topic",
                "cd [dir]        Change directory (no argument: sandbox root)",
                "ls [-a] [dir]   List directory contents",
                "pwd             Print working directory",
                "cat <file>      Print file contents",
                "less <file>     View a file in the pager",
                "tree [dir]      Print the directory tree",
                "clear           Clear the screen",
                "history         Show command history",
                "help            Show the command summary",
                "exit            Leave the shell",
            ),
        ),
        ManualSection(
            title="LINE EDITING",
            content=(
                "Left, Right     Move the cursor",
                "Home, End       Jump to start or end of line",
                "Up, Down        Recall previous commands",
                "Backspace       Delete the character before the cursor",
                "Ctrl-D          Leave the shell on an empty line",
            ),
        ),
    ),
    see_also=("sandbox", "pager"),
)

SANDBOX_PAGE = ManualPage(
    command="sandbox",
    synopsis="cd <relative path>",
    description=(
        "Rules that keep the shell inside its root directory.",
    ),
    sections=(
        ManualSection(
            title="RESOLUTION",
            content=(
                "An empty path resolves to the sandbox root.",
                "Absolute paths are always refused.",
                "Relative paths are joined to the current directory and every",
                "'.' and '..' segment is collapsed before the containment check.",
                "A path that ends up outside the root is refused before any",
                "file system access happens.",
            ),
        ),
        ManualSection(
            title="EXAMPLES",
            content=(
                "cd ..           Allowed while below the root",
                "cd ../..        Refused when it would leave the root",
                "ls /etc         Refused: absolute path",
            ),
        ),
    ),
    see_also=("shell",),
)

BUILTIN_PAGES: tuple[tuple[str, ManualPage], ...] = (
    ("manshell", MANSHELL_PAGE),
    ("pager", PAGER_PAGE),
    ("shell", SHELL_PAGE),
    ("sandbox", SANDBOX_PAGE),
)
