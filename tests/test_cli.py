"""CLI dispatch and exit-code tests.

Verifies how ``manshell.cli.main`` chooses between printing, listing,
paging, and the interactive shell, and what each path returns.
"""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from manshell import __version__, cli
from manshell.config import Settings
from manshell.document.registry import ManualRegistry
from manshell.document.types import ManualPage
from manshell.errors import TerminalRestoreError
from manshell.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME


def _registry() -> ManualRegistry:
    return ManualRegistry(
        [
            ("alpha", ManualPage(command="alpha", synopsis="alpha [x]", description=("Alpha summary.",))),
            ("beta", ManualPage(command="beta", synopsis="beta", description=("", "Beta summary."))),
        ]
    )


def _run(argv: list[str]) -> tuple[int, str]:
    out = io.StringIO()
    with contextlib.redirect_stdout(out), mock.patch(
        "manshell.cli.load_settings", return_value=Settings()
    ), mock.patch("manshell.cli.configure_logging"):
        code = cli.main(argv, registry=_registry())
    return code, out.getvalue()


class CliOutputTests(unittest.TestCase):
    def test_topic_prints_rendered_page(self) -> None:
        code, output = _run(["ALPHA", "--width", "40"])
        self.assertEqual(code, 0)
        self.assertIn("MANUAL - ALPHA", output)
        self.assertNotIn("\x1b[", output)

    def test_unknown_topic_exits_one_and_lists_topics(self) -> None:
        code, output = _run(["gamma"])
        self.assertEqual(code, 1)
        self.assertIn("No manual entry for 'gamma'", output)
        self.assertIn("  alpha", output)
        self.assertIn("  beta", output)

    def test_list_shows_summaries(self) -> None:
        code, output = _run(["--list"])
        self.assertEqual(code, 0)
        self.assertIn("alpha    Alpha summary.", output)
        self.assertIn("beta     Beta summary.", output)

    def test_version(self) -> None:
        code, output = _run(["-v"])
        self.assertEqual(code, 0)
        self.assertIn(f"v{__version__}", output)

    def test_help_lists_pager_controls(self) -> None:
        code, output = _run(["-h"])
        self.assertEqual(code, 0)
        self.assertIn("Pager Controls:", output)
        self.assertIn("j/k or arrows", output)

    def test_invalid_width_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            _run(["alpha", "--width", "0"])
        self.assertEqual(ctx.exception.code, 2)


class CliThemeTests(unittest.TestCase):
    def test_non_tty_output_is_plain(self) -> None:
        stream = io.StringIO()
        self.assertIs(cli.resolve_cli_theme("ocean", False, stream), PLAIN_THEME)

    def test_tty_output_uses_requested_theme(self) -> None:
        stream = mock.Mock()
        stream.isatty.return_value = True
        self.assertIs(cli.resolve_cli_theme("ocean", False, stream), OCEAN_THEME)
        self.assertIs(cli.resolve_cli_theme(None, False, stream), DEFAULT_THEME)
        self.assertIs(cli.resolve_cli_theme("plain", False, stream), PLAIN_THEME)
        self.assertIs(cli.resolve_cli_theme("ocean", True, stream), PLAIN_THEME)


class CliDispatchTests(unittest.TestCase):
    def test_pager_flag_pages_topic(self) -> None:
        with mock.patch("manshell.cli.open_terminal") as open_terminal, mock.patch(
            "manshell.cli.page_lines"
        ) as page_lines, mock.patch("manshell.cli.sys.stdin") as stdin, mock.patch(
            "manshell.cli.sys.stdout"
        ) as stdout, mock.patch("manshell.cli.load_settings", return_value=Settings()), mock.patch(
            "manshell.cli.configure_logging"
        ):
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            stdout.isatty.return_value = False
            open_terminal.return_value.size.return_value = (60, 20)
            code = cli.main(["alpha", "--pager"], registry=_registry())

        self.assertEqual(code, 0)
        open_terminal.assert_called_once_with(0, 1)
        page_lines.assert_called_once()
        self.assertEqual(page_lines.call_args.kwargs["title"], "man alpha")

    def test_no_topic_starts_shell_at_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch("manshell.cli.run_shell", return_value=0) as run_shell:
                code, _output = _run(["--root", str(root)])

        self.assertEqual(code, 0)
        run_shell.assert_called_once()
        self.assertEqual(run_shell.call_args.args[0], root)

    def test_shell_defaults_to_current_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch("manshell.cli.run_shell", return_value=0) as run_shell:
                    _run([])
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(run_shell.call_args.args[0], root)

    def test_missing_root_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            _run(["--root", "/definitely/not/here"])
        self.assertEqual(ctx.exception.code, 2)

    def test_terminal_restore_failure_exits_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, contextlib.redirect_stderr(io.StringIO()) as err:
            with mock.patch("manshell.cli.run_shell", side_effect=TerminalRestoreError(0, OSError("gone"))):
                code, _output = _run(["--root", tmp])

        self.assertEqual(code, 2)
        self.assertIn("failed to restore terminal mode", err.getvalue())


if __name__ == "__main__":
    unittest.main()
