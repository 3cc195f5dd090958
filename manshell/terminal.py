"""Terminal handles for the pager and shell loops.

A handle is an explicit resource passed into every loop that reads keys or
draws. ``raw_mode`` brackets a read loop and always restores cooked mode.
``TerminalController`` drives a real TTY; ``StreamTerminal`` serves piped
input where escape sequences may arrive split across reads.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import termios
import threading
import tty
from collections import deque
from collections.abc import Iterator
from typing import Protocol

from .errors import TerminalRestoreError
from .input.keys import KeyDecoder, LogicalKey, decode_key

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 32
# Signals that would otherwise kill the process with the tty left raw.
RESTORE_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


class TerminalHandle(Protocol):
    at_eof: bool

    def read_key(self) -> LogicalKey: ...

    def write(self, text: str) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def raw_mode(self) -> contextlib.AbstractContextManager[None]: ...

    def alternate_screen(self) -> contextlib.AbstractContextManager[None]: ...


class TerminalController:
    """Raw-mode lifecycle and I/O for an interactive TTY."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.at_eof = False
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._raw = False

    @property
    def is_raw(self) -> bool:
        return self._raw

    def enable_raw_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._raw = True

    def disable_raw_mode(self) -> None:
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            raise TerminalRestoreError(self.stdin_fd, exc) from exc
        self._raw = False

    def _exit_on_signal(self, signum, frame) -> None:
        logger.info("received signal %d in raw mode", signum)
        raise SystemExit(128 + signum)

    def _install_signal_handlers(self) -> dict[int, object]:
        """Route termination signals through ``SystemExit`` so cleanup runs.

        Python only accepts handlers from the main thread; elsewhere the
        existing handlers stay in place.
        """
        if threading.current_thread() is not threading.main_thread():
            return {}
        previous: dict[int, object] = {}
        for signum in RESTORE_SIGNALS:
            previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._exit_on_signal)
        return previous

    @staticmethod
    def _restore_signal_handlers(previous: dict[int, object]) -> None:
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that keeps the tty raw for the enclosed block.

        Cooked mode comes back on normal exit, on exceptions, and on
        SIGTERM/SIGHUP, which are turned into ``SystemExit`` while raw.
        """
        if self._raw:
            yield
            return
        previous = self._install_signal_handlers()
        try:
            self.enable_raw_mode()
            try:
                yield
            finally:
                self.disable_raw_mode()
        finally:
            self._restore_signal_handlers(previous)

    @contextlib.contextmanager
    def alternate_screen(self) -> Iterator[None]:
        """Switch to the alternate screen buffer with a hidden cursor."""
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        try:
            yield
        finally:
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")

    def read_key(self) -> LogicalKey:
        chunk = os.read(self.stdin_fd, READ_CHUNK_BYTES)
        if not chunk:
            self.at_eof = True
        return decode_key(chunk)

    def write(self, text: str) -> None:
        if self._raw:
            # Raw mode disables output post-processing, so LF needs an explicit CR.
            text = text.replace("\r\n", "\n").replace("\n", "\r\n")
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def size(self) -> tuple[int, int]:
        term = shutil.get_terminal_size((80, 24))
        return max(1, term.columns), max(1, term.lines)


class StreamTerminal:
    """Handle for non-TTY input (pipes, sockets) with split-safe decoding."""

    def __init__(self, stdin_fd: int, stdout_fd: int, columns: int = 80, rows: int = 24) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._columns = columns
        self._rows = rows
        self.at_eof = False
        self._decoder = KeyDecoder(hold_partial=True)
        self._queue: deque[LogicalKey] = deque()

    def read_key(self) -> LogicalKey:
        while not self._queue:
            chunk = os.read(self.stdin_fd, READ_CHUNK_BYTES)
            if not chunk:
                self.at_eof = True
                self._queue.extend(self._decoder.flush())
            self._queue.extend(self._decoder.feed(chunk))
        return self._queue.popleft()

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def size(self) -> tuple[int, int]:
        return self._columns, self._rows

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        yield

    @contextlib.contextmanager
    def alternate_screen(self) -> Iterator[None]:
        yield


def open_terminal(stdin_fd: int, stdout_fd: int) -> TerminalHandle:
    """Return the handle matching the kind of input attached to ``stdin_fd``."""
    if os.isatty(stdin_fd):
        return TerminalController(stdin_fd, stdout_fd)
    logger.debug("stdin is not a tty; using stream terminal")
    columns, rows = shutil.get_terminal_size((80, 24))
    return StreamTerminal(stdin_fd, stdout_fd, columns=columns, rows=rows)


__all__ = [
    "TerminalHandle",
    "TerminalController",
    "StreamTerminal",
    "open_terminal",
]
