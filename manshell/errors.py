"""Error kinds raised by the pager, shell, and document layers.

Every ``ManshellError`` is recoverable: the shell prints it and keeps going.
``OSError`` stays the unexpected-I/O kind and is handled at the same
boundary. ``TerminalRestoreError`` is deliberately outside this hierarchy.
"""

from __future__ import annotations


class ManshellError(Exception):
    """Base class for recoverable, user-facing failures."""


class TopicNotFound(ManshellError):
    def __init__(self, topic: str, available: list[str] | None = None) -> None:
        super().__init__(f"No manual entry for '{topic}'")
        self.topic = topic
        self.available = list(available or [])


class PathDenied(ManshellError):
    def __init__(self, candidate: str) -> None:
        super().__init__(f"Access denied: {candidate}")
        self.candidate = candidate


class PathNotFound(ManshellError):
    def __init__(self, display: str) -> None:
        super().__init__(f"No such file or directory: {display}")
        self.display = display


class NotADirectory(ManshellError):
    def __init__(self, display: str) -> None:
        super().__init__(f"Not a directory: {display}")
        self.display = display


class IsADirectory(ManshellError):
    def __init__(self, display: str) -> None:
        super().__init__(f"Is a directory: {display}")
        self.display = display


class InvalidSearchPattern(ManshellError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class TerminalRestoreError(RuntimeError):
    """Raised when cooked mode could not be restored; always fatal."""

    def __init__(self, fd: int, cause: BaseException) -> None:
        super().__init__(f"failed to restore terminal mode on fd {fd}: {cause}")
        self.fd = fd
