"""Path containment for the restricted shell.

``PathSandbox.resolve`` is the hard gate in front of every filesystem call.
It is purely lexical: the candidate is joined and canonicalized in one step,
then the whole result is checked against the root. Nothing here touches the
filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import PathDenied


def _canonical(path: str) -> str:
    return os.path.normpath(path)


class PathSandbox:
    def __init__(self, root: Path | str) -> None:
        root_str = _canonical(os.fspath(root))
        if not os.path.isabs(root_str):
            raise ValueError(f"sandbox root must be absolute: {root_str}")
        self.root = Path(root_str)

    def contains(self, path: Path | str) -> bool:
        """Return whether an absolute, canonical ``path`` is the root or below it."""
        candidate = Path(_canonical(os.fspath(path)))
        if not candidate.is_absolute():
            return False
        if not candidate.is_relative_to(self.root):
            return False
        rel = os.path.relpath(candidate, self.root)
        return rel != os.pardir and not rel.startswith(os.pardir + os.sep)

    def resolve(self, candidate: str, current_dir: Path | str | None = None) -> Path:
        """Resolve user input to an absolute path under the root.

        Raises ``PathDenied`` for absolute input, embedded NUL bytes, and
        anything that canonicalizes to a location outside the root.
        """
        if candidate == "":
            return self.root
        if "\x00" in candidate or os.path.isabs(candidate) or candidate.startswith(("/", os.sep)):
            raise PathDenied(candidate)

        base = self.root if current_dir is None else Path(current_dir)
        if not self.contains(base):
            raise PathDenied(candidate)

        resolved = Path(_canonical(os.path.join(os.fspath(base), candidate)))
        if not self.contains(resolved):
            raise PathDenied(candidate)
        return resolved

    def relative(self, path: Path) -> str:
        """Display form of ``path`` relative to the root (``.`` for the root)."""
        rel = os.path.relpath(path, self.root)
        return "." if rel == os.curdir else Path(rel).as_posix()


def resolve_path(candidate: str, current_dir: Path | str, root: Path | str) -> Path:
    """One-shot form of ``PathSandbox(root).resolve(candidate, current_dir)``."""
    return PathSandbox(root).resolve(candidate, current_dir)


__all__ = ["PathSandbox", "resolve_path"]
