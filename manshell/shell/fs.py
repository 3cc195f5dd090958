"""Filesystem boundary for shell commands.

The session only reaches these calls after ``PathSandbox`` has accepted a
path. ``walk_tree`` is a lazy visitor: unreadable directories come back as
``TraversalError`` items instead of being skipped silently.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..highlight import read_text


@dataclass(frozen=True)
class DirEntry:
    """One directory child plus the metadata listings need."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool = False


@dataclass(frozen=True)
class TreeRow:
    """A visited entry; ``lineage`` holds the is-last flag for each depth."""

    depth: int
    entry: DirEntry
    lineage: tuple[bool, ...]

    @property
    def is_last(self) -> bool:
        return self.lineage[-1]


@dataclass(frozen=True)
class TraversalError:
    depth: int
    path: Path
    error: OSError
    lineage: tuple[bool, ...] = ()


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def list_dir(self, path: Path, show_hidden: bool = False) -> list[DirEntry]: ...

    def read_text(self, path: Path) -> str: ...

    def real_path(self, path: Path) -> Path: ...


def sort_entries(entries: list[DirEntry]) -> list[DirEntry]:
    """Directories first, then files, each group case-insensitively by name."""
    return sorted(entries, key=lambda item: (not item.is_dir, item.name.lower(), item.name))


class LocalFileSystem:
    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path, show_hidden: bool = False) -> list[DirEntry]:
        """List visible children of ``path`` in display order.

        Raises ``OSError`` (``FileNotFoundError``, ``NotADirectoryError``,
        ``PermissionError``) when the directory cannot be scanned.
        """
        children: list[DirEntry] = []
        with os.scandir(path) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_symlink = child.is_symlink()
                    is_dir = child.is_dir(follow_symlinks=True)
                except OSError:
                    is_symlink = False
                    is_dir = False

                children.append(
                    DirEntry(
                        name=name,
                        path=Path(child.path),
                        is_dir=is_dir,
                        is_symlink=is_symlink,
                    )
                )
        return sort_entries(children)

    def read_text(self, path: Path) -> str:
        return read_text(path)

    def real_path(self, path: Path) -> Path:
        return Path(os.path.realpath(path))


def walk_tree(
    fs: FileSystem,
    root: Path,
    *,
    show_hidden: bool = False,
    max_depth: int | None = None,
) -> Iterator[TreeRow | TraversalError]:
    """Yield every entry below ``root`` depth-first in display order.

    Depth starts at 1 for the children of ``root``. Symlinked directories
    are listed but not descended into, which keeps the walk inside the
    directories it started from and free of cycles.
    """

    def visit(directory: Path, depth: int, lineage: tuple[bool, ...]) -> Iterator[TreeRow | TraversalError]:
        try:
            entries = fs.list_dir(directory, show_hidden=show_hidden)
        except OSError as exc:
            yield TraversalError(depth=depth, path=directory, error=exc, lineage=lineage)
            return

        last_index = len(entries) - 1
        for idx, entry in enumerate(entries):
            child_lineage = (*lineage, idx == last_index)
            yield TreeRow(depth=depth, entry=entry, lineage=child_lineage)
            if entry.is_dir and not entry.is_symlink and (max_depth is None or depth < max_depth):
                yield from visit(entry.path, depth + 1, child_lineage)

    yield from visit(root, 1, ())


def tree_prefix(lineage: tuple[bool, ...]) -> str:
    """Connector prefix for a row whose ancestors' is-last flags are ``lineage``."""
    if not lineage:
        return ""
    parts = ["    " if last else "│   " for last in lineage[:-1]]
    parts.append("└── " if lineage[-1] else "├── ")
    return "".join(parts)


__all__ = [
    "DirEntry",
    "TreeRow",
    "TraversalError",
    "FileSystem",
    "LocalFileSystem",
    "sort_entries",
    "walk_tree",
    "tree_prefix",
]
