"""Restricted shell: sandbox, filesystem boundary, and the REPL session."""

from .fs import DirEntry, FileSystem, LocalFileSystem, TraversalError, TreeRow, walk_tree
from .sandbox import PathSandbox, resolve_path
from .session import ShellSession

__all__ = [
    "PathSandbox",
    "resolve_path",
    "FileSystem",
    "LocalFileSystem",
    "DirEntry",
    "TreeRow",
    "TraversalError",
    "walk_tree",
    "ShellSession",
]
