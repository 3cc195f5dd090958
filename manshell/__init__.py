"""Public package surface for manshell.

Exports ``main`` for programmatic CLI invocation and the package version.
Most implementation lives in submodules under ``manshell``.
"""

from __future__ import annotations

__version__ = "2.0.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main", "__version__"]
