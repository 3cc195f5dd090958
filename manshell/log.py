"""Logging setup for the CLI entry point.

The pager and shell own the terminal, so records go to a file when one is
given and are dropped otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(name: str) -> int:
    """Map a level name to its numeric value; unknown names become WARNING."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: str = "WARNING", log_file: Path | str | None = None) -> logging.Logger:
    """Attach one handler to the ``manshell`` logger and return it."""
    logger = logging.getLogger("manshell")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(parse_level(level))
    logger.propagate = False
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(Path(log_file), encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["LOG_LEVELS", "configure_logging", "parse_level"]
