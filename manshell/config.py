"""Persistent JSON config helpers.

Stores the theme, hidden-file preference, history and tree limits, and the
search mode. Malformed or missing config falls back to defaults, and every
loader validates its own key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "manshell"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_HISTORY_LIMIT = 500
DEFAULT_TREE_MAX_DEPTH = 8


@dataclass(frozen=True)
class Settings:
    """Resolved preferences; CLI flags are applied on top of these."""

    theme: str | None = None
    show_hidden: bool = False
    history_limit: int = DEFAULT_HISTORY_LIMIT
    tree_max_depth: int = DEFAULT_TREE_MAX_DEPTH
    search_regex: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    # JSON booleans are ints in Python; they are not valid limits.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _coerce_bool(value: object, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = (load_config() if data is None else data).get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_show_hidden(data: dict[str, object] | None = None) -> bool:
    return _coerce_bool((load_config() if data is None else data).get("show_hidden"))


def load_history_limit(data: dict[str, object] | None = None) -> int:
    return _coerce_positive_int((load_config() if data is None else data).get("history_limit"), DEFAULT_HISTORY_LIMIT)


def load_tree_max_depth(data: dict[str, object] | None = None) -> int:
    return _coerce_positive_int((load_config() if data is None else data).get("tree_max_depth"), DEFAULT_TREE_MAX_DEPTH)


def load_search_regex(data: dict[str, object] | None = None) -> bool:
    return _coerce_bool((load_config() if data is None else data).get("search_regex"))


def load_settings() -> Settings:
    """Read the config file once and return every typed preference."""
    data = load_config()
    return Settings(
        theme=load_theme_name(data),
        show_hidden=load_show_hidden(data),
        history_limit=load_history_limit(data),
        tree_max_depth=load_tree_max_depth(data),
        search_regex=load_search_regex(data),
    )


__all__ = [
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "load_theme_name",
    "load_show_hidden",
    "load_history_limit",
    "load_tree_max_depth",
    "load_search_regex",
    "load_settings",
]
