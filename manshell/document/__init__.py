"""Manual page model, registry, and rendering."""

from .registry import ManualRegistry, default_registry, normalize_topic
from .renderer import highlight_matches, render_page
from .types import ManualPage, ManualSection

__all__ = [
    "ManualPage",
    "ManualSection",
    "ManualRegistry",
    "default_registry",
    "normalize_topic",
    "render_page",
    "highlight_matches",
]
