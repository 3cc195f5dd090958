"""Full-screen document pager: view state, transitions, and drawing."""

from .engine import PagerEngine, page_lines
from .state import PagerViewState

__all__ = ["PagerEngine", "PagerViewState", "page_lines"]
