"""Case-insensitive registry of manual pages.

Keys are normalized once, at every insertion and lookup boundary, so call
sites never lower-case names themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors import TopicNotFound
from .types import ManualPage


def normalize_topic(name: str) -> str:
    return name.strip().lower()


class ManualRegistry:
    def __init__(self, pages: Iterable[tuple[str, ManualPage]] = ()) -> None:
        self._pages: dict[str, ManualPage] = {}
        for name, page in pages:
            self.register(name, page)

    def get(self, name: str) -> ManualPage | None:
        return self._pages.get(normalize_topic(name))

    def require(self, name: str) -> ManualPage:
        """Return the page for ``name`` or raise ``TopicNotFound``."""
        page = self.get(name)
        if page is None:
            raise TopicNotFound(name, self.list())
        return page

    def has(self, name: str) -> bool:
        return normalize_topic(name) in self._pages

    def list(self) -> list[str]:
        return sorted(self._pages)

    def items(self) -> Iterator[tuple[str, ManualPage]]:
        for name in self.list():
            yield name, self._pages[name]

    def register(self, name: str, page: ManualPage) -> None:
        key = normalize_topic(name)
        if not key:
            raise ValueError("manual topic name must not be blank")
        self._pages[key] = page

    def unregister(self, name: str) -> bool:
        return self._pages.pop(normalize_topic(name), None) is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        return len(self._pages)


def default_registry() -> ManualRegistry:
    """Build a registry holding the built-in pages."""
    from .pages import BUILTIN_PAGES

    return ManualRegistry(BUILTIN_PAGES)
