"""Structured manual page datatypes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ManualSection:
    """A titled block of content lines inside a manual page.

    Lines whose text contains a run of two or more spaces are treated as
    ``term  description`` rows by the renderer.
    """

    title: str
    content: tuple[str, ...]
    subsections: tuple[ManualSection, ...] = ()


@dataclass(frozen=True)
class ManualPage:
    command: str
    synopsis: str
    description: tuple[str, ...]
    sections: tuple[ManualSection, ...] = ()
    see_also: tuple[str, ...] = ()
    author: str | None = None
    version: str | None = None
    philosophy: tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        """First non-blank description line, used by topic listings."""
        return next((line for line in self.description if line.strip()), "")
