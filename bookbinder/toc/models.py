"""Nodes of the per-file and book-wide table of contents."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True)
class SectionNode:
    """A section heading found in one file.

    Attributes
    ----------
    id : str or None
        Anchor of the section element within its document.
    section_type : str
        HTMLBook ``data-type`` of the element (``chapter``, ``sect1``, ...).
    label : str or None
        Heading text; ``None`` when the section has no heading at all.
    href : str
        Link target, ``<file>#<id>`` or ``#<id>`` for single-document formats.
    level : int
        Depth derived from ``section_type``.
    children : list[SectionNode]
        Nested sections; always empty beyond the maximum TOC depth.
    """

    id: str | None
    section_type: str
    label: str | None
    href: str
    level: int
    children: list[SectionNode] = dc.field(default_factory=list)

    @property
    def is_part(self) -> bool:
        return False

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-friendly mapping; ``label`` is omitted when absent."""
        data: dict[str, typ.Any] = {
            "id": self.id,
            "sectionType": self.section_type,
            "href": self.href,
            "level": self.level,
            "children": [child.to_dict() for child in self.children],
        }
        if self.label is not None:
            data["label"] = self.label
        return data


@dc.dataclass(slots=True)
class PartGroup:
    """A labelled group of sections spanning one or more files.

    Parts are identified by label only, so two files naming the same label
    share one group.
    """

    label: str
    children: list[TocNode] = dc.field(default_factory=list)

    @property
    def is_part(self) -> bool:
        return True

    def to_dict(self) -> dict[str, typ.Any]:
        return {
            "label": self.label,
            "children": [child.to_dict() for child in self.children],
        }


TocNode = SectionNode | PartGroup


@dc.dataclass(slots=True)
class TocDocument:
    """Root of the book-wide table of contents, rebuilt for every build."""

    type: str = "book"
    children: list[TocNode] = dc.field(default_factory=list)

    def to_dict(self) -> dict[str, typ.Any]:
        return {
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


__all__ = ["PartGroup", "SectionNode", "TocDocument", "TocNode"]
