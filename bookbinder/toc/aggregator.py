"""Assemble per-file section fragments into one book-wide table of contents.

The aggregator is created for a single build. While files stream through the
``toc:generate`` stage it records each file's fragment; once the ``toc:insert``
stage has drained the whole stream it assembles the :class:`TocDocument` by
walking the buffered files in their original order.

Part placement follows the file order strictly:

* files without a part contribute their sections to the root;
* the first file naming a part creates a :class:`PartGroup`, nested under its
  parent part when one is named, and later files with the same part label
  append to that group.

A parent part must already exist when a child part is created, and a label
may only ever appear under one parent. Both violations raise
:class:`~bookbinder.errors.PartAssemblyError` rather than producing a
half-linked tree.
"""

from __future__ import annotations

import typing as typ

from loguru import logger

from bookbinder.errors import PartAssemblyError

from .models import PartGroup, SectionNode, TocDocument

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bookbinder.models import FileRecord

    from .models import TocNode


class TocAggregator:
    """Collect section fragments and build the book table of contents."""

    def __init__(self) -> None:
        self._fragments: dict[str, list[SectionNode]] = {}

    def observe(self, record: FileRecord, sections: cabc.Sequence[SectionNode]) -> None:
        """Remember the section fragment extracted from ``record``."""
        self._fragments[record.relative_path] = list(sections)

    def fragment_for(self, record: FileRecord) -> list[SectionNode]:
        """Return the fragment recorded for ``record`` (empty if none was seen)."""
        return self._fragments.get(record.relative_path, [])

    def __len__(self) -> int:
        return len(self._fragments)

    def assemble(self, records: cabc.Iterable[FileRecord]) -> TocDocument:
        """Build the table of contents from ``records`` in stream order.

        Parameters
        ----------
        records : Iterable[FileRecord]
            Every file of the build, in the order they were streamed.

        Returns
        -------
        TocDocument
            Root node whose children mix sections and part groups.

        Raises
        ------
        PartAssemblyError
            If a file's parent part has not been introduced by an earlier file,
            or a part label reappears under a different parent.
        """
        toc = TocDocument()
        for record in records:
            sections = self.fragment_for(record)
            if record.part is None:
                toc.children.extend(sections)
                continue
            part = self._find_or_create_part(toc, record)
            part.children.extend(sections)
        logger.debug(
            "assembled table of contents with {} root entries", len(toc.children)
        )
        return toc

    def _find_or_create_part(self, toc: TocDocument, record: FileRecord) -> PartGroup:
        label = typ.cast("str", record.part)
        found = _find_part(toc.children, label)
        if found is not None:
            part, parent_label = found
            if parent_label != record.parent_part:
                msg = (
                    f"Part '{label}' in {record.relative_path} is declared under "
                    f"{_describe(record.parent_part)} but already exists under "
                    f"{_describe(parent_label)}."
                )
                raise PartAssemblyError(msg)
            return part

        part = PartGroup(label=label)
        if record.parent_part is None:
            toc.children.append(part)
            return part

        parent = _find_part(toc.children, record.parent_part)
        if parent is None:
            msg = (
                f"Parent part '{record.parent_part}' of part '{label}' in "
                f"{record.relative_path} must be introduced by an earlier file."
            )
            raise PartAssemblyError(msg)
        parent[0].children.append(part)
        return part


def _find_part(
    children: cabc.Sequence[TocNode], label: str, parent_label: str | None = None
) -> tuple[PartGroup, str | None] | None:
    """Depth-first search for the part called ``label`` and its parent's label."""
    for child in children:
        if not isinstance(child, PartGroup):
            continue
        if child.label == label:
            return child, parent_label
        found = _find_part(child.children, label, child.label)
        if found is not None:
            return found
    return None


def _describe(parent_label: str | None) -> str:
    return f"part '{parent_label}'" if parent_label is not None else "the book root"


__all__ = ["TocAggregator"]
