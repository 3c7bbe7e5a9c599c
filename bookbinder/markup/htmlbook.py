"""Markdown extension that nests headings into HTMLBook sections.

Python-Markdown emits a flat run of ``<h1>``/``<p>``/``<h2>`` blocks. The TOC
and id stages work on HTMLBook structure instead, where every heading opens a
``<section data-type="...">`` that owns the blocks up to the next heading of
the same or higher rank::

    <section data-type="chapter">
      <h1>Title</h1>
      <p>...</p>
      <section data-type="sect1"><h2>Part</h2>...</section>
    </section>

An ``id`` set on a heading (``# Title {#ch1}``) moves to its section.
"""

from __future__ import annotations

import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

HEADING_DEPTHS: dict[str, int] = {f"h{depth}": depth for depth in range(1, 7)}


def section_type_for(depth: int, chapter_type: str = "chapter") -> str:
    """Return the HTMLBook ``data-type`` for a heading of ``depth``."""
    if depth <= 1:
        return chapter_type
    return f"sect{depth - 1}"


class HtmlBookExtension(Extension):
    """Wrap markdown headings in nested HTMLBook ``<section>`` elements."""

    def __init__(self, chapter_type: str = "chapter") -> None:
        super().__init__()
        self.chapter_type = chapter_type

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the sectioning treeprocessor on the Markdown instance."""
        processor = HtmlBookTreeprocessor(md, self.chapter_type)
        # below attr_list (8) so heading ids are already set
        md.treeprocessors.register(processor, "bookbinder_htmlbook_sections", 5)


class HtmlBookTreeprocessor(Treeprocessor):
    """Regroup top-level blocks under the heading that precedes them."""

    def __init__(self, md: Markdown, chapter_type: str) -> None:
        super().__init__(md)
        self.chapter_type = chapter_type

    def run(self, root: Element) -> Element:
        blocks = list(root)
        for block in blocks:
            root.remove(block)

        open_sections: list[tuple[int, Element]] = []
        for block in blocks:
            depth = HEADING_DEPTHS.get(block.tag)
            if depth is None:
                parent = open_sections[-1][1] if open_sections else root
                parent.append(block)
                continue
            while open_sections and open_sections[-1][0] >= depth:
                open_sections.pop()
            parent = open_sections[-1][1] if open_sections else root
            section = etree.SubElement(
                parent,
                "section",
                {"data-type": section_type_for(depth, self.chapter_type)},
            )
            heading_id = block.attrib.pop("id", None)
            if heading_id:
                section.set("id", heading_id)
            section.text = "\n"
            section.tail = "\n"
            section.append(block)
            open_sections.append((depth, section))
        return root


__all__ = [
    "HEADING_DEPTHS",
    "HtmlBookExtension",
    "HtmlBookTreeprocessor",
    "section_type_for",
]
