"""Extract the nested section structure of one HTMLBook document.

Only direct children are inspected at every step: a ``<section data-type>``
nested inside a ``<div>`` wrapper is invisible, which is why TOC generation
runs before layouts wrap the content.

Example
-------
>>> from bookbinder.documents import parse_document
>>> doc = parse_document(
...     '<section data-type="chapter" id="ch1"><h1>Intro</h1></section>'
... )
>>> [node.href for node in extract_sections(doc, "intro.html")]
['intro.html#ch1']
"""

from __future__ import annotations

import typing as typ

from bookbinder._constants import MAX_LEVEL, SECTION_LEVELS
from bookbinder.documents import document_root, is_section_element

from .models import SectionNode

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

    from bookbinder.config import BuildConfig
    from bookbinder.models import FileRecord

LABEL_HEADINGS = ("h1", "h2", "h3", "h4", "h5")


def link_base_for(config: BuildConfig, record: FileRecord) -> str:
    """Return the href prefix for sections of ``record``.

    Single-document formats (``pdf``) link within one document, so the prefix
    is empty; other formats link to the file itself.
    """
    return "" if config.single_document else record.relative_path


def extract_sections(document: BeautifulSoup, href_base: str) -> list[SectionNode]:
    """Return the ordered section fragment of ``document``.

    Parameters
    ----------
    document : BeautifulSoup
        Parsed document; ``<body>`` is used as the root when present.
    href_base : str
        Prefix placed before ``#<id>`` in every node's ``href``.

    Returns
    -------
    list[SectionNode]
        Top-level sections with nested children down to ``MAX_LEVEL``. Nodes
        whose ``data-type`` is not a known section type are skipped together
        with everything inside them.
    """
    return _collect(document_root(document), href_base)


def _collect(parent: Tag, href_base: str) -> list[SectionNode]:
    items: list[SectionNode] = []
    for element in parent.find_all(is_section_element, recursive=False):
        section_type = str(element.get("data-type"))
        level = SECTION_LEVELS.get(section_type)
        if level is None:
            continue
        element_id = element.get("id")
        node = SectionNode(
            id=element_id,
            section_type=section_type,
            label=_label(element),
            href=f"{href_base}#{element_id or ''}",
            level=level,
        )
        if level <= MAX_LEVEL:
            node.children = _collect(element, href_base)
        items.append(node)
    return items


def _label(element: Tag) -> str | None:
    """Return the first heading under the section's header, or the section."""
    header = element.find("header", recursive=False)
    container = header if header is not None else element
    for name in LABEL_HEADINGS:
        heading = container.find(name, recursive=False)
        if heading is not None:
            return heading.get_text()
    return None


__all__ = ["LABEL_HEADINGS", "extract_sections", "link_base_for"]
