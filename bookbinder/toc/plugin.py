"""Table-of-contents plugin: placeholders, section extraction, and insertion.

Templates run before markdown conversion, but the table of contents can only be
built once every file has been converted and its sections carry ids. The
plugin therefore works in two phases around three stages:

``toc:placeholders`` (before ``liquid``)
    binds ``toc`` to a sentinel string in the page and layout locals, so any
    ``{{ toc }}`` reference renders the sentinel into the content.
``toc:generate`` (after ``ids``)
    extracts each file's sections while the stream flows, before layouts wrap
    the markup in containers that would hide the sections.
``toc:insert`` (after ``layouts``)
    waits for the whole stream, assembles the book TOC, then streams the files
    again replacing every sentinel with the rendered ``toc.html`` partial. A
    paragraph holding nothing but the sentinel is replaced as a whole, so the
    ``<nav>`` never ends up inside a ``<p>``.
"""

from __future__ import annotations

import re
import typing as typ

from loguru import logger

from bookbinder._constants import TOC_INCLUDE_TEMPLATE, TOC_PLACEHOLDER
from bookbinder.errors import StageContractError
from bookbinder.pipeline.stages import include_paths, shared_template_renderer
from bookbinder.pipeline.streams import collect, restream, transform

from .aggregator import TocAggregator
from .sections import extract_sections, link_base_for

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bookbinder.config import BuildConfig
    from bookbinder.models import FileRecord
    from bookbinder.pipeline.registry import StageRegistry

    Stream = cabc.Iterator[FileRecord]
    Extras = dict[str, typ.Any]

AGGREGATOR_KEY = "toc:aggregator"
DOCUMENT_KEY = "toc:document"
PLACEHOLDER_BYTES = TOC_PLACEHOLDER.encode("utf-8")
# markdown wraps a placeholder on its own line in a paragraph
PLACEHOLDER_PARAGRAPH = re.compile(rf"<p>\s*{re.escape(TOC_PLACEHOLDER)}\s*</p>")


def insert_placeholders(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Bind ``toc`` to the placeholder in page and layout locals."""

    def _bind(record: FileRecord) -> FileRecord:
        record.page_locals["toc"] = TOC_PLACEHOLDER
        record.layout_locals["toc"] = TOC_PLACEHOLDER
        return record

    return transform(stream, _bind)


def generate_toc(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Record each file's section fragment in a fresh per-build aggregator."""
    aggregator = TocAggregator()
    extras[AGGREGATOR_KEY] = aggregator

    def _observe(record: FileRecord) -> FileRecord:
        sections = extract_sections(record.document, link_base_for(config, record))
        aggregator.observe(record, sections)
        return record

    return transform(stream, _observe)


def insert_toc(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Drain the stream, assemble the TOC, and substitute every placeholder.

    Raises
    ------
    StageContractError
        If ``toc:generate`` did not run earlier in the same build.
    """
    aggregator: TocAggregator | None = extras.pop(AGGREGATOR_KEY, None)
    if aggregator is None:
        msg = "toc:insert requires toc:generate to run earlier in the pipeline."
        raise StageContractError(msg)

    records = collect(stream)
    toc = aggregator.assemble(records)
    extras[DOCUMENT_KEY] = toc
    logger.debug("table of contents ready for {} files", len(records))

    renderer = shared_template_renderer(extras)
    compiled = renderer.compile(TOC_INCLUDE_TEMPLATE, name="toc include")

    def _substitute(record: FileRecord) -> FileRecord:
        if PLACEHOLDER_BYTES not in record.contents:
            return record
        rendered = renderer.render(
            compiled, {"toc": toc}, include_paths(record, config)
        )
        text = PLACEHOLDER_PARAGRAPH.sub(lambda _match: rendered, record.text)
        record.text = text.replace(TOC_PLACEHOLDER, rendered)
        logger.debug("inserted table of contents into {}", record.relative_path)
        return record

    return transform(restream(records), _substitute)


def register(registry: StageRegistry) -> None:
    """Attach the TOC stages around the ``liquid``, ``ids``, and ``layouts`` stages."""
    registry.before("liquid", "toc:placeholders", insert_placeholders)
    registry.after("ids", "toc:generate", generate_toc)
    registry.after("layouts", "toc:insert", insert_toc)


__all__ = [
    "AGGREGATOR_KEY",
    "DOCUMENT_KEY",
    "generate_toc",
    "insert_placeholders",
    "insert_toc",
    "register",
]
