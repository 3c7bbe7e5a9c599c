"""Core build stages: frontmatter, liquid, markdown, ids, layouts, and write.

Every stage is a plain function ``(config, stream, extras) -> stream`` wrapping
the incoming stream with a per-file transform. Collaborators that are costly
to create (the template renderer, the markdown renderer) are created once per
build and kept in ``extras`` so that plugins reuse the same instances.

The default order is::

    frontmatter -> liquid -> markdown -> ids -> layouts -> write

Plugins position themselves relative to these names, for example the TOC
plugin runs ``toc:placeholders`` before ``liquid``.
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from loguru import logger

from bookbinder._constants import MARKDOWN_SUFFIXES
from bookbinder.documents import is_section_element
from bookbinder.frontmatter import split_frontmatter
from bookbinder.markup import HtmlContentRenderer
from bookbinder.templating import CompiledTemplate, TemplateRenderer

from .streams import transform

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import Tag

    from bookbinder.config import BuildConfig
    from bookbinder.models import FileRecord

    from .registry import StageRegistry

    Stream = cabc.Iterator[FileRecord]
    Extras = dict[str, typ.Any]

TEMPLATES_KEY = "templates"
MARKUP_KEY = "markup"
WRITTEN_KEY = "written"
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def shared_template_renderer(extras: Extras) -> TemplateRenderer:
    """Return the build's template renderer, creating it on first use."""
    renderer = extras.get(TEMPLATES_KEY)
    if renderer is None:
        renderer = extras[TEMPLATES_KEY] = TemplateRenderer()
    return renderer


def shared_markup_renderer(config: BuildConfig, extras: Extras) -> HtmlContentRenderer:
    """Return the build's markdown renderer, creating it on first use."""
    renderer = extras.get(MARKUP_KEY)
    if renderer is None:
        renderer = extras[MARKUP_KEY] = HtmlContentRenderer(config.pygments_style)
    return renderer


def include_paths(record: FileRecord, config: BuildConfig) -> list[Path]:
    """Return the include search path for ``record``.

    A page may name its own include directories in frontmatter (``includes``);
    otherwise the build-wide ``liquid.includes`` setting applies.
    """
    page_includes = record.page.get("includes")
    if isinstance(page_includes, str):
        page_includes = [page_includes]
    if page_includes:
        return [config.root / str(path) for path in page_includes]
    return list(config.includes)


def book_locals(config: BuildConfig) -> dict[str, typ.Any]:
    return {"title": config.title, "format": config.format}


def extract_frontmatter(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Move each file's YAML frontmatter into ``page_locals["page"]``."""

    def _extract(record: FileRecord) -> FileRecord:
        meta, body = split_frontmatter(record.text)
        record.page.update(meta)
        record.text = body
        return record

    return transform(stream, _extract)


def render_liquid(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Render each file's source as a template using its page locals."""
    renderer = shared_template_renderer(extras)

    def _render(record: FileRecord) -> FileRecord:
        compiled = renderer.compile(record.text, name=record.relative_path)
        local_vars = {**record.page_locals, "book": book_locals(config)}
        record.text = renderer.render(
            compiled, local_vars, include_paths(record, config), cache=False
        )
        return record

    return transform(stream, _render)


def convert_markdown(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Convert markdown files to HTMLBook HTML and rename them to ``.html``."""
    renderer = shared_markup_renderer(config, extras)

    def _convert(record: FileRecord) -> FileRecord:
        if record.suffix not in MARKDOWN_SUFFIXES:
            return record
        chapter_type = str(record.page.get("data_type", "chapter"))
        record.text = renderer.markdown(record.text, chapter_type=chapter_type)
        record.with_suffix(".html")
        logger.debug("converted markdown for {}", record.relative_path)
        return record

    return transform(stream, _convert)


def assign_ids(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Give every section without an ``id`` a unique slug from its heading.

    The parsed document stays cached on the record so later stages can query
    it without re-parsing.
    """

    def _assign(record: FileRecord) -> FileRecord:
        document = record.document
        used = {str(tag["id"]) for tag in document.find_all(id=True)}
        changed = False
        for index, section in enumerate(document.find_all(is_section_element), 1):
            if section.get("id"):
                continue
            base = _slugify(_heading_text(section)) or f"{section['data-type']}-{index}"
            section["id"] = _unique_anchor(base, used)
            changed = True
        if changed:
            record.sync_document()
        return record

    return transform(stream, _assign)


def apply_layouts(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Wrap each file's content in the format layout, when one is configured."""
    if config.layout is None:
        return stream
    renderer = shared_template_renderer(extras)
    markup = shared_markup_renderer(config, extras)
    compiled = _compile_layout(renderer, config.layout)

    def _wrap(record: FileRecord) -> FileRecord:
        local_vars = {
            **record.layout_locals,
            "content": record.text,
            "page": record.page,
            "book": book_locals(config),
            "pygments_css": markup.stylesheet,
        }
        record.text = renderer.render(
            compiled, local_vars, include_paths(record, config)
        )
        return record

    return transform(stream, _wrap)


def write_files(config: BuildConfig, stream: Stream, extras: Extras) -> Stream:
    """Write each record below the format destination and record the path."""
    written: list[Path] = extras.setdefault(WRITTEN_KEY, [])

    def _write(record: FileRecord) -> FileRecord:
        output_path = config.destination / record.relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(record.contents)
        written.append(output_path)
        logger.info("wrote {}", output_path)
        return record

    return transform(stream, _write)


def register_core_stages(registry: StageRegistry) -> None:
    """Register the default stages in build order."""
    registry.register("frontmatter", extract_frontmatter)
    registry.register("liquid", render_liquid)
    registry.register("markdown", convert_markdown)
    registry.register("ids", assign_ids)
    registry.register("layouts", apply_layouts)
    registry.register("write", write_files)


def _compile_layout(renderer: TemplateRenderer, layout: Path) -> CompiledTemplate:
    if not layout.is_file():
        msg = f"Layout '{layout}' not found."
        raise FileNotFoundError(msg)
    return renderer.compile(layout.read_text(encoding="utf-8"), name=str(layout))


def _heading_text(section: Tag) -> str:
    header = section.find("header", recursive=False)
    container = header if header is not None else section
    heading = container.find(HEADING_TAGS, recursive=False)
    return heading.get_text() if heading is not None else ""


def _slugify(value: str) -> str:
    """Convert a string into a lowercase hyphen-separated slug."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def _unique_anchor(base: str, used: set[str]) -> str:
    """Return a unique anchor, appending numeric suffixes and mutating ``used``."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "apply_layouts",
    "assign_ids",
    "book_locals",
    "convert_markdown",
    "extract_frontmatter",
    "include_paths",
    "register_core_stages",
    "render_liquid",
    "shared_markup_renderer",
    "shared_template_renderer",
    "write_files",
]
