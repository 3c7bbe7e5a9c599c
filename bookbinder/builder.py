"""High-level orchestration for building a book in every enabled format.

:class:`BookBuilder` consumes a :class:`~bookbinder.config.BookConfig`, and for
each format assembles a fresh stage registry (core stages plus plugins), loads
the source files into :class:`~bookbinder.models.FileRecord` objects in book
order, and runs the pipeline. Nothing is shared between formats: every build
gets its own registry, its own ``extras`` context, and its own TOC aggregator.

Example
-------
>>> from pathlib import Path
>>> from bookbinder.config import load_book_config
>>> from bookbinder.builder import BookBuilder
>>> book = load_book_config(Path("book.yaml"))  # doctest: +SKIP
>>> BookBuilder(book).run()  # doctest: +SKIP
[PosixPath('/work/book/build/html/first-chapter.html'), ...]
"""

from __future__ import annotations

import typing as typ

from loguru import logger

from .models import FileRecord
from .pipeline import Pipeline, StageRegistry, register_core_stages
from .pipeline.stages import WRITTEN_KEY
from .plugins import load_plugins

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import BookConfig


class BookBuilder:
    """Build every enabled output format of a book."""

    def __init__(
        self,
        book: BookConfig,
        *,
        formats: cabc.Sequence[str] | None = None,
        include_entry_points: bool = True,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        book : BookConfig
            Parsed book configuration.
        formats : Sequence[str], optional
            Restrict the build to these formats; defaults to every enabled one.
        include_entry_points : bool, optional
            Load plugins advertised by installed packages as well as the
            configured ones.
        """
        self.book = book
        self.formats = list(formats) if formats else list(book.enabled_formats)
        self.include_entry_points = include_entry_points

    def build_registry(self) -> StageRegistry:
        """Return a registry with the core stages and all plugin stages."""
        registry = StageRegistry()
        register_core_stages(registry)
        load_plugins(
            registry,
            self.book.plugins,
            include_entry_points=self.include_entry_points,
        )
        return registry

    def load_records(self) -> list[FileRecord]:
        """Read every configured source file into a record, in book order."""
        return [
            FileRecord(
                relative_path=entry.relative_path,
                contents=entry.path.read_bytes(),
                part=entry.part,
                parent_part=entry.parent_part,
                source_path=entry.path,
            )
            for entry in self.book.files
        ]

    def build_format(self, name: str) -> list[Path]:
        """Run the pipeline for one format and return the written paths."""
        config = self.book.for_format(name)
        registry = self.build_registry()
        logger.debug("stage order for {}: {}", name, registry.names())
        extras: dict[str, typ.Any] = {}
        Pipeline(registry).run(config, self.load_records(), extras)
        return list(extras.get(WRITTEN_KEY, []))

    def run(self) -> list[Path]:
        """Build every selected format.

        Returns
        -------
        list[Path]
            Paths written across all formats, grouped by format in build order.
        """
        written: list[Path] = []
        for name in self.formats:
            logger.info("building {} format", name)
            written.extend(self.build_format(name))
        return written


__all__ = ["BookBuilder"]
