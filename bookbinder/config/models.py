"""Typed dataclasses describing a book's build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from bookbinder._constants import SINGLE_DOCUMENT_FORMATS


class BookConfigError(ValueError):
    """Raised when the book configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class FormatConfig:
    """Per-format overrides for layout and destination."""

    layout: Path | None = None
    destination: str | None = None


@dc.dataclass(slots=True)
class FileEntry:
    """A source file listed in the configuration, with its part placement.

    Attributes
    ----------
    path : Path
        Absolute path to the source file.
    relative_path : str
        POSIX path relative to the book source directory.
    part : str, optional
        Label of the part that lists this file.
    parent_part : str, optional
        Label of the part enclosing ``part``.
    """

    path: Path
    relative_path: str
    part: str | None = None
    parent_part: str | None = None


@dc.dataclass(slots=True)
class BuildConfig:
    """Settings handed to every stage while building one output format."""

    format: str
    root: Path
    title: str
    destination: Path
    includes: list[Path] = dc.field(default_factory=list)
    layout: Path | None = None
    pygments_style: str = "monokai"

    @property
    def single_document(self) -> bool:
        """Return True when the format renders the whole book as one document."""
        return self.format in SINGLE_DOCUMENT_FORMATS


@dc.dataclass(slots=True)
class BookConfig:
    """Book-wide configuration loaded from ``book.yaml``."""

    root: Path
    source_dir: Path
    title: str
    destination: str
    enabled_formats: list[str]
    files: list[FileEntry]
    includes: list[Path] = dc.field(default_factory=list)
    layout: Path | None = None
    formats: dict[str, FormatConfig] = dc.field(default_factory=dict)
    plugins: list[str] = dc.field(default_factory=list)
    pygments_style: str = "monokai"

    def for_format(self, name: str) -> BuildConfig:
        """Return the build settings for ``name``, applying format overrides.

        Raises
        ------
        BookConfigError
            If ``name`` is not one of the enabled formats.
        """
        if name not in self.enabled_formats:
            msg = f"Format '{name}' is not enabled for this book."
            raise BookConfigError(msg)
        override = self.formats.get(name, FormatConfig())
        destination = override.destination or self.destination
        return BuildConfig(
            format=name,
            root=self.root,
            title=self.title,
            destination=self.root / destination.format(format=name),
            includes=list(self.includes),
            layout=override.layout or self.layout,
            pygments_style=self.pygments_style,
        )


__all__ = [
    "BookConfig",
    "BookConfigError",
    "BuildConfig",
    "FileEntry",
    "FormatConfig",
]
