"""Load and validate ``book.yaml`` configuration for bookbinder builds.

This subpackage parses the book configuration, flattens the nested ``files``
listing into ordered entries carrying their part placement, and produces
dataclasses (:class:`BookConfig`, :class:`BuildConfig`) that the pipeline
stages consume. The primary entry point is :func:`load_book_config`.

Examples
--------
>>> from pathlib import Path
>>> from bookbinder.config import load_book_config
>>> book = load_book_config(Path("book.yaml"))  # doctest: +SKIP
>>> book.for_format("html").destination  # doctest: +SKIP
PosixPath('/work/book/build/html')
"""

from .loader import load_book_config
from .models import BookConfig, BookConfigError, BuildConfig, FileEntry, FormatConfig

__all__ = [
    "BookConfig",
    "BookConfigError",
    "BuildConfig",
    "FileEntry",
    "FormatConfig",
    "load_book_config",
]
