"""Build multi-chapter books through an ordered, pluggable stage pipeline.

Source files flow through named stages (frontmatter, templating, markdown
conversion, ids, layouts) and are written per output format. Plugins insert
their own stages before or after existing ones; the bundled table-of-contents
plugin gathers every file's sections and injects the book-wide TOC.

Exports
-------
- ``app``: Cyclopts application for the ``bookbinder`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``BookBuilder``: Programmatic entry point for building a loaded config.

Examples
--------
>>> from bookbinder import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .builder import BookBuilder
from .cli import app, main

__all__ = ["BookBuilder", "app", "main"]
