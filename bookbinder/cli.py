"""Cyclopts CLI entrypoint for building books with bookbinder.

The ``bookbinder`` console script reads ``book.yaml``, runs the stage pipeline
for each enabled output format, and prints the path of every written file.
``bookbinder stages`` prints the resolved stage order, which is handy when
writing a plugin that positions itself relative to an existing stage.

Examples
--------
Build every enabled format of the book in the current directory:

>>> from bookbinder.cli import main
>>> main()  # doctest: +SKIP

Build only the HTML format of another book:

>>> from bookbinder.cli import app
>>> app(["build", "--config", "novel/book.yaml", "--format", "html"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger

from .builder import BookBuilder
from .config import load_book_config

DEFAULT_CONFIG = Path("book.yaml")

app = App(name="bookbinder", config=cyclopts.config.Env("BOOKBINDER_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="{level}: {message}",
        colorize=False,
    )


@app.command(help="Build the book in every enabled (or the selected) format.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="BOOKBINDER_CONFIG")
    ] = DEFAULT_CONFIG,
    formats: typ.Annotated[
        list[str] | None,
        Parameter(name="--format", help="Format to build; repeat for several"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log every stage and file at debug level")
    ] = False,
) -> None:
    """Build the configured book.

    Parameters
    ----------
    config : Path, optional
        Path to ``book.yaml`` (overridable via ``BOOKBINDER_CONFIG``).
    formats : list[str] or None, optional
        Formats to build; ``None`` builds every enabled format.
    verbose : bool, optional
        Emit debug logging to stderr.

    Raises
    ------
    BookConfigError
        If the configuration is invalid or a requested format is not enabled.
    BuildError
        If any stage fails for any file.
    """
    _configure_logging(verbose=verbose)
    book = load_book_config(config)
    written = BookBuilder(book, formats=formats).run()
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the resolved stage order for the book.")
def stages(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to book config", env_var="BOOKBINDER_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print one stage name per line in execution order."""
    _configure_logging(verbose=False)
    book = load_book_config(config)
    for name in BookBuilder(book).build_registry().names():
        print(name)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``bookbinder`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
