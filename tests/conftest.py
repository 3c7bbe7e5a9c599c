"""Shared fixtures for the bookbinder test suite.

Fixtures here build the small pieces most tests need: a per-format
:class:`~bookbinder.config.BuildConfig` rooted in ``tmp_path``, a factory for
:class:`~bookbinder.models.FileRecord` objects, and an on-disk sample book
with two chapters, a layout, and a ``book.yaml`` describing them.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from bookbinder.config import BuildConfig
from bookbinder.models import FileRecord

if typ.TYPE_CHECKING:
    from pathlib import Path

FIRST_CHAPTER = dedent(
    """\
    ---
    title: Frontmatter test is working
    ---
    # First Heading {#ch1}

    {{ page.title }}

    ## First Details

    Body text.
    """
)

SECOND_CHAPTER = dedent(
    """\
    # Second Heading {#ch2}

    More text.
    """
)

MAIN_LAYOUT = dedent(
    """\
    <html><body>
    <div class="layout">Main layout</div>
    <aside>{{ toc }}</aside>
    <main>{{ content }}</main>
    </body></html>
    """
)


@pytest.fixture
def build_config(tmp_path: Path) -> BuildConfig:
    """Return HTML build settings rooted in a temporary directory."""
    return BuildConfig(
        format="html",
        root=tmp_path,
        title="Fixture Book",
        destination=tmp_path / "build" / "html",
        includes=[tmp_path / "includes"],
    )


@pytest.fixture
def make_record() -> typ.Callable[..., FileRecord]:
    """Return a factory building records from text."""

    def _make(relative_path: str, text: str = "", **kwargs: typ.Any) -> FileRecord:
        return FileRecord.from_text(relative_path, text, **kwargs)

    return _make


@pytest.fixture
def sample_book(tmp_path: Path) -> Path:
    """Write a two-chapter book with a layout and return its config path."""
    (tmp_path / "first-chapter.md").write_text(FIRST_CHAPTER, encoding="utf-8")
    (tmp_path / "second-chapter.md").write_text(SECOND_CHAPTER, encoding="utf-8")
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "main.html").write_text(MAIN_LAYOUT, encoding="utf-8")
    config_path = tmp_path / "book.yaml"
    config_path.write_text(
        dedent(
            """\
            title: Fixture Book
            enabled_formats: [html]
            files:
              - first-chapter.md
              - second-chapter.md
            """
        ),
        encoding="utf-8",
    )
    return config_path
