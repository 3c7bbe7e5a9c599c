"""Behaviour tests for building a book with a table of contents.

The scenarios write a small book into a temporary directory, run the full
pipeline through :class:`bookbinder.builder.BookBuilder`, and inspect the
written HTML. They cover placeholder substitution in layouts, part grouping
from the nested ``files`` listing, and the link base used by single-document
formats.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_book_build.py -v
"""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from bookbinder._constants import TOC_PLACEHOLDER
from bookbinder.builder import BookBuilder
from bookbinder.config import load_book_config

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "book_build.feature"
scenarios(FEATURE_FILE)

LAYOUT = (
    "<html><body><nav-slot>{{ toc }}</nav-slot>"
    "<main>{{ content }}</main></body></html>\n"
)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_book(root: Path, files_yaml: str) -> Path:
    (root / "one.md").write_text("# Chapter One {#one}\n\nFirst.\n", encoding="utf-8")
    (root / "two.md").write_text("# Chapter Two {#two}\n\nSecond.\n", encoding="utf-8")
    (root / "layout.html").write_text(LAYOUT, encoding="utf-8")
    config_path = root / "book.yaml"
    config_path.write_text(
        dedent(
            """\
            title: Scenario Book
            enabled_formats: [html, pdf]
            layout: layout.html
            """
        )
        + files_yaml,
        encoding="utf-8",
    )
    return config_path


@given("a book with two chapters and a layout that shows the toc")
def given_flat_book(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a two-chapter book whose layout renders ``{{ toc }}``.

    Parameters
    ----------
    tmp_path : Path
        Temporary directory provided by pytest for the book sources.
    scenario_state : dict[str, object]
        Shared state; receives the ``config_path`` of the written book.
    """
    scenario_state["config_path"] = _write_book(
        tmp_path, "files:\n  - one.md\n  - two.md\n"
    )


@given(parsers.parse('a book whose chapters are listed under the part "{label}"'))
def given_part_book(
    tmp_path: Path, scenario_state: dict[str, object], label: str
) -> None:
    files_yaml = dedent(
        f"""\
        files:
          - label: {label}
            files:
              - one.md
              - two.md
        """
    )
    scenario_state["config_path"] = _write_book(tmp_path, files_yaml)


@when(parsers.parse("I build the {fmt} format"))
def when_build(scenario_state: dict[str, object], fmt: str) -> None:
    book = load_book_config(scenario_state["config_path"])  # type: ignore[arg-type]
    builder = BookBuilder(book, formats=[fmt], include_entry_points=False)
    scenario_state["written"] = builder.run()


def _pages(scenario_state: dict[str, object]) -> list[BeautifulSoup]:
    written: list[Path] = scenario_state["written"]  # type: ignore[assignment]
    return [
        BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
        for path in written
    ]


@then("every written page contains the table of contents")
def then_every_page_has_toc(scenario_state: dict[str, object]) -> None:
    pages = _pages(scenario_state)
    assert len(pages) == 2, f"expected two pages, got {len(pages)}"
    for soup in pages:
        assert soup.select_one("nav-slot nav[data-type='toc']") is not None, (
            "expected the layout's toc slot to hold the rendered table of contents"
        )


@then("no page contains the toc placeholder")
def then_no_placeholder(scenario_state: dict[str, object]) -> None:
    written: list[Path] = scenario_state["written"]  # type: ignore[assignment]
    for path in written:
        assert TOC_PLACEHOLDER not in path.read_text(encoding="utf-8"), (
            f"placeholder left behind in {path.name}"
        )


@then("the table of contents links to both chapters in order")
def then_links_in_order(scenario_state: dict[str, object]) -> None:
    soup = _pages(scenario_state)[1]
    links = [(a["href"], a.get_text()) for a in soup.select("nav[data-type='toc'] a")]
    assert links == [
        ("one.html#one", "Chapter One"),
        ("two.html#two", "Chapter Two"),
    ], f"unexpected toc links {links!r}"


@then(parsers.parse('the table of contents groups both chapters under "{label}"'))
def then_grouped_under_part(scenario_state: dict[str, object], label: str) -> None:
    soup = _pages(scenario_state)[0]
    part = soup.select_one("nav[data-type='toc'] > ol > li[data-type='part']")
    assert part is not None, "expected a part entry at the top of the toc"
    assert part.select_one("span").get_text() == label
    hrefs = [a["href"] for a in part.select("a")]
    assert hrefs == ["one.html#one", "two.html#two"]


@then("every table of contents link is a bare fragment")
def then_pdf_fragments(scenario_state: dict[str, object]) -> None:
    soup = _pages(scenario_state)[0]
    hrefs = [a["href"] for a in soup.select("nav[data-type='toc'] a")]
    assert hrefs == ["#one", "#two"], f"expected fragment-only links, got {hrefs!r}"
