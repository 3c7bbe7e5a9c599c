"""Tests for the Jinja-backed template renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from bookbinder.errors import TemplateRenderError
from bookbinder.templating import DEFAULT_TEMPLATES_DIR, TemplateRenderer
from bookbinder.toc import TocDocument


def test_render_uses_locals() -> None:
    renderer = TemplateRenderer()
    compiled = renderer.compile("Hello {{ name }}", name="greeting")
    assert renderer.render(compiled, {"name": "<b>book</b>"}, []) == (
        "Hello <b>book</b>"
    ), "string templates should not autoescape"


def test_include_search_order(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    for directory, text in ((first, "first"), (second, "second")):
        directory.mkdir()
        (directory / "part.html").write_text(text, encoding="utf-8")
    (second / "only.html").write_text("only", encoding="utf-8")
    renderer = TemplateRenderer()
    compiled = renderer.compile('{% include "part.html" %}-{% include "only.html" %}')
    assert renderer.render(compiled, {}, [first, second]) == "first-only"
    assert renderer.render(compiled, {}, [second]) == "second-only"


def test_builtin_toc_partial_is_always_available() -> None:
    assert (DEFAULT_TEMPLATES_DIR / "toc.html").is_file()
    renderer = TemplateRenderer()
    compiled = renderer.compile('{% include "toc.html" %}')
    output = renderer.render(compiled, {"toc": TocDocument()}, [])
    assert '<nav data-type="toc">' in output


def test_compile_rejects_bad_syntax() -> None:
    with pytest.raises(TemplateRenderError, match="bad.md"):
        TemplateRenderer().compile("{% for %}", name="bad.md")


def test_missing_include_is_a_render_error(tmp_path: Path) -> None:
    renderer = TemplateRenderer()
    compiled = renderer.compile('{% include "nope.html" %}', name="page.md")
    with pytest.raises(TemplateRenderError, match="page.md"):
        renderer.render(compiled, {}, [tmp_path])


def test_hash_brace_is_plain_text() -> None:
    renderer = TemplateRenderer()
    compiled = renderer.compile("## Setup {#setup}\n{## hidden ##}")
    assert renderer.render(compiled, {}, []) == "## Setup {#setup}\n"


def test_cache_flag_controls_template_reuse() -> None:
    renderer = TemplateRenderer()
    compiled = renderer.compile("{{ n }}")
    assert renderer.render(compiled, {"n": 1}, [], cache=False) == "1"
    assert renderer._templates == {}
    assert renderer.render(compiled, {"n": 2}, []) == "2"
    assert len(renderer._templates) == 1
