"""Tests for YAML frontmatter splitting."""

from __future__ import annotations

import pytest

from bookbinder.errors import FrontmatterError
from bookbinder.frontmatter import split_frontmatter


def test_text_without_frontmatter_is_untouched() -> None:
    assert split_frontmatter("# Title\n---\n") == ({}, "# Title\n---\n")


def test_frontmatter_is_parsed_and_removed() -> None:
    meta, body = split_frontmatter(
        "---\ntitle: Intro\nincludes: [partials]\n---\n# Title\n"
    )
    assert meta == {"title": "Intro", "includes": ["partials"]}
    assert body == "# Title\n"


def test_empty_block_yields_empty_mapping() -> None:
    assert split_frontmatter("---\n---\nBody") == ({}, "Body")


def test_yaml_errors_are_wrapped() -> None:
    with pytest.raises(FrontmatterError, match="not valid YAML"):
        split_frontmatter("---\ntitle: [unclosed\n---\nBody\n")


def test_scalar_frontmatter_is_rejected() -> None:
    with pytest.raises(FrontmatterError, match="mapping"):
        split_frontmatter("---\njust text\n---\nBody\n")
