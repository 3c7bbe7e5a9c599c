"""Parse rendered HTML into queryable BeautifulSoup trees."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag
from bs4.exceptions import ParserRejectedMarkup

from .errors import MalformedDocumentError

PARSER = "html.parser"


def parse_document(contents: bytes | str) -> BeautifulSoup:
    """Parse ``contents`` into a BeautifulSoup tree.

    Parameters
    ----------
    contents : bytes or str
        HTML markup. Bytes are decoded as UTF-8 before parsing.

    Returns
    -------
    BeautifulSoup
        Tree built with the standard library ``html.parser`` backend. Parsing
        does not modify ``contents``.

    Raises
    ------
    MalformedDocumentError
        If the bytes are not valid UTF-8 or the parser rejects the markup.
    """
    try:
        text = contents.decode("utf-8") if isinstance(contents, bytes) else contents
        return BeautifulSoup(text, PARSER)
    except (UnicodeDecodeError, ParserRejectedMarkup) as exc:
        msg = f"Unable to parse document: {exc}"
        raise MalformedDocumentError(msg) from exc


def document_root(document: BeautifulSoup) -> Tag:
    """Return ``<body>`` when the document has one, otherwise the document itself."""
    body = document.body
    return body if body is not None else document


def is_section_element(tag: Tag) -> bool:
    """Return True for HTMLBook sections and part containers."""
    if tag.name == "section":
        return tag.has_attr("data-type")
    return tag.name == "div" and tag.get("data-type") == "part"


__all__ = ["PARSER", "document_root", "is_section_element", "parse_document"]
