"""Markdown-to-HTMLBook conversion used by the ``markdown`` stage."""

from .htmlbook import HtmlBookExtension, section_type_for
from .renderer import HtmlContentRenderer

__all__ = ["HtmlBookExtension", "HtmlContentRenderer", "section_type_for"]
