"""Table-of-contents extraction, aggregation, and insertion."""

from .aggregator import TocAggregator
from .models import PartGroup, SectionNode, TocDocument, TocNode
from .sections import extract_sections, link_base_for

__all__ = [
    "PartGroup",
    "SectionNode",
    "TocAggregator",
    "TocDocument",
    "TocNode",
    "extract_sections",
    "link_base_for",
]
