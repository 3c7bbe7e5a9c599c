"""Common literal values used across bookbinder.

These constants keep the TOC placeholder, the section vocabulary, and the
single-document format names centralized so stages, templates, and tests can
import the same values without drifting.

Examples
--------
>>> from bookbinder import _constants
>>> _constants.SECTION_LEVELS["sect2"]
2
>>> _constants.TOC_PLACEHOLDER in "<p>MBINSERT:TOC</p>"
True
"""

TOC_PLACEHOLDER = "MBINSERT:TOC"
TOC_INCLUDE_TEMPLATE = '{% include "toc.html" %}'
MAX_LEVEL = 3

SECTION_LEVELS: dict[str, int] = {
    "chapter": 0,
    "appendix": 0,
    "afterword": 0,
    "bibliography": 0,
    "glossary": 0,
    "preface": 0,
    "foreword": 0,
    "introduction": 0,
    "acknowledgments": 0,
    "conclusion": 0,
    "part": 0,
    "index": 0,
    "sect1": 1,
    "sect2": 2,
    "sect3": 3,
    "sect4": 4,
    "sect5": 5,
}

SINGLE_DOCUMENT_FORMATS = frozenset({"pdf"})
MARKDOWN_SUFFIXES = (".md", ".markdown")
