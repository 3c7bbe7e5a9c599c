r"""Split YAML frontmatter from the top of a source file.

Example
-------
>>> meta, body = split_frontmatter("---\ntitle: Intro\n---\n# Heading\n")
>>> meta["title"], body
('Intro', '# Heading\n')
"""

from __future__ import annotations

import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import FrontmatterError

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


def split_frontmatter(text: str) -> tuple[dict[str, typ.Any], str]:
    """Return the frontmatter mapping and the remaining body of ``text``.

    Files without a leading ``---`` block yield an empty mapping and the text
    unchanged.

    Raises
    ------
    FrontmatterError
        If the block is not valid YAML or does not describe a mapping.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(match.group(1))
    except YAMLError as exc:
        msg = f"Frontmatter is not valid YAML: {exc}"
        raise FrontmatterError(msg) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Frontmatter must be a mapping."
        raise FrontmatterError(msg)
    return dict(loaded), text[match.end() :]


__all__ = ["FRONTMATTER_PATTERN", "split_frontmatter"]
