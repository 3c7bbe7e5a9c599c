"""File records flowing through the build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import PurePosixPath

from .documents import parse_document
from .errors import MalformedDocumentError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from bs4 import BeautifulSoup


@dc.dataclass(slots=True)
class FileRecord:
    """One source document on its way from raw text to final output.

    Attributes
    ----------
    relative_path : str
        POSIX path relative to the book root; used as the link target for the
        file once written.
    contents : bytes
        Current buffer. Stages replace it as the file is rendered.
    page_locals : dict[str, Any]
        Variables visible to the page template (frontmatter lives under
        ``"page"``).
    layout_locals : dict[str, Any]
        Variables visible to the layout template.
    part : str, optional
        Label of the part the file belongs to.
    parent_part : str, optional
        Label of the part that encloses ``part``.
    source_path : Path, optional
        Filesystem location the record was loaded from.
    """

    relative_path: str
    contents: bytes
    page_locals: dict[str, typ.Any] = dc.field(default_factory=dict)
    layout_locals: dict[str, typ.Any] = dc.field(default_factory=dict)
    part: str | None = None
    parent_part: str | None = None
    source_path: Path | None = None
    _document: BeautifulSoup | None = dc.field(default=None, init=False, repr=False)

    @classmethod
    def from_text(cls, relative_path: str, text: str, **kwargs: typ.Any) -> FileRecord:
        """Build a record from decoded text."""
        return cls(relative_path, text.encode("utf-8"), **kwargs)

    @property
    def text(self) -> str:
        """Return the contents decoded as UTF-8.

        Raises
        ------
        MalformedDocumentError
            If the contents are not valid UTF-8.
        """
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{self.relative_path} is not valid UTF-8: {exc}"
            raise MalformedDocumentError(msg) from exc

    @text.setter
    def text(self, value: str) -> None:
        self.contents = value.encode("utf-8")
        self._document = None

    @property
    def document(self) -> BeautifulSoup:
        """Return the parsed document, parsing the contents on first access."""
        if self._document is None:
            self._document = parse_document(self.contents)
        return self._document

    @property
    def has_document(self) -> bool:
        return self._document is not None

    def invalidate_document(self) -> None:
        """Drop the cached document so the next access re-parses the contents."""
        self._document = None

    def sync_document(self) -> None:
        """Serialise a mutated cached document back into ``contents``."""
        if self._document is not None:
            self.contents = str(self._document).encode("utf-8")

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.relative_path).suffix.lower()

    def with_suffix(self, suffix: str) -> None:
        """Rename the record in place, swapping its file extension."""
        self.relative_path = str(PurePosixPath(self.relative_path).with_suffix(suffix))

    @property
    def page(self) -> dict[str, typ.Any]:
        """Return the frontmatter mapping stored in the page locals."""
        return self.page_locals.setdefault("page", {})


__all__ = ["FileRecord"]
