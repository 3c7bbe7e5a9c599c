"""Streaming helpers shared by stages.

Streams are plain iterators of :class:`~bookbinder.models.FileRecord`. Stages
that only touch one file at a time wrap the incoming stream with
:func:`transform`, which keeps the pipeline lazy: a file can reach a later
stage before the next file has left an earlier one. Stages that need the whole
book drain the stream with :func:`collect` and hand a fresh stream onwards with
:func:`restream`.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

if typ.TYPE_CHECKING:
    from bookbinder.models import FileRecord

RecordTransform = typ.Callable[["FileRecord"], "FileRecord"]


def transform(
    stream: cabc.Iterable[FileRecord], func: RecordTransform
) -> cabc.Iterator[FileRecord]:
    """Yield ``func(record)`` for every record, in input order."""
    for record in stream:
        yield func(record)


def collect(stream: cabc.Iterable[FileRecord]) -> list[FileRecord]:
    """Drain ``stream`` into a list, blocking until every record has arrived."""
    return list(stream)


def restream(records: cabc.Sequence[FileRecord]) -> cabc.Iterator[FileRecord]:
    """Return a new stream that emits ``records`` once each, in order."""
    return iter(tuple(records))


__all__ = ["RecordTransform", "collect", "restream", "transform"]
