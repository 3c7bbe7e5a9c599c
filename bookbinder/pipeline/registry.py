"""Ordered registry of named build stages.

Plugins attach themselves to the pipeline by naming an existing stage and
asking to run immediately before or after it. Positions are resolved when the
call is made; stages inserted later never move a stage that is already placed.

Example
-------
>>> registry = StageRegistry()
>>> registry.register("liquid", lambda config, stream, extras: stream)
>>> registry.after("liquid", "toc:placeholders", lambda c, s, e: s)
>>> registry.before("liquid", "frontmatter", lambda c, s, e: s)
>>> registry.names()
['frontmatter', 'liquid', 'toc:placeholders']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from loguru import logger

from bookbinder.errors import DuplicateStageError, UnknownStageError

if typ.TYPE_CHECKING:
    from bookbinder.config import BuildConfig
    from bookbinder.models import FileRecord

StageHandler = typ.Callable[
    ["BuildConfig", typ.Iterator["FileRecord"], dict[str, typ.Any]],
    typ.Iterable["FileRecord"],
]


@dc.dataclass(frozen=True, slots=True)
class Stage:
    """A named processing step and the handler that transforms the stream."""

    name: str
    handler: StageHandler


class StageRegistry:
    """Keep build stages in a strict, deterministic order."""

    def __init__(self) -> None:
        self._stages: list[Stage] = []

    def register(self, name: str, handler: StageHandler) -> None:
        """Append a stage to the end of the pipeline.

        Raises
        ------
        DuplicateStageError
            If a stage called ``name`` is already registered.
        """
        self._insert(len(self._stages), name, handler)

    def before(self, anchor: str, name: str, handler: StageHandler) -> None:
        """Insert a stage immediately before the stage currently named ``anchor``.

        Raises
        ------
        UnknownStageError
            If no stage called ``anchor`` is registered.
        DuplicateStageError
            If a stage called ``name`` is already registered.
        """
        self._insert(self._index(anchor), name, handler)

    def after(self, anchor: str, name: str, handler: StageHandler) -> None:
        """Insert a stage immediately after the stage currently named ``anchor``.

        Raises
        ------
        UnknownStageError
            If no stage called ``anchor`` is registered.
        DuplicateStageError
            If a stage called ``name`` is already registered.
        """
        self._insert(self._index(anchor) + 1, name, handler)

    def names(self) -> list[str]:
        """Return stage names in execution order."""
        return [stage.name for stage in self._stages]

    def stages(self) -> list[Stage]:
        return list(self._stages)

    def __iter__(self) -> cabc.Iterator[Stage]:
        return iter(list(self._stages))

    def __len__(self) -> int:
        return len(self._stages)

    def __contains__(self, name: object) -> bool:
        return any(stage.name == name for stage in self._stages)

    def _index(self, anchor: str) -> int:
        for index, stage in enumerate(self._stages):
            if stage.name == anchor:
                return index
        msg = f"Cannot position relative to unknown stage '{anchor}'."
        raise UnknownStageError(msg)

    def _insert(self, index: int, name: str, handler: StageHandler) -> None:
        if name in self:
            msg = f"Stage '{name}' is already registered."
            raise DuplicateStageError(msg)
        self._stages.insert(index, Stage(name=name, handler=handler))
        logger.debug("registered stage {} at position {}", name, index)


__all__ = ["Stage", "StageHandler", "StageRegistry"]
