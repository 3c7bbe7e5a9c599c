"""Execute registered stages against one stream of file records."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from loguru import logger

from bookbinder.errors import StageContractError

from .streams import collect

if typ.TYPE_CHECKING:
    from bookbinder.config import BuildConfig
    from bookbinder.models import FileRecord

    from .registry import StageRegistry


class Pipeline:
    """Run every stage of a :class:`StageRegistry` in order.

    Each handler receives the stream produced by the previous stage and returns
    the stream for the next one, unchanged or replaced. Handlers are invoked
    one after another; the per-file work they wrap runs lazily as the final
    stream is drained, so an exception raised for any file propagates out of
    :meth:`run` and fails the build.
    """

    def __init__(self, registry: StageRegistry) -> None:
        self.registry = registry

    def run(
        self,
        config: BuildConfig,
        files: cabc.Iterable[FileRecord],
        extras: dict[str, typ.Any] | None = None,
    ) -> list[FileRecord]:
        """Push ``files`` through every stage and return the records that come out.

        Parameters
        ----------
        config : BuildConfig
            Settings for the format being built.
        files : Iterable[FileRecord]
            Initial records, in book order.
        extras : dict[str, Any], optional
            Auxiliary context shared by the stages of this build only.

        Returns
        -------
        list[FileRecord]
            Records emitted by the last stage.

        Raises
        ------
        StageContractError
            If a handler returns something other than an iterable of records.
        """
        extras = {} if extras is None else extras
        stream: cabc.Iterator[FileRecord] = iter(files)
        for stage in self.registry:
            logger.debug("entering stage {} for format {}", stage.name, config.format)
            result = stage.handler(config, stream, extras)
            if result is None or not isinstance(result, cabc.Iterable):
                msg = f"Stage '{stage.name}' did not return a stream of files."
                raise StageContractError(msg)
            stream = iter(result)
        records = collect(stream)
        logger.info(
            "pipeline finished {} stages for {} files ({})",
            len(self.registry),
            len(records),
            config.format,
        )
        return records


__all__ = ["Pipeline"]
