"""Sequential counting across sources with per-source failure isolation."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from rwc.common.errors import SourceUnavailable, StreamReadError
from rwc.common.models import AggregateResult, Counts, FileProgress, RuntimeConfig, Source, SourceResult
from rwc.common.progress import ProgressLogger
from .counting import StreamCounter

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[FileProgress], None]]


class Aggregator:
    """Drives the stream counter once per source, in order."""

    def __init__(
        self,
        counter: Optional[StreamCounter] = None,
        *,
        progress_log: Optional[Path] = None,
    ) -> None:
        self.counter = counter or StreamCounter()
        self.progress_logger = ProgressLogger(progress_log) if progress_log else None

    @classmethod
    def from_config(cls, config: RuntimeConfig, *, progress_log: Optional[Path] = None) -> "Aggregator":
        return cls(StreamCounter(chunk_size=config.profile.chunk_size), progress_log=progress_log)

    def run(
        self,
        sources: Iterable[Source],
        compute_totals: bool = False,
        *,
        progress_callback: ProgressCallback = None,
    ) -> AggregateResult:
        entries: List[SourceResult] = []
        for source in sources:
            start = time.perf_counter()
            result = self._count_one(source)
            entries.append(result)
            logger.debug(
                "%s finished in %.3fs (%s)",
                source.identifier,
                time.perf_counter() - start,
                "ok" if result.ok else result.error.code.value,
            )
            self._emit_progress(result, progress_callback)

        totals = None
        successes = [entry.counts for entry in entries if entry.ok]
        if compute_totals and successes:
            totals = Counts.total(successes)
        return AggregateResult(entries=tuple(entries), totals=totals)

    def _count_one(self, source: Source) -> SourceResult:
        identifier = source.identifier
        try:
            with source.open() as reader:
                counts = self.counter.count(reader, identifier=identifier)
        except (SourceUnavailable, StreamReadError) as exc:
            logger.warning("%s", exc.message)
            return SourceResult(identifier=identifier, error=exc, kind=source.kind)
        return SourceResult(identifier=identifier, counts=counts, kind=source.kind)

    def _emit_progress(self, result: SourceResult, progress_callback: ProgressCallback) -> None:
        progress = FileProgress(
            identifier=result.identifier,
            processed_bytes=result.counts.bytes if result.counts else 0,
            current_phase="count-complete" if result.ok else "count-failed",
            error=result.error.message if result.error is not None else None,
        )
        if progress_callback:
            progress_callback(progress)
        if self.progress_logger:
            self.progress_logger.emit(progress)
