"""Scan orchestration for batch and query modes.

Batch mode fans patterns out to a bounded pool of worker coroutines fed
from a queue; query mode scans the narrowed patterns of one request in
order. Blocking filesystem work always runs in a thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from core.cancellation import CancelToken
from core.interfaces import ResultSink
from core.models import BatchReport, FileLines, Pattern, PatternResult, QueryResult
from sources.line_extractor import LineExtractor
from sources.path_resolver import PathResolver

T = TypeVar("T")


def default_workers() -> int:
    return os.cpu_count() or 1


class ScanOrchestrator:
    def __init__(
        self,
        *,
        resolver: Optional[PathResolver] = None,
        extractor: Optional[LineExtractor] = None,
        max_workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or logging.getLogger(__name__)
        self._resolver = resolver or PathResolver(logger=self._log)
        self._extractor = extractor or LineExtractor(logger=self._log)
        self._max_workers = max(1, int(max_workers or default_workers()))

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def scan_pattern(self, pattern: Pattern, token: Optional[CancelToken] = None) -> PatternResult:
        """Resolve one pattern and extract every matched file (blocking)."""
        self._log.info("Scanning %s", pattern.raw)
        resolved = self._resolver.resolve(pattern, token)
        if resolved.error is not None:
            return PatternResult(pattern=pattern, error=resolved.error)

        files: List[FileLines] = []
        for path in resolved.paths:
            self._log.debug("Reading %s", path)
            files.append(self._extractor.extract(path, token))
        return PatternResult(pattern=pattern, files=tuple(files))

    async def run_batch(
        self,
        patterns: Sequence[Pattern],
        *,
        sink: Optional[ResultSink] = None,
        token: Optional[CancelToken] = None,
    ) -> BatchReport:
        """Scan every pattern with at most max_workers units in flight.

        Returns once every unit has finished; results keep manifest order
        while the sink sees them in completion order.
        """
        if not patterns:
            return BatchReport()

        token = token or CancelToken()
        queue: "asyncio.Queue[Tuple[int, Pattern]]" = asyncio.Queue()
        for item in enumerate(patterns):
            queue.put_nowait(item)

        # One write-once slot per pattern; no other state is shared.
        slots: List[Optional[PatternResult]] = [None] * len(patterns)

        async def _worker() -> None:
            while True:
                try:
                    index, pattern = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                result = await self._offload(self.scan_pattern, pattern, token, token=token)
                slots[index] = result
                if sink is not None:
                    sink.emit(result)

        workers = min(self._max_workers, len(patterns))
        self._log.debug("Starting %d worker(s) for %d pattern(s)", workers, len(patterns))
        tasks = [asyncio.create_task(_worker()) for _ in range(workers)]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            # No unit may outlive this call: cancel and join the rest first.
            unfinished = [t for t in tasks if not t.done()]
            if unfinished:
                token.cancel()
                for t in unfinished:
                    t.cancel()
                await asyncio.gather(*unfinished, return_exceptions=True)

        for t in tasks:
            if not t.cancelled() and t.exception() is not None:
                token.cancel()
                raise t.exception()

        return BatchReport(results=tuple(r for r in slots if r is not None))

    async def query(
        self,
        patterns: Sequence[Pattern],
        file_name: str,
        *,
        token: Optional[CancelToken] = None,
    ) -> QueryResult:
        """Scan each pattern narrowed to file_name, sequentially and in order."""
        token = token or CancelToken()
        targets = [p.narrowed_to(file_name) for p in patterns]

        def _do() -> QueryResult:
            results = tuple(self.scan_pattern(t, token) for t in targets)
            return QueryResult(file_name=file_name, results=results)

        return await self._offload(_do, token=token)

    async def _offload(self, fn: Callable[..., T], *args: object, token: CancelToken) -> T:
        # Offload blocking filesystem IO to a thread to keep async loop responsive
        try:
            return await asyncio.to_thread(fn, *args)
        except asyncio.CancelledError:
            # The thread keeps running until it next checks the token.
            token.cancel()
            raise
