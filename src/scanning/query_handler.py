"""Query-mode request handling.

Turns one filename request into a scan over the current manifest and
packs the aggregated lines into a FileDataResponse. The manifest is
re-read on every request.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from core.cancellation import CancelToken
from core.errors import FileDataError, GlobExpansionError, ManifestUnreadableError, ValidationError
from core.models import FileDataResponse
from core.paths import check_glob_syntax, validate_file_name
from scanning.orchestrator import ScanOrchestrator
from sources.manifest_reader import ManifestReader


class QueryHandler:
    def __init__(
        self,
        *,
        manifest_path: Union[str, Path],
        orchestrator: Optional[ScanOrchestrator] = None,
        reader: Optional[ManifestReader] = None,
        query_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._manifest_path = manifest_path
        self._log = logger or logging.getLogger(__name__)
        self._orchestrator = orchestrator or ScanOrchestrator(logger=self._log)
        self._reader = reader or ManifestReader(logger=self._log)
        self._timeout = query_timeout

        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

    def _next_request_id(self) -> int:
        with self._ids_lock:
            return next(self._ids)

    async def handle(self, file_name: str) -> FileDataResponse:
        """Return the lines of every file named file_name under the manifest patterns.

        Failures come back as status="error" responses; only caller
        cancellation propagates.
        """
        request_id = self._next_request_id()

        try:
            name = validate_file_name(file_name)
            check_glob_syntax(name)
        except (ValidationError, GlobExpansionError) as e:
            self._log.warning("Request %d rejected: %s", request_id, e)
            return FileDataResponse.failure(request_id, e)

        try:
            patterns = await asyncio.to_thread(self._reader.read, self._manifest_path)
        except ManifestUnreadableError as e:
            self._log.error("Request %d failed: %s", request_id, e)
            return FileDataResponse.failure(request_id, e)

        token = CancelToken(timeout=self._timeout)
        try:
            result = await self._orchestrator.query(patterns, name, token=token)
        except FileDataError as e:
            self._log.error("Request %d for '%s' failed: %s", request_id, name, e)
            return FileDataResponse.failure(request_id, e)

        self._log.info(
            "Request %d for '%s': %d file(s), %d line(s)",
            request_id,
            name,
            len(result.paths),
            len(result.lines),
        )
        return FileDataResponse.success(request_id, result)
