from __future__ import annotations

import logging
from typing import List, Optional

from core.cancellation import CancelToken
from core.errors import FileReadError
from core.models import FileLines


"""Line extraction from flat text files.

Reads one file sequentially and keeps its non-blank lines in on-disk
order. Lines collected before a read failure are still returned.
"""

# Lines read between cancellation checks.
CHECK_EVERY = 512


class LineExtractor:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger(__name__)

    def extract(self, path: str, token: Optional[CancelToken] = None) -> FileLines:
        if token is not None:
            token.raise_if_cancelled()

        try:
            # Replacement avoids decode errors on bad files
            fh = open(path, "r", encoding="utf-8", errors="replace", newline="")
        except OSError as e:
            self._log.warning("Failed to open file '%s': %s", path, e)
            return FileLines(path=path, error=FileReadError(f"Failed to open file '{path}': {e}"))

        lines: List[str] = []
        with fh:
            try:
                for count, line in enumerate(fh, start=1):
                    if token is not None and count % CHECK_EVERY == 0:
                        token.raise_if_cancelled()
                    text = line.rstrip("\r\n")
                    if text:
                        lines.append(text)
            except OSError as e:
                self._log.warning(
                    "Error scanning file '%s' after %d line(s): %s", path, len(lines), e
                )
                return FileLines(
                    path=path,
                    lines=tuple(lines),
                    error=FileReadError(f"Error scanning file '{path}': {e}"),
                )

        return FileLines(path=path, lines=tuple(lines))
