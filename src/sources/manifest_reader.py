from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from core.errors import ManifestUnreadableError
from core.models import Pattern


"""Manifest file reader.

Loads the ordered list of path patterns, one per non-blank line.
"""


class ManifestReader:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger(__name__)

    def read(self, path: Union[str, Path]) -> List[Pattern]:
        patterns: List[Pattern] = []
        try:
            with open(path, "r", encoding="utf-8", errors="replace", newline="") as fh:
                for line in fh:
                    # Only the terminator goes; pattern text is kept verbatim.
                    text = line.rstrip("\r\n")
                    if not text.strip():
                        continue
                    patterns.append(Pattern(raw=text))
        except OSError as e:
            raise ManifestUnreadableError(f"Failed to read manifest {str(path)!r}: {e}") from e

        self._log.debug("Loaded %d pattern(s) from %s", len(patterns), path)
        return patterns
