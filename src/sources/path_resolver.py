from __future__ import annotations

import fnmatch
import glob
import logging
import os
from typing import List, Optional

from core.cancellation import CancelToken
from core.errors import GlobExpansionError, InvalidPathError
from core.models import Pattern, ResolvedFileSet
from core.paths import check_glob_syntax


"""Pattern resolution against the local filesystem.

Checks that a pattern's directory exists and expands its glob into the
regular files it matches. Failures are returned on the ResolvedFileSet
and logged; they never abort the caller.
"""


class PathResolver:
    def __init__(self, *, sort_matches: bool = True, logger: Optional[logging.Logger] = None) -> None:
        self._sort_matches = sort_matches
        self._log = logger or logging.getLogger(__name__)

    def resolve(self, pattern: Pattern, token: Optional[CancelToken] = None) -> ResolvedFileSet:
        if token is not None:
            token.raise_if_cancelled()

        directory = pattern.directory
        if not os.path.isdir(directory):
            self._log.error("Invalid path '%s' (pattern '%s')", directory, pattern.raw)
            return ResolvedFileSet(
                pattern=pattern,
                error=InvalidPathError(f"Invalid path '{directory}'"),
            )

        try:
            check_glob_syntax(pattern.expansion)
            if pattern.name_filter:
                check_glob_syntax(pattern.name_filter)
            # iglob yields in os.scandir order; nothing is sorted yet.
            candidates = glob.iglob(pattern.expansion, include_hidden=True)
            out: List[str] = []
            for p in candidates:
                if token is not None:
                    token.raise_if_cancelled()
                if not os.path.isfile(p):
                    continue
                if pattern.name_filter and not fnmatch.fnmatch(os.path.basename(p), pattern.name_filter):
                    continue
                out.append(p)
        except GlobExpansionError as e:
            self._log.warning("Skipping pattern '%s': %s", pattern.raw, e)
            return ResolvedFileSet(pattern=pattern, error=e)
        except OSError as e:
            self._log.warning("Glob expansion failed for pattern '%s': %s", pattern.raw, e)
            return ResolvedFileSet(
                pattern=pattern,
                error=GlobExpansionError(f"Glob expansion failed for '{pattern.raw}': {e}"),
            )

        if self._sort_matches:
            out.sort()
        return ResolvedFileSet(pattern=pattern, paths=tuple(out))
