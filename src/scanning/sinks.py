"""Result sinks for batch scans."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from core.models import PatternResult


class ConsoleSink:
    """Prints each pattern and its matched files, optionally with their lines."""

    def __init__(self, *, print_lines: bool = False, stream: Optional[TextIO] = None) -> None:
        self._print_lines = print_lines
        self._stream = stream

    def emit(self, result: PatternResult) -> None:
        out = self._stream or sys.stdout
        if not result.ok:
            print(f"{result.pattern.raw}  [{result.error.kind}]", file=out)
            return

        print(result.pattern.raw, file=out)
        for f in result.files:
            suffix = "" if f.complete else f"  [{f.error.kind}: partial]"
            print(f"  {f.path}{suffix}", file=out)
            if self._print_lines:
                for line in f.lines:
                    print(f"    {line}", file=out)


class CollectingSink:
    """Keeps results in completion order for callers that post-process them."""

    def __init__(self) -> None:
        self.results: List[PatternResult] = []

    def emit(self, result: PatternResult) -> None:
        self.results.append(result)
