"""Core protocol and interface definitions.

Defines the ResultSink protocol through which batch scans publish each
pattern's aggregated lines (console printing is one implementation).
"""

from __future__ import annotations

from typing import Protocol

from core.models import PatternResult


class ResultSink(Protocol):
    """Contract for anything that consumes batch results as they complete."""
    def emit(self, result: PatternResult) -> None:
        ...
