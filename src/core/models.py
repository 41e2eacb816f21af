"""Immutable dataclasses shared by the scanning components.

Patterns come from the manifest; ResolvedFileSet, FileLines and the
result types live for one scan call only. FileDataResponse is what the
query tool hands back to the caller.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

from core.errors import FileDataError
from core.paths import split_pattern


ResponseStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class Pattern:
    """A directory plus glob suffix, exactly as written in the manifest.

    `name_filter` is only set on patterns narrowed for a query: matched
    basenames must also satisfy the manifest pattern's own glob suffix.
    """

    raw: str
    name_filter: Optional[str] = None

    @property
    def directory(self) -> str:
        return split_pattern(self.raw)[0]

    @property
    def glob_suffix(self) -> str:
        return split_pattern(self.raw)[1]

    @property
    def expansion(self) -> str:
        # A bare directory ("/data/") selects every file directly inside it.
        if not self.glob_suffix:
            return os.path.join(self.directory, "*")
        return self.raw

    def narrowed_to(self, file_name: str) -> "Pattern":
        return Pattern(
            raw=os.path.join(self.directory, file_name),
            name_filter=self.glob_suffix or None,
        )


@dataclass(frozen=True)
class ResolvedFileSet:
    pattern: Pattern
    paths: Tuple[str, ...] = ()
    error: Optional[FileDataError] = None


@dataclass(frozen=True)
class FileLines:
    """Non-blank lines of one file; `error` set with lines present means partial."""

    path: str
    lines: Tuple[str, ...] = ()
    error: Optional[FileDataError] = None

    @property
    def complete(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PatternResult:
    """Aggregated lines for one pattern, in resolver match order."""

    pattern: Pattern
    files: Tuple[FileLines, ...] = ()
    error: Optional[FileDataError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    @property
    def lines(self) -> List[str]:
        out: List[str] = []
        for f in self.files:
            out.extend(f.lines)
        return out


@dataclass(frozen=True)
class QueryResult:
    file_name: str
    results: Tuple[PatternResult, ...] = ()

    @property
    def paths(self) -> List[str]:
        return [p for r in self.results for p in r.paths]

    @property
    def lines(self) -> List[str]:
        return [line for r in self.results for line in r.lines]


@dataclass(frozen=True)
class BatchReport:
    """Per-pattern results of one batch run, in manifest order."""

    results: Tuple[PatternResult, ...] = ()

    @property
    def failed(self) -> List[PatternResult]:
        return [r for r in self.results if not r.ok]


@dataclass(frozen=True)
class FileDataResponse:
    """Response to one get_file_data request.

    Field groups:
    - Always: request_id, status
    - Success: data, files
    - Failure: error, error_kind
    """

    request_id: int
    status: ResponseStatus = "ok"
    data: str = ""
    files: Tuple[str, ...] = field(default_factory=tuple)

    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def success(cls, request_id: int, result: QueryResult) -> "FileDataResponse":
        return cls(
            request_id=request_id,
            data="\n".join(result.lines),
            files=tuple(result.paths),
        )

    @classmethod
    def failure(cls, request_id: int, exc: FileDataError) -> "FileDataResponse":
        return cls(
            request_id=request_id,
            status="error",
            error=str(exc),
            error_kind=exc.kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "status": self.status,
            "data": self.data,
            "files": list(self.files),
            "error": self.error,
            "error_kind": self.error_kind,
        }
