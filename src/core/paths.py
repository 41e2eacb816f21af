from __future__ import annotations

import os
from typing import Tuple

from core.errors import GlobExpansionError, ValidationError

"""
Path utilities used across the project.

Splits manifest patterns into their directory and glob parts, narrows a
pattern to a requested filename and checks glob syntax before expansion.
"""


def split_pattern(raw: str) -> Tuple[str, str]:
    """Split a pattern into (directory, glob suffix).

    The directory is '.' when the pattern has no directory part; the
    suffix is empty when the pattern ends with a path separator.
    """
    directory, suffix = os.path.split(raw)
    return directory or os.curdir, suffix


def validate_file_name(file_name: str) -> str:
    """Validate a requested filename; it must name an entry inside a directory."""
    name = file_name or ""
    if not name.strip():
        raise ValidationError("Missing file name")
    if "/" in name or "\\" in name or os.sep in name:
        raise ValidationError(f"File name must not contain path separators: {file_name!r}")
    if name in (os.curdir, os.pardir):
        raise ValidationError(f"Invalid file name: {file_name!r}")
    return name


def check_glob_syntax(pattern: str) -> None:
    """Raise GlobExpansionError for glob syntax the matcher would misread.

    Python's glob treats a malformed character class as literal text and
    silently matches nothing; this surfaces those cases instead.
    """
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\" and os.sep == "/":
            if i + 1 >= n:
                raise GlobExpansionError(f"Trailing escape in glob {pattern!r}")
            i += 2
            continue
        if c == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # A ']' right after '[' or '[!' is a literal member of the class.
            if j < n and pattern[j] == "]":
                j += 1
            start = j
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise GlobExpansionError(f"Unclosed character class in glob {pattern!r}")
            _check_ranges(pattern, pattern[start:j])
            i = j + 1
            continue
        i += 1


def _check_ranges(pattern: str, members: str) -> None:
    k = 0
    while k + 2 < len(members):
        if members[k + 1] == "-" and members[k] > members[k + 2]:
            raise GlobExpansionError(
                f"Reversed range {members[k:k + 3]!r} in glob {pattern!r}"
            )
        k += 1
