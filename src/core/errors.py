from __future__ import annotations


class FileDataError(Exception):
    """Base error for the file data producer."""

    kind = "FileDataError"


class ManifestUnreadableError(FileDataError):
    """Raised when the manifest file cannot be opened or read."""

    kind = "ManifestUnreadable"


class InvalidPathError(FileDataError):
    """Reported when a pattern's directory does not exist."""

    kind = "InvalidPath"


class GlobExpansionError(FileDataError):
    """Reported when a pattern's glob is malformed or cannot be expanded."""

    kind = "GlobExpansionError"


class FileReadError(FileDataError):
    """Reported when a matched file cannot be opened or read to the end."""

    kind = "FileReadError"


class ValidationError(FileDataError):
    """Raised when user input is invalid."""

    kind = "ValidationError"


class ScanCancelledError(FileDataError):
    """Raised inside a scan once its cancellation token has been triggered."""

    kind = "ScanCancelled"


class ScanTimeoutError(ScanCancelledError):
    """Raised inside a scan once its deadline has passed."""

    kind = "ScanTimeout"
