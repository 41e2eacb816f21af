"""
Cancellation tokens for blocking scans.

Scans run in worker threads which cannot be interrupted from the event
loop; the token is checked at safe points inside resolve and extract so
a cancelled or timed-out request stops at the next check.
"""

from __future__ import annotations

import threading
import time
from typing import Optional

from core.errors import ScanCancelledError, ScanTimeoutError


class CancelToken:
    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()

        # Monotonic so the deadline isn't affected by system clock changes.
        seconds = 0.0 if timeout is None else float(timeout)
        self._deadline = time.monotonic() + seconds if seconds > 0 else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ScanCancelledError("Scan was cancelled")
        if self.expired:
            raise ScanTimeoutError("Scan deadline exceeded")
