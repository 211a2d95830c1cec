"""
Clipboard export — copy the displayed install text verbatim.

Never raises to the caller.  A missing clipboard is a silent no-op;
a rejected write is reported as ``CopyResult.FAILED``.  A successful
copy turns on a "Copied!" acknowledgment that switches itself off
after ``ack_seconds``; copying again before then restarts the timer.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from enum import StrEnum

from installsite.adapters.base import ClipboardAdapter, ClipboardWriteError

logger = logging.getLogger(__name__)

ACK_SECONDS = 2.0


class CopyResult(StrEnum):
    COPIED = "copied"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class ClipboardExport:
    """Copy button behavior.

    Args:
        clipboard: Backend to write to; None means no clipboard.
        ack_seconds: How long the acknowledgment stays on.
        timer_factory: ``threading.Timer``-compatible constructor.
    """

    def __init__(
        self,
        clipboard: ClipboardAdapter | None,
        ack_seconds: float = ACK_SECONDS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._clipboard = clipboard
        self._ack_seconds = ack_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._acknowledged = False
        self._generation = 0
        self._timer: threading.Timer | None = None

    @property
    def acknowledged(self) -> bool:
        """True while the "Copied!" acknowledgment is showing."""
        with self._lock:
            return self._acknowledged

    @property
    def label(self) -> str:
        return "Copied!" if self.acknowledged else "Copy"

    def copy(self, text: str) -> CopyResult:
        """Write ``text`` exactly as given."""
        if self._clipboard is None or not self._clipboard.is_available():
            logger.debug("Clipboard unavailable; copy skipped")
            return CopyResult.UNAVAILABLE

        try:
            self._clipboard.write_text(text)
        except ClipboardWriteError as e:
            logger.warning("Clipboard write failed: %s", e)
            return CopyResult.FAILED
        except Exception:
            logger.exception("Unexpected clipboard error")
            return CopyResult.FAILED

        self._acknowledge()
        return CopyResult.COPIED

    def cancel(self) -> None:
        """Drop the acknowledgment now (e.g. on shutdown)."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            self._acknowledged = False

    def _acknowledge(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._acknowledged = True
            timer = self._timer_factory(
                self._ack_seconds, functools.partial(self._expire, self._generation)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A newer copy restarted the timer
            if generation != self._generation:
                return
            self._acknowledged = False
            self._timer = None
