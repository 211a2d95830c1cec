"""
Fetch dispatcher — runs script fetches off the UI thread.

The selector never blocks on the network.  It submits a fetch and
later drains completed outcomes with :meth:`FetchDispatcher.poll`,
so every selector state change happens on the caller's thread.

Thread safety model
───────────────────
- Fetches run on a small ``ThreadPoolExecutor`` (bounded concurrency).
- Workers never touch selector state; they push a :class:`FetchOutcome`
  into a ``queue.Queue``.
- Completion order is whatever order the transport resolves in;
  outcomes are keyed by variant id so ordering does not matter.
"""

from __future__ import annotations

import logging
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from installsite.adapters.base import FetchFailure, ScriptFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch, delivered back to the UI thread."""

    variant_id: str
    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Dispatcher(Protocol):
    """What the selector needs from a dispatcher."""

    def submit(self, variant_id: str, url: str) -> None: ...

    def poll(self, timeout: float | None = None) -> list[FetchOutcome]: ...


class FetchDispatcher:
    """Threaded dispatcher backed by a :class:`ScriptFetcher`.

    Args:
        fetcher: Adapter performing the actual GET.
        max_workers: Upper bound on concurrent fetches.
    """

    def __init__(self, fetcher: ScriptFetcher, max_workers: int = 2):
        self._fetcher = fetcher
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="script-fetch")
        self._outcomes: queue.Queue[FetchOutcome] = queue.Queue()

    def submit(self, variant_id: str, url: str) -> None:
        """Start fetching ``url`` for ``variant_id``; returns immediately."""
        logger.debug("Fetch queued: %s ← %s", variant_id, url)
        self._executor.submit(self._run, variant_id, url)

    def poll(self, timeout: float | None = None) -> list[FetchOutcome]:
        """Drain completed outcomes.

        Args:
            timeout: None or 0 → never block.  Otherwise wait up to
                ``timeout`` seconds for the first outcome.
        """
        drained: list[FetchOutcome] = []
        if timeout:
            try:
                drained.append(self._outcomes.get(timeout=timeout))
            except queue.Empty:
                return drained
        while True:
            try:
                drained.append(self._outcomes.get_nowait())
            except queue.Empty:
                return drained

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> FetchDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _run(self, variant_id: str, url: str) -> None:
        try:
            text = self._fetcher.fetch(url)
        except FetchFailure as e:
            logger.warning("Fetch failed for '%s': %s", variant_id, e)
            self._outcomes.put(FetchOutcome(variant_id=variant_id, error=e.reason))
            return
        except Exception as e:
            logger.exception("Unexpected error fetching '%s'", variant_id)
            self._outcomes.put(FetchOutcome(variant_id=variant_id, error=str(e) or type(e).__name__))
            return
        self._outcomes.put(FetchOutcome(variant_id=variant_id, text=text))
