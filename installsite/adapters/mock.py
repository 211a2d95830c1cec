"""
Mock adapters — test doubles for fetching and clipboard writes.

Configurable per URL / per call, and they record every call so tests
can assert on exactly what was attempted.
"""

from __future__ import annotations

from installsite.adapters.base import (
    ClipboardAdapter,
    ClipboardWriteError,
    FetchFailure,
    ScriptFetcher,
)


class MockFetcher(ScriptFetcher):
    """Serves canned bodies keyed by URL.

    Unknown URLs fail with a 404-style :class:`FetchFailure`.
    """

    def __init__(self, responses: dict[str, str] | None = None):
        self._responses: dict[str, str] = dict(responses or {})
        self._failures: dict[str, str] = {}
        self._call_log: list[str] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[str]:
        """Every URL fetched, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_response(self, url: str, body: str) -> None:
        self._responses[url] = body
        self._failures.pop(url, None)

    def set_failure(self, url: str, reason: str = "Mock failure") -> None:
        self._failures[url] = reason

    def fetch(self, url: str) -> str:
        self._call_log.append(url)
        if url in self._failures:
            raise FetchFailure(url, self._failures[url])
        if url not in self._responses:
            raise FetchFailure(url, "HTTP 404", status=404)
        return self._responses[url]


class MockClipboard(ClipboardAdapter):
    """In-memory clipboard."""

    def __init__(self, available: bool = True, fail_writes: bool = False):
        self._available = available
        self._fail_writes = fail_writes
        self.contents: str | None = None
        self.writes: list[str] = []

    @property
    def name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return self._available

    def write_text(self, text: str) -> None:
        self.writes.append(text)
        if self._fail_writes:
            raise ClipboardWriteError("Mock write rejected")
        self.contents = text
