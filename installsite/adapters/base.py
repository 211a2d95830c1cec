"""
Adapter base — the contracts for the two side-effecting edges.

    ScriptFetcher     → pulls a script body over HTTP (client side)
    ClipboardAdapter  → writes text to the host clipboard

Core services only talk to these interfaces; concrete adapters live
beside this module and ``mock.py`` provides test doubles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class FetchFailure(Exception):
    """Network error, timeout or non-2xx response while fetching a script."""

    def __init__(self, url: str, reason: str, status: int | None = None):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class ClipboardWriteError(Exception):
    """The clipboard exists but rejected the write."""


class ScriptFetcher(ABC):
    """Fetches the raw text served at a URL."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter identifier (e.g. 'http', 'mock')."""

    @abstractmethod
    def fetch(self, url: str) -> str:
        """Return the response body exactly as served.

        Raises:
            FetchFailure: On any network error or non-2xx status.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class ClipboardAdapter(ABC):
    """Writes text to a clipboard."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter identifier (e.g. 'xclip', 'pbcopy', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether a clipboard can be written at all. Fast, never raises."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Copy ``text`` verbatim.

        Raises:
            ClipboardWriteError: If the write was attempted and rejected.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
