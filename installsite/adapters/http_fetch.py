"""
HTTP fetcher — pulls script bodies from a running script server.

Read-only GETs through ``urllib.request``; any network error, timeout
or non-2xx status becomes a :class:`FetchFailure`.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

from installsite import __version__
from installsite.adapters.base import FetchFailure, ScriptFetcher

logger = logging.getLogger(__name__)


class HttpScriptFetcher(ScriptFetcher):
    """Fetches scripts with a plain GET.

    Args:
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, timeout: float = 10.0):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "http"

    def fetch(self, url: str) -> str:
        req = urllib.request.Request(
            url,
            method="GET",
            headers={"Accept": "text/plain", "User-Agent": f"installsite/{__version__}"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                status = resp.getcode()
                if not 200 <= status < 300:
                    raise FetchFailure(url, f"HTTP {status}", status=status)
                charset = resp.headers.get_content_charset() or "utf-8"
                data = resp.read()
        except urllib.error.HTTPError as e:
            raise FetchFailure(url, f"HTTP {e.code}", status=e.code) from e
        except urllib.error.URLError as e:
            raise FetchFailure(url, str(e.reason)[:200]) from e
        except (TimeoutError, OSError) as e:
            raise FetchFailure(url, str(e)[:200] or type(e).__name__) from e

        try:
            text = data.decode(charset)
        except (LookupError, UnicodeDecodeError) as e:
            raise FetchFailure(url, f"undecodable body: {e}") from e

        logger.debug("GET %s → %d bytes", url, len(data))
        return text
