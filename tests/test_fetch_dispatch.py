"""
Tests for the threaded fetch dispatcher.
"""

import threading

from installsite.adapters.base import ScriptFetcher
from installsite.adapters.mock import MockFetcher
from installsite.core.services.fetch_dispatch import FetchDispatcher, FetchOutcome
from installsite.core.services.script_selector import ScriptSelector, SelectorPhase

URL = "http://localhost:8000/api/install.ps1"


def _poll_until(dispatcher: FetchDispatcher, count: int) -> list[FetchOutcome]:
    outcomes: list[FetchOutcome] = []
    for _ in range(40):
        outcomes.extend(dispatcher.poll(timeout=0.25))
        if len(outcomes) >= count:
            break
    return outcomes


class TestFetchDispatcher:
    def test_success_outcome(self):
        fetcher = MockFetcher({URL: "Write-Host hi\r\n"})
        with FetchDispatcher(fetcher) as dispatcher:
            dispatcher.submit("windows", URL)
            outcomes = _poll_until(dispatcher, 1)

        assert outcomes == [FetchOutcome(variant_id="windows", text="Write-Host hi\r\n")]
        assert outcomes[0].ok
        assert fetcher.call_log == [URL]

    def test_failure_outcome(self):
        fetcher = MockFetcher()
        fetcher.set_failure(URL, "connection refused")
        with FetchDispatcher(fetcher) as dispatcher:
            dispatcher.submit("windows", URL)
            outcomes = _poll_until(dispatcher, 1)

        assert len(outcomes) == 1
        assert not outcomes[0].ok
        assert outcomes[0].error == "connection refused"

    def test_unexpected_exception_becomes_outcome(self):
        class Broken(ScriptFetcher):
            @property
            def name(self) -> str:
                return "broken"

            def fetch(self, url: str) -> str:
                raise RuntimeError("kaboom")

        with FetchDispatcher(Broken()) as dispatcher:
            dispatcher.submit("windows", URL)
            outcomes = _poll_until(dispatcher, 1)

        assert outcomes[0].error == "kaboom"

    def test_poll_without_timeout_never_blocks(self):
        gate = threading.Event()

        class Slow(ScriptFetcher):
            @property
            def name(self) -> str:
                return "slow"

            def fetch(self, url: str) -> str:
                gate.wait(5)
                return "done"

        with FetchDispatcher(Slow()) as dispatcher:
            dispatcher.submit("windows", URL)
            assert dispatcher.poll() == []
            gate.set()
            assert _poll_until(dispatcher, 1)[0].text == "done"


class TestSelectorWithDispatcher:
    def test_wait_resolves_loading(self, site):
        fetcher = MockFetcher({"http://srv/api/install.ps1": "ps1 body"})
        with FetchDispatcher(fetcher) as dispatcher:
            selector = ScriptSelector(site, dispatcher, server_url="http://srv", initial="windows")
            state = selector.wait(timeout=5)

        assert state.phase == SelectorPhase.LOADED
        assert selector.panel().text == "ps1 body"
        assert fetcher.call_count == 1
