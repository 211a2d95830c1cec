"""
Script selector — which install variant is shown, and its fetch/cache state.

States (for the active variant):
    LOADING → a fetch for it is in flight
    LOADED  → its body is cached and rendered
    FAILED  → its last fetch failed; a fallback with a direct link is rendered

IDLE exists only before the constructor selects the default variant.

Transitions:
    select(id)                 cached → LOADED, no network
                               inline → resolve now → LOADED
                               file   → submit fetch → LOADING
    fetch_succeeded(id, text)  cache body; renders only if id is still active
    fetch_failed(id, reason)   remember reason; renders only if id is still active

Policy:
    - Selecting the already-active variant does nothing.
    - At most one fetch per variant is in flight.
    - Switching away never cancels a fetch; late results still fill
      the cache for the next visit.
    - A cached body is never replaced within a session.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import StrEnum

from installsite.core.models.script import ScriptBody, ScriptVariant
from installsite.core.models.site import SiteConfig
from installsite.core.services.fetch_dispatch import Dispatcher, FetchOutcome
from installsite.core.services.script_repository import NotFoundError

logger = logging.getLogger(__name__)


class SelectorPhase(StrEnum):
    """Lifecycle of the active variant's panel."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectorState:
    """Snapshot of the selector, as seen by the render path."""

    phase: SelectorPhase
    variant_id: str | None = None
    reason: str | None = None


@dataclass(frozen=True)
class Panel:
    """What the UI shows for the active variant."""

    variant_id: str
    label: str
    phase: SelectorPhase
    text: str
    description: str = ""
    copyable: bool = False


class ScriptSelector:
    """Tab-style chooser over a site's install variants.

    Args:
        site: Site configuration holding the fixed variant set.
        dispatcher: Runs fetches for file variants (see fetch_dispatch).
        server_url: Origin of the script server to fetch from.
            Defaults to the site's public ``base_url``.
        initial: Variant to activate first (default: site default).
    """

    def __init__(
        self,
        site: SiteConfig,
        dispatcher: Dispatcher,
        server_url: str | None = None,
        initial: str | None = None,
    ):
        self._site = site
        self._dispatcher = dispatcher
        self._server_url = (server_url or site.site.base_url).rstrip("/")
        self._active: str | None = None
        self._cache: dict[str, ScriptBody] = {}
        self._in_flight: set[str] = set()
        self._failures: dict[str, str] = {}

        self.select(initial or site.default().id)

    # ── Queries ─────────────────────────────────────────────────

    @property
    def active_id(self) -> str | None:
        return self._active

    @property
    def variants(self) -> list[ScriptVariant]:
        return list(self._site.variants)

    @property
    def state(self) -> SelectorState:
        vid = self._active
        if vid is None:
            return SelectorState(SelectorPhase.IDLE)
        if vid in self._cache:
            return SelectorState(SelectorPhase.LOADED, vid)
        if vid in self._in_flight:
            return SelectorState(SelectorPhase.LOADING, vid)
        return SelectorState(SelectorPhase.FAILED, vid, self._failures.get(vid, "not loaded"))

    def cached(self, variant_id: str) -> ScriptBody | None:
        return self._cache.get(variant_id)

    def in_flight(self, variant_id: str) -> bool:
        return variant_id in self._in_flight

    def url_for(self, variant: ScriptVariant) -> str:
        """Where the selector fetches a file variant from."""
        return self._server_url + (variant.route or "")

    # ── Transitions ─────────────────────────────────────────────

    def select(self, variant_id: str) -> SelectorState:
        """Activate a variant (a tab click).

        Raises:
            NotFoundError: If the id is not one of the site's variants.
        """
        variant = self._site.get_variant(variant_id)
        if variant is None:
            raise NotFoundError(variant_id, f"Unknown install variant '{variant_id}'")

        if variant_id == self._active:
            return self.state

        self._active = variant_id

        if variant_id in self._cache:
            logger.debug("Variant '%s' served from cache", variant_id)
        elif variant.is_inline:
            self._cache[variant_id] = ScriptBody.from_inline(variant)
        else:
            self._request(variant)

        return self.state

    def fetch_succeeded(self, variant_id: str, text: str) -> None:
        """Record a completed fetch."""
        self._in_flight.discard(variant_id)
        self._failures.pop(variant_id, None)
        if variant_id not in self._cache:
            self._cache[variant_id] = ScriptBody(variant_id=variant_id, text=text)
        if variant_id != self._active:
            logger.debug("Fetch for '%s' finished in the background; cached for later", variant_id)

    def fetch_failed(self, variant_id: str, reason: str) -> None:
        """Record a failed fetch; the next visit to the variant retries."""
        self._in_flight.discard(variant_id)
        if variant_id in self._cache:
            return
        self._failures[variant_id] = reason
        logger.warning("Could not load install variant '%s': %s", variant_id, reason)

    def apply(self, outcome: FetchOutcome) -> None:
        if outcome.ok:
            self.fetch_succeeded(outcome.variant_id, outcome.text or "")
        else:
            self.fetch_failed(outcome.variant_id, outcome.error or "unknown error")

    def pump(self, timeout: float | None = None) -> int:
        """Apply whatever fetch outcomes the dispatcher has ready.

        Returns:
            Number of outcomes applied.
        """
        outcomes = self._dispatcher.poll(timeout)
        for outcome in outcomes:
            self.apply(outcome)
        return len(outcomes)

    def wait(self, timeout: float = 10.0) -> SelectorState:
        """Pump until the active variant leaves LOADING or ``timeout`` passes."""
        deadline = time.monotonic() + timeout
        while self.state.phase == SelectorPhase.LOADING:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            self.pump(timeout=min(remaining, 0.25))
        return self.state

    # ── Rendering ───────────────────────────────────────────────

    def panel(self) -> Panel:
        """Render the active variant.

        Raises:
            NotFoundError: If no variant is active.
        """
        state = self.state
        variant = self._site.get_variant(state.variant_id or "")
        if variant is None:
            raise NotFoundError(state.variant_id or "", "No install variant is active")

        if state.phase == SelectorPhase.LOADED:
            text = self._cache[variant.id].text
        elif state.phase == SelectorPhase.LOADING:
            text = f"Loading {variant.label}…"
        else:
            text = (
                f"Could not load {variant.label} ({state.reason}).\n"
                f"View the script directly: {self._site.canonical_url(variant)}"
            )

        return Panel(
            variant_id=variant.id,
            label=variant.label,
            phase=state.phase,
            text=text,
            description=variant.description,
            copyable=state.phase == SelectorPhase.LOADED,
        )

    def _request(self, variant: ScriptVariant) -> None:
        if variant.id in self._in_flight:
            return
        self._failures.pop(variant.id, None)
        self._in_flight.add(variant.id)
        url = self.url_for(variant)
        logger.debug("Fetching variant '%s' from %s", variant.id, url)
        self._dispatcher.submit(variant.id, url)
