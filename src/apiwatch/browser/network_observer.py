"""Classification of observed network responses into latency channels.

This module provides the NetworkObserver class, which listens to a Playwright
page's response events, classifies each response by URL against an ordered
list of observation rules, and records its latency in a LatencyLedger.
"""

import logging
from typing import Any, Callable, List, Optional

from playwright.async_api import Page, Response

from apiwatch.browser.latency_ledger import LatencyLedger
from apiwatch.models.observation_models import ObservationRule, ResponseEvent

logger = logging.getLogger(__name__)


class NetworkObserver:
    """Record per-channel latency for responses matching observation rules.

    This class:
    - Attaches once to a page's "response" event stream
    - Matches each response URL against rules in registration order
    - Records the first matching rule's latency in the ledger
    - Ignores responses no rule matches

    A matched response without timing information is recorded as 0, so the
    channel still reads as observed.

    Example:
        ledger = LatencyLedger()
        observer = NetworkObserver(ledger)
        observer.observe("/api/chat/messages", "chat_latency")
        observer.attach(page)
        # ... drive the page ...
        ledger.get("chat_latency")
    """

    def __init__(self, ledger: LatencyLedger, rules: Optional[List[ObservationRule]] = None):
        """Initialize the observer.

        Args:
            ledger: Ledger this observer writes to
            rules: Initial observation rules, in priority order
        """
        self.ledger = ledger
        self.rules: List[ObservationRule] = list(rules or [])
        self._page: Optional[Page] = None
        self._handler: Optional[Callable[[Response], None]] = None

    @property
    def attached(self) -> bool:
        return self._page is not None

    def observe(self, url_substring: str, channel: str) -> ObservationRule:
        """Register a rule classifying URLs containing url_substring as channel.

        Rules registered earlier take priority over later ones.

        Args:
            url_substring: URL fragment to match
            channel: Channel to record matching responses under

        Returns:
            The registered rule
        """
        return self.observe_rule(
            ObservationRule(url_substring=url_substring, channel=channel)
        )

    def observe_rule(self, rule: ObservationRule) -> ObservationRule:
        self.rules.append(rule)
        logger.debug(
            f"Registered rule #{len(self.rules)}: '{rule.url_substring}' -> {rule.channel}"
        )
        return rule

    def attach(self, page: Page) -> None:
        """Subscribe to the page's response events.

        Only one subscription is made per observer; later calls are ignored.

        Args:
            page: Playwright page to observe
        """
        if self._page is not None:
            logger.warning("NetworkObserver already attached; ignoring attach()")
            return

        self._handler = self._on_response
        page.on("response", self._handler)
        self._page = page
        logger.info(f"Observing responses with {len(self.rules)} rules")

    def detach(self) -> None:
        """Unsubscribe from the page, if attached."""
        if self._page is None:
            return
        self._page.remove_listener("response", self._handler)
        self._page = None
        self._handler = None
        logger.info("Stopped observing responses")

    def classify(self, url: str) -> Optional[ObservationRule]:
        """Return the first rule matching url, or None."""
        for rule in self.rules:
            if rule.matches(url):
                return rule
        return None

    def handle_event(self, event: ResponseEvent) -> Optional[str]:
        """Classify one response and record its latency.

        Args:
            event: Observed response

        Returns:
            Channel that was written, or None if no rule matched
        """
        rule = self.classify(event.url)
        if rule is None:
            return None

        timing = event.timing_ms
        if timing is None or timing < 0:
            timing = 0.0
        self.ledger.record(rule.channel, timing)
        logger.debug(f"Classified {event.url} as {rule.channel} ({timing}ms)")
        return rule.channel

    def _on_response(self, response: Response) -> None:
        self.handle_event(
            ResponseEvent(url=response.url, timing_ms=extract_timing(response))
        )


def extract_timing(response: Any) -> Optional[float]:
    """Return the request-to-response duration (ms) of a Playwright response.

    Playwright reports resource timing relative to the request start, with -1
    for phases that have not happened or are unavailable. responseEnd is
    preferred; responseStart is used when the body has not finished yet.

    Args:
        response: Playwright response

    Returns:
        Duration in milliseconds, or None if the transport gave none
    """
    timing = getattr(response.request, "timing", None)
    if not timing:
        return None
    for key in ("responseEnd", "responseStart"):
        value = timing.get(key)
        if value is not None and value >= 0:
            return float(value)
    return None
