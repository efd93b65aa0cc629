"""Latency budget assertions over a LatencyLedger.

This module provides the SLAChecker class, which compares the latest
latency recorded for a channel against a caller-supplied budget.
"""

import logging
from typing import Mapping

from apiwatch.browser.latency_ledger import LatencyLedger
from apiwatch.exceptions import SLAViolation, format_ms

logger = logging.getLogger(__name__)


class SLAChecker:
    """Assert that observed channel latencies stay within their budgets.

    Checks are point-in-time reads of the ledger and never wait. Call them
    only after awaiting the interaction that produces the response being
    checked; before that, an unobserved channel reads as 0 and passes.
    """

    def __init__(self, ledger: LatencyLedger):
        """Initialize the checker.

        Args:
            ledger: Ledger to read samples from
        """
        self.ledger = ledger

    def assert_within_budget(
        self, channel: str, max_ms: float, require_observed: bool = False
    ) -> None:
        """Raise if a channel's latest latency exceeds max_ms.

        A latency equal to the budget passes.

        Args:
            channel: Channel name
            max_ms: Latency budget in milliseconds
            require_observed: Also fail when the channel was never observed

        Raises:
            SLAViolation: If the budget is exceeded (or the channel is
                missing and require_observed is set)
            ValueError: If max_ms is negative
        """
        if max_ms < 0:
            raise ValueError(f"Budget for {channel} must be non-negative, got {max_ms}")

        observed = self.ledger.sample(channel)
        if observed is None:
            if require_observed:
                raise SLAViolation(channel, None, max_ms)
            observed = self.ledger.get(channel)

        if observed > max_ms:
            raise SLAViolation(channel, observed, max_ms)

        logger.debug(
            f"{channel} within SLA: {format_ms(observed)}ms <= {format_ms(max_ms)}ms"
        )

    def assert_budgets(
        self, budgets: Mapping[str, float], require_observed: bool = False
    ) -> None:
        """Check several budgets in order, raising on the first violation.

        Args:
            budgets: Mapping of channel to budget (ms)
            require_observed: Also fail on channels never observed
        """
        for channel, max_ms in budgets.items():
            self.assert_within_budget(channel, max_ms, require_observed=require_observed)
