"""ApiHub: network observation and response contract checks for one session.

ApiHub bundles a fresh LatencyLedger with the observer that writes it, the
SLA checker that reads it, and the schema/policy checks used on captured
payloads. It measures API latency from the network layer rather than from
UI rendering, and verifies what the backend actually returned.

Example:
    hub = ApiHub()
    hub.setup_interception(page)          # before navigating
    await chat_page.navigate()
    await chat_page.send_message("What is the weather today?")
    await chat_page.get_last_message()    # response has arrived
    hub.assert_latency_within("chat_latency", 5000)
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Page

from apiwatch.browser.latency_ledger import LatencyLedger
from apiwatch.browser.network_observer import NetworkObserver
from apiwatch.browser.response_capture import capture_json
from apiwatch.browser.sla_checker import SLAChecker
from apiwatch.config.observation_config import ObservationConfig, load_config
from apiwatch.contracts.policy_evaluator import PolicyEvaluator
from apiwatch.contracts.schema_validator import validate_image_asset
from apiwatch.exceptions import SchemaViolation, SLAViolation
from apiwatch.models.asset_models import ContractVerdict, ImageAsset

logger = logging.getLogger(__name__)


class ApiHub:
    """Assertion surface over one observation session."""

    def __init__(
        self,
        config: Optional[ObservationConfig] = None,
        ledger: Optional[LatencyLedger] = None,
    ):
        """Initialize the hub.

        Args:
            config: Observation configuration (defaults from the environment)
            ledger: Ledger to write to; a new one is created if omitted.
                Never pass a ledger belonging to another session.

        Raises:
            ConfigurationError: If the environment holds invalid settings
        """
        self.config = config if config is not None else load_config()
        self.ledger = ledger if ledger is not None else LatencyLedger()
        self.observer = NetworkObserver(self.ledger, self.config.rules)
        self.sla_checker = SLAChecker(self.ledger)
        self.policy = PolicyEvaluator(self.config.authorized_providers)

    def setup_interception(self, page: Page) -> None:
        """Start observing a page's responses. Call before driving the page."""
        self.observer.attach(page)

    def teardown(self) -> None:
        self.observer.detach()

    def get_latency(self, channel: str) -> float:
        """Return the latest latency (ms) for a channel, 0 if never observed."""
        return self.ledger.get(channel)

    def assert_latency_within(
        self, channel: str, max_ms: float, require_observed: bool = False
    ) -> None:
        """Assert a channel's latest latency is at most max_ms.

        Raises:
            SLAViolation: If the budget is exceeded
        """
        try:
            self.sla_checker.assert_within_budget(
                channel, max_ms, require_observed=require_observed
            )
        except SLAViolation as e:
            logger.error(str(e))
            raise

    def assert_configured_budgets(self, require_observed: bool = False) -> None:
        """Assert every budget in the configuration, in order."""
        try:
            self.sla_checker.assert_budgets(
                self.config.sla_budgets_ms, require_observed=require_observed
            )
        except SLAViolation as e:
            logger.error(str(e))
            raise

    def validate(self, payload: Any) -> ImageAsset:
        """Validate a captured payload into an ImageAsset.

        Raises:
            SchemaViolation: On the first missing or invalid field
        """
        try:
            return validate_image_asset(payload)
        except SchemaViolation as e:
            logger.error(f"Schema violation: {e}")
            raise

    def is_authorized(self, asset: ImageAsset) -> bool:
        return self.policy.is_authorized(asset)

    def check_contract(self, payload: Any) -> ContractVerdict:
        """Validate a payload, then evaluate provider policy on the result.

        Raises:
            SchemaViolation: If the payload fails validation; policy is
                never evaluated in that case
        """
        asset = self.validate(payload)
        return ContractVerdict(asset=asset, authorized=self.is_authorized(asset))

    async def capture_payload(
        self,
        page: Page,
        url_substring: str,
        action: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run an action and return the JSON body of the matching response."""
        return await capture_json(
            page, url_substring, action, timeout_ms=self.config.capture_timeout_ms
        )
