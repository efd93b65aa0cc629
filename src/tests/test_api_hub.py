"""Tests for ApiHub and observation sessions.

These drive the hub through mocked page events the way a browser test
would: set up interception, deliver responses, then assert.
"""

import pytest
from unittest.mock import AsyncMock, patch

from apiwatch.api_hub import ApiHub
from apiwatch.browser.latency_ledger import LatencyLedger
from apiwatch.config.observation_config import load_config
from apiwatch.exceptions import ConfigurationError, SchemaViolation, SLAViolation
from apiwatch.models.asset_models import ContractVerdict, ImageProvider
from apiwatch.session import observation_session


CHAT_URL = "https://app.example.com/api/chat/messages"
IMAGE_URL = "https://app.example.com/api/images/generate"


@pytest.fixture
def config():
    """Create a configuration independent of the environment."""
    return load_config(
        authorized_providers=["openai", "stability-ai"],
        sla_budgets_ms={"chat_latency": 5000, "image_generation_latency": 30000},
        capture_timeout_ms=8000,
    )


@pytest.fixture
def hub(config):
    """Create an ApiHub with the default rules."""
    return ApiHub(config=config)


class TestLatencySurface:
    """Tests for latency lookup and SLA assertions."""

    def test_chat_within_sla(self, hub, mock_page, make_response):
        """Test a chat response inside its budget."""
        hub.setup_interception(mock_page)
        mock_page.emit_event("response", make_response(CHAT_URL, response_end=4800))

        assert hub.get_latency("chat_latency") == 4800
        hub.assert_latency_within("chat_latency", 5000)

    def test_chat_over_sla(self, hub, mock_page, make_response):
        """Test a chat response exceeding its budget."""
        hub.setup_interception(mock_page)
        mock_page.emit_event("response", make_response(CHAT_URL, response_end=5001))

        with pytest.raises(SLAViolation, match="chat_latency took 5001ms"):
            hub.assert_latency_within("chat_latency", 5000)

    def test_unobserved_channel(self, hub):
        """Test that nothing observed reads 0 and passes."""
        assert hub.get_latency("chat_latency") == 0
        hub.assert_latency_within("chat_latency", 0)

    def test_configured_budgets(self, hub, mock_page, make_response):
        """Test asserting every configured budget."""
        hub.setup_interception(mock_page)
        mock_page.emit_event("response", make_response(CHAT_URL, response_end=1200))
        mock_page.emit_event("response", make_response(IMAGE_URL, response_end=31000))

        with pytest.raises(SLAViolation) as exc_info:
            hub.assert_configured_budgets()

        assert exc_info.value.channel == "image_generation_latency"

    def test_hubs_are_isolated(self, config, mock_page, make_response):
        """Test that each hub gets its own ledger."""
        first = ApiHub(config=config)
        first.setup_interception(mock_page)
        mock_page.emit_event("response", make_response(CHAT_URL, response_end=9000))

        second = ApiHub(config=config)

        assert second.get_latency("chat_latency") == 0
        assert first.ledger is not second.ledger

    def test_bad_environment_raises_configuration_error(self, monkeypatch):
        """Test that an invalid environment surfaces as ConfigurationError."""
        monkeypatch.setenv("APIWATCH_AUTHORIZED_PROVIDERS", "openai,bogus")

        with pytest.raises(ConfigurationError, match="Invalid observation configuration"):
            ApiHub()

    @pytest.mark.asyncio
    async def test_session_with_bad_environment(self, monkeypatch, mock_page):
        """Test that a session never attaches when the environment is invalid."""
        monkeypatch.setenv("APIWATCH_AUTHORIZED_PROVIDERS", "openai,bogus")

        with pytest.raises(ConfigurationError):
            async with observation_session(mock_page):
                pass

        mock_page.on.assert_not_called()

    def test_explicit_ledger(self, config):
        """Test that a caller-provided ledger is used as is."""
        ledger = LatencyLedger()
        hub = ApiHub(config=config, ledger=ledger)

        assert hub.ledger is ledger


class TestContractSurface:
    """Tests for validation and policy through the hub."""

    def test_authorized_asset(self, hub):
        """Test an image response from an authorized provider."""
        verdict = hub.check_contract(
            {
                "id": "img_12345",
                "url": "https://cdn.example.com/img_12345.png",
                "provider": "openai",
                "generationTime": 2845,
                "metadata": {"width": 1024, "height": 1024, "quality": "premium"},
            }
        )

        assert isinstance(verdict, ContractVerdict)
        assert verdict.authorized is True
        assert verdict.asset.provider == ImageProvider.OPENAI

    def test_unauthorized_asset(self, hub):
        """Test a schema-valid asset from a provider outside the whitelist."""
        asset = hub.validate({"id": "x", "url": "y", "provider": "midjourney"})

        assert hub.is_authorized(asset) is False

    def test_unknown_provider_rejected_before_policy(self, hub):
        """Test that policy is never evaluated for an invalid payload."""
        with patch.object(hub.policy, "is_authorized") as policy_check:
            with pytest.raises(SchemaViolation, match="invalid provider"):
                hub.check_contract(
                    {
                        "id": "img_unauthorized",
                        "url": "https://untrusted-ai.com/image.png",
                        "provider": "untrusted-service",
                    }
                )

        policy_check.assert_not_called()

    def test_missing_provider(self, hub):
        """Test that a response without provider is rejected."""
        with pytest.raises(SchemaViolation) as exc_info:
            hub.validate({"id": "img_123", "url": "https://example.com/image.png"})

        assert exc_info.value.field == "provider"

    @pytest.mark.asyncio
    async def test_capture_payload_uses_configured_timeout(self, hub, mock_page):
        """Test that capture goes through capture_json with the config timeout."""
        action = AsyncMock()
        with patch(
            "apiwatch.api_hub.capture_json", new=AsyncMock(return_value={"id": "x"})
        ) as capture:
            payload = await hub.capture_payload(mock_page, "/api/images/generate", action)

        assert payload == {"id": "x"}
        capture.assert_awaited_once_with(
            mock_page, "/api/images/generate", action, timeout_ms=8000
        )


class TestObservationSession:
    """Tests for the observation_session context manager."""

    @pytest.mark.asyncio
    async def test_session_attaches_and_detaches(self, config, mock_page, make_response):
        """Test that the session observes only while open."""
        async with observation_session(mock_page, config) as hub:
            assert hub.observer.attached is True
            mock_page.emit_event("response", make_response(CHAT_URL, response_end=700))
            hub.assert_latency_within("chat_latency", 5000)

        assert hub.observer.attached is False
        assert mock_page.listeners["response"] == []

    @pytest.mark.asyncio
    async def test_session_detaches_on_failure(self, config, mock_page, make_response):
        """Test that a failing assertion still ends the subscription."""
        with pytest.raises(SLAViolation):
            async with observation_session(mock_page, config) as hub:
                mock_page.emit_event(
                    "response", make_response(CHAT_URL, response_end=7000)
                )
                hub.assert_latency_within("chat_latency", 5000)

        assert mock_page.listeners["response"] == []

    @pytest.mark.asyncio
    async def test_sessions_use_fresh_ledgers(self, config, mock_page, make_response):
        """Test that a new session does not see a previous session's latency."""
        async with observation_session(mock_page, config) as first:
            mock_page.emit_event("response", make_response(CHAT_URL, response_end=9000))

        async with observation_session(mock_page, config) as second:
            assert second.get_latency("chat_latency") == 0

        assert first.get_latency("chat_latency") == 9000
