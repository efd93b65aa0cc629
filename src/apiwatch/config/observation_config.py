"""Observation pipeline configuration with environment variable loading."""

import logging
import os
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from apiwatch.exceptions import ConfigurationError
from apiwatch.models.asset_models import ImageProvider
from apiwatch.models.observation_models import ObservationRule

# Load environment variables from .env file
load_dotenv()

CHAT_LATENCY = "chat_latency"
IMAGE_GENERATION_LATENCY = "image_generation_latency"

DEFAULT_RULES = [
    ObservationRule(url_substring="/api/chat/messages", channel=CHAT_LATENCY),
    ObservationRule(
        url_substring="/api/images/generate", channel=IMAGE_GENERATION_LATENCY
    ),
]


def _split_env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class ObservationConfig(BaseModel):
    """Static configuration for one observation session.

    Defaults are read from the environment and validated like explicit values.
    """

    model_config = ConfigDict(validate_default=True)

    # Application under test
    base_url: str = Field(
        default_factory=lambda: os.getenv("BASE_URL", "https://app.example.com"),
        description="Base URL of the application under test",
    )

    # Classification
    rules: List[ObservationRule] = Field(
        default_factory=lambda: list(DEFAULT_RULES),
        description="Observation rules, in priority order",
    )

    # Policy
    authorized_providers: List[ImageProvider] = Field(
        default_factory=lambda: _split_env_list(
            "APIWATCH_AUTHORIZED_PROVIDERS", "openai,stability-ai"
        ),
        description="Providers whose assets are authorized",
    )

    # SLA budgets
    sla_budgets_ms: Dict[str, float] = Field(
        default_factory=lambda: {
            CHAT_LATENCY: float(os.getenv("APIWATCH_CHAT_SLA_MS", "5000")),
            IMAGE_GENERATION_LATENCY: float(os.getenv("APIWATCH_IMAGE_SLA_MS", "30000")),
        },
        description="Latency budget per channel (ms)",
    )

    # Capture
    capture_timeout_ms: float = Field(
        default_factory=lambda: float(os.getenv("APIWATCH_CAPTURE_TIMEOUT_MS", "15000")),
        description="How long to wait for a response to capture (ms)",
    )

    # Logging
    log_level: str = Field(
        default_factory=lambda: os.getenv("APIWATCH_LOG_LEVEL", "INFO"),
        description="Log level for configure_logging",
    )

    @field_validator("rules")
    @classmethod
    def _rules_not_empty(cls, value: List[ObservationRule]) -> List[ObservationRule]:
        if not value:
            raise ValueError("at least one observation rule is required")
        return value

    @field_validator("sla_budgets_ms")
    @classmethod
    def _budgets_non_negative(cls, value: Dict[str, float]) -> Dict[str, float]:
        for channel, budget in value.items():
            if budget < 0:
                raise ValueError(f"budget for {channel} must be non-negative, got {budget}")
        return value

    @field_validator("capture_timeout_ms")
    @classmethod
    def _timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"capture timeout must be positive, got {value}")
        return value


def load_config(**overrides) -> ObservationConfig:
    """Build an ObservationConfig, reporting bad values as ConfigurationError.

    Args:
        **overrides: Field values taking precedence over the environment

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If any value is invalid
    """
    try:
        return ObservationConfig(**overrides)
    except ValueError as e:
        raise ConfigurationError(f"Invalid observation configuration: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for a harness run.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Playwright's own logger is noisy below DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
