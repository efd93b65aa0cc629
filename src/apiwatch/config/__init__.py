"""Configuration for the observation pipeline."""

from .observation_config import (
    ObservationConfig,
    load_config,
    configure_logging,
    CHAT_LATENCY,
    IMAGE_GENERATION_LATENCY,
    DEFAULT_RULES,
)

__all__ = [
    "ObservationConfig",
    "load_config",
    "configure_logging",
    "CHAT_LATENCY",
    "IMAGE_GENERATION_LATENCY",
    "DEFAULT_RULES",
]
