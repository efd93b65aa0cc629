"""apiwatch: network response observation and contract enforcement for browser tests.

Observes the responses a Playwright page receives, records per-channel API
latency, asserts latency budgets, and validates captured response payloads
against the image asset contract and provider whitelist.
"""

from apiwatch.exceptions import (
    ApiWatchError,
    ConfigurationError,
    SchemaViolation,
    SLAViolation,
)
from apiwatch.models import (
    ObservationRule,
    ResponseEvent,
    ImageProvider,
    ImageQuality,
    ImageMetadata,
    ImageAsset,
    ValidationResult,
    ContractVerdict,
)
from apiwatch.config import ObservationConfig, load_config, configure_logging
from apiwatch.browser import LatencyLedger, NetworkObserver, SLAChecker, capture_json
from apiwatch.contracts import (
    parse_image_asset,
    validate_image_asset,
    PolicyEvaluator,
    is_authorized,
)
from apiwatch.api_hub import ApiHub
from apiwatch.session import observation_session

__all__ = [
    "ApiWatchError",
    "ConfigurationError",
    "SchemaViolation",
    "SLAViolation",
    "ObservationRule",
    "ResponseEvent",
    "ImageProvider",
    "ImageQuality",
    "ImageMetadata",
    "ImageAsset",
    "ValidationResult",
    "ContractVerdict",
    "ObservationConfig",
    "load_config",
    "configure_logging",
    "LatencyLedger",
    "NetworkObserver",
    "SLAChecker",
    "capture_json",
    "parse_image_asset",
    "validate_image_asset",
    "PolicyEvaluator",
    "is_authorized",
    "ApiHub",
    "observation_session",
]
