"""Response contract enforcement: schema validation and provider policy."""

from apiwatch.contracts.schema_validator import parse_image_asset, validate_image_asset
from apiwatch.contracts.policy_evaluator import (
    AUTHORIZED_PROVIDERS,
    PolicyEvaluator,
    is_authorized,
)

__all__ = [
    "parse_image_asset",
    "validate_image_asset",
    "AUTHORIZED_PROVIDERS",
    "PolicyEvaluator",
    "is_authorized",
]
