"""Models package for apiwatch."""

from .observation_models import ObservationRule, ResponseEvent
from .asset_models import (
    ImageProvider,
    ImageQuality,
    ImageMetadata,
    ImageAsset,
    SchemaError,
    ValidationResult,
    ContractVerdict,
    DEFAULT_IMAGE_METADATA,
)

__all__ = [
    # Observation models
    "ObservationRule",
    "ResponseEvent",
    # Asset models
    "ImageProvider",
    "ImageQuality",
    "ImageMetadata",
    "ImageAsset",
    "SchemaError",
    "ValidationResult",
    "ContractVerdict",
    "DEFAULT_IMAGE_METADATA",
]
