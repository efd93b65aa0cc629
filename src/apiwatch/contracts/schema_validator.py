"""Strict validation of image-generation response payloads.

Turns an untyped payload (normally decoded JSON) into an ImageAsset, or a
structured rejection naming the first field that broke the contract. Checks
run in a fixed order and stop at the first failure:

    payload is a mapping -> id -> url -> provider present -> provider known

Optional fields are checked afterwards and defaulted when absent. Nothing is
repaired: a malformed payload is rejected, never patched up.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from apiwatch.models.asset_models import (
    DEFAULT_IMAGE_METADATA,
    ImageAsset,
    ImageMetadata,
    ImageProvider,
    SchemaError,
    ValidationResult,
)

logger = logging.getLogger(__name__)

ENTITY_NAME = "ImageAsset"
REQUIRED_STRING_FIELDS = ("id", "url")
PROVIDER_VALUES = tuple(provider.value for provider in ImageProvider)


def _missing(field: str) -> SchemaError:
    return SchemaError(
        field=field,
        reason="missing",
        message=f"{ENTITY_NAME} missing required field: {field}",
    )


def _invalid(field: Optional[str], value: Any, message: Optional[str] = None) -> SchemaError:
    return SchemaError(
        field=field,
        reason="invalid",
        message=message or f"{ENTITY_NAME} has invalid {field}: {value!r}",
        value=value,
    )


def _check_required(payload: Mapping) -> Optional[SchemaError]:
    for field in REQUIRED_STRING_FIELDS:
        value = payload.get(field)
        if value is None or value == "":
            return _missing(field)
        if not isinstance(value, str):
            return _invalid(field, value)

    provider = payload.get("provider")
    if provider is None or provider == "":
        return _missing("provider")
    if provider not in PROVIDER_VALUES:
        return _invalid(
            "provider", provider, f"{ENTITY_NAME} has invalid provider: {provider}"
        )
    return None


def _generation_time(payload: Mapping) -> Any:
    value = payload.get("generationTime")
    if value is None:
        return 0.0
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _invalid("generationTime", value)
    try:
        duration = float(value)
    except OverflowError:
        return _invalid("generationTime", value)
    if not math.isfinite(duration) or duration < 0:
        return _invalid("generationTime", value)
    return duration


def _metadata(payload: Mapping) -> Any:
    value = payload.get("metadata")
    if not value:
        return DEFAULT_IMAGE_METADATA
    if not isinstance(value, Mapping):
        return _invalid("metadata", value)
    try:
        return ImageMetadata.model_validate(dict(value))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return _invalid(
            "metadata",
            value,
            f"{ENTITY_NAME} has invalid metadata: {location}: {first['msg']}",
        )


def parse_image_asset(payload: Any) -> ValidationResult:
    """Validate a raw payload without raising.

    Args:
        payload: Untyped response payload

    Returns:
        ValidationResult holding either the asset or the first SchemaError
    """
    if not isinstance(payload, Mapping):
        error = _invalid(
            None,
            payload,
            f"{ENTITY_NAME} payload must be an object, got {type(payload).__name__}",
        )
        return ValidationResult(error=error)

    error = _check_required(payload)
    if error is not None:
        return ValidationResult(error=error)

    generation_time = _generation_time(payload)
    if isinstance(generation_time, SchemaError):
        return ValidationResult(error=generation_time)

    metadata = _metadata(payload)
    if isinstance(metadata, SchemaError):
        return ValidationResult(error=metadata)

    asset = ImageAsset(
        id=payload["id"],
        url=payload["url"],
        provider=ImageProvider(payload["provider"]),
        generation_time=generation_time,
        metadata=metadata,
    )
    return ValidationResult(asset=asset)


def validate_image_asset(payload: Any) -> ImageAsset:
    """Validate a raw payload into an ImageAsset.

    Args:
        payload: Untyped response payload

    Returns:
        The validated asset with optional fields defaulted

    Raises:
        SchemaViolation: On the first missing or invalid field

    Example:
        asset = validate_image_asset({"id": "img_1", "url": "https://...", "provider": "openai"})
        asset.generation_time  # 0.0
    """
    result = parse_image_asset(payload)
    if not result.ok:
        logger.debug(f"Rejected payload: {result.error.message}")
    return result.unwrap()
