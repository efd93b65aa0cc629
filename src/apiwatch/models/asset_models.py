"""Data models for validated image-generation responses.

The models here describe what a response from the image generation endpoint
must look like once it has passed validation. They are only ever built by
the schema validator; raw payloads never reach them directly.
"""

from enum import Enum
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from apiwatch.exceptions import SchemaViolation


class ImageProvider(str, Enum):
    """Image providers a schema-conformant response may name."""

    OPENAI = "openai"
    STABILITY_AI = "stability-ai"
    MIDJOURNEY = "midjourney"


class ImageQuality(str, Enum):
    """Quality tier of a generated image."""

    STANDARD = "standard"
    PREMIUM = "premium"


class ImageMetadata(BaseModel):
    """Descriptive metadata attached to a generated image."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0, description="Image width in pixels")
    height: int = Field(gt=0, description="Image height in pixels")
    quality: ImageQuality = Field(description="Quality tier")


DEFAULT_IMAGE_METADATA = ImageMetadata(
    width=1024, height=1024, quality=ImageQuality.PREMIUM
)


class ImageAsset(BaseModel):
    """A validated image-generation response.

    Field names follow Python conventions; the wire names used by the
    backend are kept as aliases so ``to_payload`` can rebuild the raw form.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Asset identifier")
    url: str = Field(min_length=1, description="Location of the generated image")
    provider: ImageProvider = Field(description="Backend provider that generated it")
    generation_time: float = Field(
        default=0.0,
        ge=0,
        alias="generationTime",
        description="Backend generation duration (ms)",
    )
    metadata: ImageMetadata = Field(default=DEFAULT_IMAGE_METADATA)

    def to_payload(self) -> Dict[str, Any]:
        """Return the raw wire form of this asset."""
        return self.model_dump(mode="json", by_alias=True)


class SchemaError(BaseModel):
    """The first failure found while validating a payload."""

    model_config = ConfigDict(frozen=True)

    field: Optional[str] = Field(default=None, description="Failing field, if any")
    reason: Literal["missing", "invalid"] = Field(description="Failure kind")
    message: str = Field(description="Human readable description")
    value: Optional[Any] = Field(default=None, description="Offending value")

    def to_exception(self) -> SchemaViolation:
        """Build the exception that surfaces this error to callers."""
        return SchemaViolation(
            self.message, field=self.field, reason=self.reason, value=self.value
        )


class ValidationResult(BaseModel):
    """Outcome of validating a payload: exactly one of asset or error is set."""

    model_config = ConfigDict(frozen=True)

    asset: Optional[ImageAsset] = None
    error: Optional[SchemaError] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "ValidationResult":
        if (self.asset is None) == (self.error is None):
            raise ValueError("ValidationResult needs exactly one of asset or error")
        return self

    @property
    def ok(self) -> bool:
        return self.asset is not None

    def unwrap(self) -> ImageAsset:
        """Return the validated asset, or raise the recorded SchemaViolation."""
        if self.error is not None:
            raise self.error.to_exception()
        return self.asset


class ContractVerdict(BaseModel):
    """A validated asset together with its authorization verdict."""

    model_config = ConfigDict(frozen=True)

    asset: ImageAsset
    authorized: bool
