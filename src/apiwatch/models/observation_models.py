"""Data models for network response observation.

This module defines the Pydantic models used by the event classifier:
observation rules that map URL fragments to semantic channels, and the
transport-neutral view of a single observed response.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ObservationRule(BaseModel):
    """Classify responses whose URL contains a fragment into a channel.

    Rules are immutable once built. When several rules match the same URL,
    the one registered first wins.
    """

    model_config = ConfigDict(frozen=True)

    url_substring: str = Field(min_length=1, description="URL fragment to match")
    channel: str = Field(min_length=1, description="Channel name to record under")

    def matches(self, url: str) -> bool:
        """Return True if the URL contains this rule's fragment."""
        return self.url_substring in url


class ResponseEvent(BaseModel):
    """A single observed network response, reduced to what classification needs."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Response URL")
    timing_ms: Optional[float] = Field(
        default=None,
        description="Request-to-response duration (ms), None if the transport gave none",
    )
