"""Exception types raised by the observation and contract pipeline."""

from typing import Any, Optional


class ApiWatchError(Exception):
    """Base class for all apiwatch errors."""

    pass


class ConfigurationError(ApiWatchError, ValueError):
    """Raised when static observation configuration is invalid."""

    pass


class SchemaViolation(ApiWatchError, ValueError):
    """Raised when a response payload breaks the asset contract.

    Attributes:
        field: Name of the first failing field, or None when the payload
            itself is unusable (not a mapping, not JSON)
        reason: "missing" or "invalid"
        value: Offending value, if any
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        reason: str = "invalid",
        value: Any = None,
    ):
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.value = value


class SLAViolation(ApiWatchError, AssertionError):
    """Raised when a channel's measured latency exceeds its budget.

    Subclasses AssertionError so test runners report it as a failed
    assertion rather than an error.
    """

    def __init__(self, channel: str, observed: Optional[float], budget: float):
        self.channel = channel
        self.observed = observed
        self.budget = budget
        if observed is None:
            message = (
                f"[LATENCY SLA VIOLATION] Endpoint: {channel} was never observed "
                f"(max: {format_ms(budget)}ms)"
            )
        else:
            message = (
                f"[LATENCY SLA VIOLATION] Endpoint: {channel} took "
                f"{format_ms(observed)}ms (max: {format_ms(budget)}ms)"
            )
        super().__init__(message)


def format_ms(value: float) -> str:
    """Render a millisecond value without a trailing '.0' for whole numbers."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")
