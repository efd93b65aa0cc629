"""Per-session store of the latest latency sample per channel."""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class LatencyLedger:
    """Map each channel to its most recently observed latency (ms).

    Only one sample is kept per channel; a new write replaces the old one.
    A ledger belongs to exactly one observation session. Build a new one for
    every test so latencies cannot leak between runs.

    Reading a channel that was never observed returns 0.0, the same value
    as an observed-but-unmeasured response. Use ``sample()`` or ``in`` when
    the difference matters.
    """

    NEUTRAL_VALUE = 0.0

    def __init__(self):
        """Initialize an empty ledger."""
        self._samples: Dict[str, float] = {}

    def record(self, channel: str, value: float) -> None:
        """Store the latest sample for a channel, overwriting any prior one.

        Args:
            channel: Channel name
            value: Latency in milliseconds

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Latency for {channel} must be non-negative, got {value}")
        previous = self._samples.get(channel)
        self._samples[channel] = float(value)
        logger.debug(f"Recorded {channel}={value}ms (previous: {previous})")

    def get(self, channel: str) -> float:
        """Return the latest sample, or 0.0 if the channel was never observed."""
        return self._samples.get(channel, self.NEUTRAL_VALUE)

    def sample(self, channel: str) -> Optional[float]:
        """Return the latest sample, or None if the channel was never observed."""
        return self._samples.get(channel)

    def channels(self) -> List[str]:
        return list(self._samples)

    def snapshot(self) -> Dict[str, float]:
        """Return a copy of all current samples."""
        return dict(self._samples)

    def clear(self) -> None:
        count = len(self._samples)
        self._samples.clear()
        logger.debug(f"Cleared {count} latency samples")

    def __contains__(self, channel: object) -> bool:
        return channel in self._samples

    def __len__(self) -> int:
        return len(self._samples)
