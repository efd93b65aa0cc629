"""Browser-side response observation.

This package provides the pieces that sit on a Playwright page:
- LatencyLedger: latest latency sample per channel
- NetworkObserver: classifies response events into channels
- SLAChecker: latency budget assertions
- capture_json: explicit capture of a response body
"""

from apiwatch.browser.latency_ledger import LatencyLedger
from apiwatch.browser.network_observer import NetworkObserver, extract_timing
from apiwatch.browser.sla_checker import SLAChecker
from apiwatch.browser.response_capture import capture_json

__all__ = [
    "LatencyLedger",
    "NetworkObserver",
    "extract_timing",
    "SLAChecker",
    "capture_json",
]
