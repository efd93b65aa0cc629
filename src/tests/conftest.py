"""Shared fixtures for apiwatch tests."""

import pytest
from unittest.mock import Mock, AsyncMock
from playwright.async_api import Page


@pytest.fixture
def make_response():
    """Build mock Playwright responses with a URL and resource timing."""

    def _make(url, response_end=-1, response_start=-1, timing=True):
        response = Mock()
        response.url = url
        response.status = 200
        response.request = Mock()
        if timing:
            response.request.timing = {
                "startTime": 1700000000000.0,
                "requestStart": 1.2,
                "responseStart": response_start,
                "responseEnd": response_end,
            }
        else:
            response.request.timing = None
        return response

    return _make


@pytest.fixture
def mock_page():
    """Create a mock Page that records its response listeners."""
    page = AsyncMock(spec=Page)
    page.listeners = {}

    def _on(event, handler):
        page.listeners.setdefault(event, []).append(handler)

    def _remove_listener(event, handler):
        page.listeners[event].remove(handler)

    page.on = Mock(side_effect=_on)
    page.remove_listener = Mock(side_effect=_remove_listener)

    def _emit(event, payload):
        for handler in list(page.listeners.get(event, [])):
            handler(payload)

    page.emit_event = _emit
    return page
