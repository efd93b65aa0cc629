"""Explicit capture of response payloads for contract validation.

The observer only reads URLs and timings. When a test needs the body of a
response, it captures it here while driving the interaction that triggers it.
"""

import logging
from typing import Any, Awaitable, Callable

from playwright.async_api import Page

from apiwatch.exceptions import SchemaViolation

logger = logging.getLogger(__name__)


async def capture_json(
    page: Page,
    url_substring: str,
    action: Callable[[], Awaitable[Any]],
    timeout_ms: float = 15000,
) -> Any:
    """Run an action and return the JSON body of the first matching response.

    Args:
        page: Playwright page the action drives
        url_substring: URL fragment identifying the response to capture
        action: Coroutine function triggering the request
        timeout_ms: How long to wait for the response

    Returns:
        Decoded JSON payload

    Raises:
        SchemaViolation: If the response body is not valid UTF-8 JSON
        playwright.async_api.TimeoutError: If no matching response arrives

    Example:
        payload = await capture_json(
            page,
            "/api/images/generate",
            lambda: chat_page.request_image_generation("spicy"),
        )
    """
    async with page.expect_response(
        lambda response: url_substring in response.url, timeout=timeout_ms
    ) as response_info:
        await action()
    response = await response_info.value

    logger.debug(f"Captured {response.status} response from {response.url}")

    try:
        return await response.json()
    except ValueError as e:
        raise SchemaViolation(
            f"Response from {response.url} is not valid JSON: {e}",
            field=None,
            reason="invalid",
        ) from e
