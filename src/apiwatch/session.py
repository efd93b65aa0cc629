"""Session-scoped observation lifecycle."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Page

from apiwatch.api_hub import ApiHub
from apiwatch.config.observation_config import ObservationConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def observation_session(
    page: Page, config: Optional[ObservationConfig] = None
) -> AsyncIterator[ApiHub]:
    """Observe a page for the duration of a block with a fresh ApiHub.

    Interception is set up before the block runs, so it must be entered
    before navigating. Every session gets its own ledger.

    Args:
        page: Playwright page to observe
        config: Observation configuration (defaults from the environment)

    Yields:
        ApiHub bound to the page

    Example:
        async with observation_session(page) as hub:
            await chat_page.send_message("What is the weather today?")
            await chat_page.get_last_message()
            hub.assert_latency_within("chat_latency", 5000)
    """
    hub = ApiHub(config=config)
    hub.setup_interception(page)
    try:
        yield hub
    finally:
        hub.teardown()
        logger.debug(f"Observation session ended: {hub.ledger.snapshot()}")
