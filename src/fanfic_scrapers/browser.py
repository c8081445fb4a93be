"""Headless browser lifetime for pages that need client-side rendering."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog

from fanfic_core.exceptions import BrowserLaunchError

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings

logger = structlog.get_logger()

_LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
]


@asynccontextmanager
async def stealth_page(settings: Settings) -> AsyncIterator[Any]:
    """Yield one Playwright page in a fresh, fingerprint-hardened Chromium.

    The browser belongs to this block alone and is closed on every exit path,
    including errors raised by the caller.
    """
    from playwright.async_api import Error as PlaywrightError
    from playwright.async_api import async_playwright
    from playwright_stealth import Stealth

    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True, args=_LAUNCH_ARGS)
        except PlaywrightError as e:
            msg = "Headless Chromium could not be launched"
            raise BrowserLaunchError(msg) from e

        logger.debug("browser_launched")
        try:
            context = await browser.new_context(
                user_agent=settings.user_agent,
                viewport={"width": 1280, "height": 800},
                locale="en-US",
            )
            page = await context.new_page()
            await Stealth().apply_stealth_async(page)
            page.set_default_navigation_timeout(settings.browser_navigation_timeout_ms)
            yield page
        finally:
            await browser.close()
            logger.debug("browser_closed")
