"""FanFiction.net scraper — search pages rendered in a headless browser."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import structlog
from playwright.async_api import Error as PlaywrightError

from fanfic_core.constants import FFN_ORIGIN, FFN_SEARCH_URL
from fanfic_core.exceptions import ScrapingError
from fanfic_core.models.record import FicRecord
from fanfic_scrapers.browser import stealth_page
from fanfic_scrapers.parsers.ffnet import FanFictionNetListingParser
from fanfic_scrapers.records import build_records, normalize_query

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings
    from fanfic_core.interfaces.scraper import ListingParser

logger = structlog.get_logger()


def build_search_url(query: str, page: int) -> str:
    """Return the FFN story-search URL for an already encoded query."""
    return FFN_SEARCH_URL.format(query=query, page=page)


class FanFictionNetScraper:
    """Render FFN search pages in Chromium and parse the story rows.

    Heavy: every call launches its own browser. Keep ``max_pages`` small.
    """

    def __init__(self, settings: Settings, parser: ListingParser | None = None) -> None:
        """Initialize with settings and an optional parser override."""
        self.settings = settings
        self._parser = parser or FanFictionNetListingParser()

    async def scrape(self, search_term: str, max_pages: int) -> list[FicRecord]:
        """Collect records from pages ``1..max_pages`` of the rendered search."""
        query = normalize_query(search_term)
        records: list[FicRecord] = []
        start = time.monotonic()

        try:
            async with stealth_page(self.settings) as page:
                for page_number in range(1, max_pages + 1):
                    html = await self._render(page, build_search_url(query, page_number))
                    listings = self._parser.parse_listings(html)
                    if not listings:
                        logger.info("ffn_results_exhausted", query=query, page=page_number)
                        break
                    records.extend(build_records(listings, FFN_ORIGIN))
        except PlaywrightError as e:
            logger.warning("ffn_browser_failed", error=str(e))
            msg = "FanFiction.net browser session failed"
            raise ScrapingError(msg) from e

        logger.info(
            "ffn_scrape_complete",
            query=query,
            records=len(records),
            duration_seconds=round(time.monotonic() - start, 2),
        )
        return records

    async def _render(self, page: Any, url: str) -> str:
        """Navigate, let the network settle, wait for rendering, return the markup."""
        try:
            await page.goto(url, wait_until="networkidle")
            # Client-side rendering keeps going after the network settles
            await asyncio.sleep(self.settings.ffn_render_delay_seconds)
            html: str = await page.content()
        except PlaywrightError as e:
            logger.warning("ffn_navigation_failed", url=url, error=str(e))
            msg = f"FanFiction.net search page could not be rendered: {url}"
            raise ScrapingError(msg) from e
        return html
