"""Archive of Our Own scraper — paged search over plain HTTP."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from fanfic_core.constants import AO3_ORIGIN, AO3_SEARCH_URL
from fanfic_core.exceptions import ScrapingError
from fanfic_core.models.record import FicRecord
from fanfic_scrapers.parsers.ao3 import Ao3ListingParser
from fanfic_scrapers.records import build_records, normalize_query

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings
    from fanfic_core.interfaces.scraper import ListingParser

logger = structlog.get_logger()

# Transport hiccups worth another attempt; HTTP status errors are not retried
_TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.NetworkError)


def build_search_url(query: str, page: int) -> str:
    """Return the AO3 work-search URL for an already encoded query."""
    return AO3_SEARCH_URL.format(query=query, page=page)


class Ao3Scraper:
    """Fetch AO3 search pages one at a time and parse work blurbs."""

    def __init__(self, settings: Settings, parser: ListingParser | None = None) -> None:
        """Initialize with settings and an optional parser override."""
        self.settings = settings
        self._parser = parser or Ao3ListingParser()

    async def scrape(self, search_term: str, max_pages: int) -> list[FicRecord]:
        """Collect records from pages ``1..max_pages``, stopping at the first empty page.

        Pages are awaited sequentially so results keep the site's order. Any
        page failure aborts the whole scrape with ScrapingError.
        """
        query = normalize_query(search_term)
        records: list[FicRecord] = []
        start = time.monotonic()

        headers = {"User-Agent": self.settings.user_agent}
        async with httpx.AsyncClient(
            timeout=self.settings.http_timeout_seconds,
            headers=headers,
            follow_redirects=True,
        ) as client:
            for page in range(1, max_pages + 1):
                html = await self._fetch_page(client, build_search_url(query, page))
                listings = self._parser.parse_listings(html)
                if not listings:
                    logger.info("ao3_results_exhausted", query=query, page=page)
                    break
                records.extend(build_records(listings, AO3_ORIGIN))

        logger.info(
            "ao3_scrape_complete",
            query=query,
            records=len(records),
            duration_seconds=round(time.monotonic() - start, 2),
        )
        return records

    async def _fetch_page(self, client: httpx.AsyncClient, url: str) -> str:
        """GET one search page, retrying transient transport errors."""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.settings.fetch_retry_max),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(_TRANSIENT_ERRORS),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(url)
                    response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("ao3_fetch_failed", url=url, error=str(e))
            msg = f"AO3 search page could not be fetched: {url}"
            raise ScrapingError(msg) from e
        return response.text
