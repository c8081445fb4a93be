"""Abstract scraper and listing-parser interfaces."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fanfic_core.models.record import FicRecord, RawListing


@runtime_checkable
class ListingParser(Protocol):
    """Site-specific markup reader; selectors live behind this interface."""

    def parse_listings(self, html: str) -> list[RawListing]:
        """Extract every result listing from a search page."""
        ...


@runtime_checkable
class FicScraper(Protocol):
    """Abstract interface for one archive's search scraper."""

    async def scrape(self, search_term: str, max_pages: int) -> list[FicRecord]:
        """Collect records for a search term, visiting at most max_pages pages."""
        ...
