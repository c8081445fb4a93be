"""Turn raw listings into validated records."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote_plus, urljoin

import structlog

from fanfic_core.models.record import FicRecord, RawListing

logger = structlog.get_logger()


def normalize_query(search_term: str) -> str:
    """Encode a search term for a query string; spaces become ``+``."""
    return quote_plus(search_term.strip())


def absolute_link(origin: str, href: str | None) -> str:
    """Resolve a possibly relative href against the site origin."""
    if not href or not href.strip():
        return ""
    return urljoin(origin + "/", href.strip())


def build_records(listings: Iterable[RawListing], origin: str) -> list[FicRecord]:
    """Build records from listings, dropping any without a title or link."""
    records: list[FicRecord] = []
    for listing in listings:
        title = listing.title.strip()
        link = absolute_link(origin, listing.href)
        if not title or not link:
            logger.debug("listing_skipped", origin=origin, title=title, href=listing.href)
            continue
        records.append(FicRecord(title=title, link=link, summary=listing.summary))
    return records
