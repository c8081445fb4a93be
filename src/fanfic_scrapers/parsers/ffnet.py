"""Listing parser for rendered FanFiction.net search pages."""

from __future__ import annotations

from bs4 import BeautifulSoup

from fanfic_core.models.record import RawListing

_LISTING_SELECTOR = "div.z-list"
_TITLE_SELECTOR = "a.stitle"
_SUMMARY_SELECTOR = "div.z-indent"


class FanFictionNetListingParser:
    """Extract story rows from a FanFiction.net search page."""

    def parse_listings(self, html: str) -> list[RawListing]:
        soup = BeautifulSoup(html, "html.parser")
        listings: list[RawListing] = []
        for row in soup.select(_LISTING_SELECTOR):
            title_tag = row.select_one(_TITLE_SELECTOR)
            summary_tag = row.select_one(_SUMMARY_SELECTOR)
            href = title_tag.get("href") if title_tag else None
            listings.append(
                RawListing(
                    title=title_tag.get_text(strip=True) if title_tag else "",
                    href=href if isinstance(href, str) else None,
                    summary=summary_tag.get_text(" ", strip=True) if summary_tag else "",
                )
            )
        return listings
