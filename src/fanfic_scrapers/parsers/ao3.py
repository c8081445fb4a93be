"""Listing parser for Archive of Our Own work search pages."""

from __future__ import annotations

from bs4 import BeautifulSoup

from fanfic_core.models.record import RawListing

_LISTING_SELECTOR = "li.work.blurb.group"
_TITLE_SELECTOR = "h4.heading a"
_SUMMARY_SELECTOR = "blockquote.userstuff.summary"


class Ao3ListingParser:
    """Extract work blurbs from an AO3 search results page."""

    def parse_listings(self, html: str) -> list[RawListing]:
        """Return one RawListing per ``li.work.blurb.group`` element."""
        soup = BeautifulSoup(html, "html.parser")
        listings: list[RawListing] = []
        for blurb in soup.select(_LISTING_SELECTOR):
            # First heading link is the work; the following ones are authors
            title_tag = blurb.select_one(_TITLE_SELECTOR)
            summary_tag = blurb.select_one(_SUMMARY_SELECTOR)
            href = title_tag.get("href") if title_tag else None
            listings.append(
                RawListing(
                    title=title_tag.get_text(strip=True) if title_tag else "",
                    href=href if isinstance(href, str) else None,
                    summary=summary_tag.get_text(" ", strip=True) if summary_tag else "",
                )
            )
        return listings
