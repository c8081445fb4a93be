"""Public interface re-exports for fanfic_core."""

from fanfic_core.interfaces.scraper import FicScraper, ListingParser

__all__ = [
    "FicScraper",
    "ListingParser",
]
