"""Factory functions for creating scrapers from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fanfic_core.interfaces.scraper import FicScraper
from fanfic_core.models.source import FicSource

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings


def create_scraper(source: FicSource, settings: Settings) -> FicScraper:
    """Create the scraper for ``source``.

    The FFN scraper pulls in Playwright, so it is only imported when chosen.
    """
    if source is FicSource.FFN:
        from fanfic_scrapers.ffnet import FanFictionNetScraper

        return FanFictionNetScraper(settings)

    from fanfic_scrapers.ao3 import Ao3Scraper

    return Ao3Scraper(settings)


def max_pages_for(source: FicSource, settings: Settings) -> int:
    """Page-count policy per source: generous for AO3, a single page for FFN."""
    if source is FicSource.FFN:
        return settings.ffn_max_pages
    return settings.ao3_max_pages
