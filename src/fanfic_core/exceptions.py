"""Custom exception hierarchy for fanfic-finder."""

from __future__ import annotations


class FanficFinderError(Exception):
    """Base exception for all fanfic-finder errors."""


class ScrapingError(FanficFinderError):
    """Raised when a search page cannot be fetched or rendered."""


class BrowserLaunchError(ScrapingError):
    """Raised when the headless browser cannot be started."""
