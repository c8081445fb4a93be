"""Tests for the FanFiction.net scraper."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from fanfic_core.exceptions import ScrapingError
from fanfic_scrapers.ffnet import FanFictionNetScraper, build_search_url
from tests.mocks.mock_factories import ffn_page, ffn_row
from tests.mocks.mock_settings import make_settings


def _mock_page(*htmls: str) -> MagicMock:
    page = MagicMock()
    page.goto = AsyncMock()
    page.content = AsyncMock(side_effect=list(htmls))
    return page


def _fake_stealth_page(page: MagicMock, released: list[bool]):  # type: ignore[no-untyped-def]
    """Stand-in for stealth_page that records whether the block was exited."""

    @asynccontextmanager
    async def _cm(settings: object) -> AsyncIterator[MagicMock]:
        try:
            yield page
        finally:
            released.append(True)

    return _cm


@pytest.mark.unit
class TestFanFictionNetScraper:
    """Test rendering, parsing and browser release."""

    def test_build_search_url(self) -> None:
        assert build_search_url("naruto+sakura", 1) == (
            "https://www.fanfiction.net/search/?keywords=naruto+sakura&type=story&p=1"
        )

    @pytest.mark.asyncio
    async def test_empty_title_excluded(self) -> None:
        """A row with an empty title never becomes a record."""
        html = ffn_page(
            ffn_row("", "/s/1/1/", "nameless"),
            ffn_row("Kept", "/s/2/1/Kept", "a summary"),
        )
        page = _mock_page(html)
        released: list[bool] = []
        scraper = FanFictionNetScraper(make_settings())

        with patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, released)):
            records = await scraper.scrape("naruto sakura", max_pages=1)

        assert [r.title for r in records] == ["Kept"]
        assert records[0].link == "https://www.fanfiction.net/s/2/1/Kept"
        assert released == [True]

    @pytest.mark.asyncio
    async def test_waits_for_network_idle(self) -> None:
        page = _mock_page(ffn_page(ffn_row("A", "/s/1/1/A")))
        scraper = FanFictionNetScraper(make_settings())

        with patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, [])):
            await scraper.scrape("naruto sakura", max_pages=1)

        page.goto.assert_awaited_once_with(
            build_search_url("naruto+sakura", 1), wait_until="networkidle"
        )

    @pytest.mark.asyncio
    async def test_applies_render_delay(self) -> None:
        page = _mock_page(ffn_page(ffn_row("A", "/s/1/1/A")))
        scraper = FanFictionNetScraper(make_settings(ffn_render_delay_seconds=2.0))

        with (
            patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, [])),
            patch("fanfic_scrapers.ffnet.asyncio.sleep", new_callable=AsyncMock) as mock_sleep,
        ):
            await scraper.scrape("x", max_pages=1)

        mock_sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    async def test_missing_summary_uses_sentinel(self) -> None:
        page = _mock_page(ffn_page(ffn_row("A", "https://www.fanfiction.net/s/9/1/A")))
        scraper = FanFictionNetScraper(make_settings())

        with patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, [])):
            (record,) = await scraper.scrape("x", max_pages=1)

        assert record.summary == "No summary provided."
        assert record.link == "https://www.fanfiction.net/s/9/1/A"

    @pytest.mark.asyncio
    async def test_navigation_failure_releases_browser(self) -> None:
        """A failed navigation raises ScrapingError and still leaves the browser block."""
        page = _mock_page()
        page.goto.side_effect = PlaywrightError("net::ERR_CONNECTION_RESET")
        released: list[bool] = []
        scraper = FanFictionNetScraper(make_settings())

        with patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, released)):
            with pytest.raises(ScrapingError, match="could not be rendered"):
                await scraper.scrape("x", max_pages=1)

        assert released == [True]

    @pytest.mark.asyncio
    async def test_stops_at_first_empty_page(self) -> None:
        page = _mock_page(ffn_page(ffn_row("A", "/s/1/1/A")), ffn_page())
        scraper = FanFictionNetScraper(make_settings())

        with patch("fanfic_scrapers.ffnet.stealth_page", _fake_stealth_page(page, [])):
            records = await scraper.scrape("x", max_pages=4)

        assert len(records) == 1
        assert page.goto.await_count == 2

    @pytest.mark.asyncio
    async def test_browser_setup_failure_wrapped(self) -> None:
        @asynccontextmanager
        async def _broken(settings: object) -> AsyncIterator[MagicMock]:
            raise PlaywrightError("Target page, context or browser has been closed")
            yield MagicMock()  # pragma: no cover

        scraper = FanFictionNetScraper(make_settings())
        with patch("fanfic_scrapers.ffnet.stealth_page", _broken):
            with pytest.raises(ScrapingError, match="browser session failed"):
                await scraper.scrape("x", max_pages=1)
