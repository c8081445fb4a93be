"""Tests for the headless browser lifetime helper."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from fanfic_core.exceptions import BrowserLaunchError
from fanfic_scrapers.browser import stealth_page
from tests.mocks.mock_settings import make_settings


def _mock_playwright() -> tuple[AsyncMock, AsyncMock, AsyncMock, MagicMock]:
    """Return ``(playwright, browser, context, page)`` mocks wired together."""
    mock_page = MagicMock()

    mock_context = AsyncMock()
    mock_context.new_page.return_value = mock_page

    mock_browser = AsyncMock()
    mock_browser.new_context.return_value = mock_context
    mock_browser.close = AsyncMock()

    mock_chromium = AsyncMock()
    mock_chromium.launch.return_value = mock_browser

    mock_pw = AsyncMock()
    mock_pw.chromium = mock_chromium
    mock_pw.__aenter__ = AsyncMock(return_value=mock_pw)
    mock_pw.__aexit__ = AsyncMock(return_value=None)
    return mock_pw, mock_browser, mock_context, mock_page


@pytest.mark.unit
class TestStealthPage:
    """Test launch options and guaranteed teardown."""

    @pytest.fixture(autouse=True)
    def stealth(self) -> Iterator[MagicMock]:
        with patch("playwright_stealth.Stealth") as mock_stealth:
            mock_stealth.return_value.apply_stealth_async = AsyncMock()
            yield mock_stealth

    @pytest.mark.asyncio
    async def test_yields_page_and_closes_browser(self, stealth: MagicMock) -> None:
        mock_pw, mock_browser, mock_context, mock_page = _mock_playwright()
        settings = make_settings(user_agent="UA/2.0", browser_navigation_timeout_ms=1234)

        with patch("playwright.async_api.async_playwright", return_value=mock_pw):
            async with stealth_page(settings) as page:
                assert page is mock_page

        launch_kwargs = mock_pw.chromium.launch.call_args.kwargs
        assert launch_kwargs["headless"] is True
        assert "--disable-blink-features=AutomationControlled" in launch_kwargs["args"]
        assert mock_browser.new_context.call_args.kwargs["user_agent"] == "UA/2.0"
        stealth.return_value.apply_stealth_async.assert_awaited_once_with(mock_page)
        mock_page.set_default_navigation_timeout.assert_called_once_with(1234)
        mock_browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_browser_closed_when_body_raises(self) -> None:
        mock_pw, mock_browser, _, _ = _mock_playwright()

        with patch("playwright.async_api.async_playwright", return_value=mock_pw):
            with pytest.raises(RuntimeError, match="boom"):
                async with stealth_page(make_settings()):
                    raise RuntimeError("boom")

        mock_browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_browser_closed_when_context_setup_fails(self) -> None:
        mock_pw, mock_browser, _, _ = _mock_playwright()
        mock_browser.new_context.side_effect = PlaywrightError("context failed")

        with patch("playwright.async_api.async_playwright", return_value=mock_pw):
            with pytest.raises(PlaywrightError):
                async with stealth_page(make_settings()):
                    pass

        mock_browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure_wrapped(self) -> None:
        mock_pw, _, _, _ = _mock_playwright()
        mock_pw.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with patch("playwright.async_api.async_playwright", return_value=mock_pw):
            with pytest.raises(BrowserLaunchError):
                async with stealth_page(make_settings()):
                    pass
