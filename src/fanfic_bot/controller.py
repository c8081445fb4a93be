"""Per-command controller: runs one search session against Discord."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING
from uuid import uuid4

import discord
import structlog

from fanfic_bot.embeds import to_discord_embed
from fanfic_bot.observability.logging import bind_session_context, clear_session_context
from fanfic_bot.views import NavigationView, SourceChoiceView
from fanfic_core.interfaces.scraper import FicScraper
from fanfic_core.models.source import FicSource
from fanfic_core.pagination import NavDirection
from fanfic_core.session import (
    DeliveryFailed,
    DisableNavigation,
    DisableSourceChoice,
    Effect,
    Event,
    NavigationPressed,
    RejectActor,
    ReportFailure,
    ReportNoResults,
    RunScrape,
    ScrapeCompleted,
    ScrapeFailed,
    SearchSession,
    SessionState,
    ShowPage,
    ShowSearching,
    SourceSelected,
    WindowExpired,
    advance,
    source_prompt,
)
from fanfic_scrapers.factories import create_scraper, max_pages_for

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings

logger = structlog.get_logger()

ScraperFactory = Callable[[FicSource, "Settings"], FicScraper]


class SearchController:
    """Drive one ``!fanfic`` invocation from source prompt to disabled controls.

    The session itself is a pure state machine; this class feeds it Discord
    events and carries out the effects each transition returns. Navigation
    clicks are handled one at a time under a lock.
    """

    def __init__(
        self,
        message: discord.Message,
        search_term: str,
        settings: Settings,
        scraper_factory: ScraperFactory = create_scraper,
        on_finished: Callable[[SearchController], None] | None = None,
    ) -> None:
        """Initialize for the message that issued the command."""
        self.settings = settings
        self.session = SearchSession(owner_id=message.author.id, search_term=search_term)
        self.session_id = uuid4().hex[:12]
        self._channel = message.channel
        self._scraper_factory = scraper_factory
        self._on_finished = on_finished
        self._lock = asyncio.Lock()
        self._expiry_tasks: set[asyncio.Task[None]] = set()
        self._source_view: SourceChoiceView | None = None
        self._navigation_view: NavigationView | None = None
        self._prompt_message: discord.Message | None = None
        self._results_message: discord.Message | None = None
        self._source_interaction: discord.Interaction | None = None
        self._finished = False

    # --- Entry points ---

    async def start(self) -> None:
        """Post the source-choice prompt and open its selection window."""
        self._bind_context()
        self._source_view = SourceChoiceView(self.on_source_selected)
        self._prompt_message = await self._channel.send(
            content=source_prompt(self.session.search_term),
            view=self._source_view,
        )
        logger.info("source_prompt_sent", search_term=self.session.search_term)
        self._schedule_expiry(
            self.settings.source_choice_timeout_seconds,
            SessionState.AWAITING_SOURCE_CHOICE,
        )

    async def on_source_selected(
        self, interaction: discord.Interaction, source: FicSource
    ) -> None:
        """Handle a click on one of the source buttons."""
        self._bind_context()
        await self._dispatch(SourceSelected(interaction.user.id, source), interaction)

    async def on_navigate(
        self, interaction: discord.Interaction, direction: NavDirection
    ) -> None:
        """Handle a click on prev/next; clicks are processed in arrival order."""
        self._bind_context()
        async with self._lock:
            await self._dispatch(
                NavigationPressed(interaction.user.id, direction), interaction
            )

    async def close(self) -> None:
        """Cancel pending windows and stop listening for clicks."""
        for task in list(self._expiry_tasks):
            task.cancel()
        for view in (self._source_view, self._navigation_view):
            if view is not None:
                view.stop()

    # --- State machine plumbing ---

    async def _dispatch(
        self, event: Event, interaction: discord.Interaction | None = None
    ) -> None:
        previous = self.session.state
        transition = advance(
            self.session,
            event,
            page_size=self.settings.page_size,
            summary_limit=self.settings.summary_max_chars,
        )
        self.session = transition.session
        if self.session.state is not previous:
            logger.info(
                "session_transition",
                event_type=type(event).__name__,
                from_state=previous.value,
                to_state=self.session.state.value,
            )

        if not transition.effects and interaction is not None:
            # Ignored click: acknowledge it so the client does not show an error
            if not interaction.response.is_done():
                await interaction.response.defer()

        try:
            for effect in transition.effects:
                await self._apply(effect, interaction)
        except discord.HTTPException as e:
            if isinstance(effect, RejectActor):
                # A lost notice to someone else leaves the owner's session intact
                raise
            logger.exception("discord_call_failed", status=e.status, error=str(e))
            self.session = advance(self.session, DeliveryFailed(str(e))).session

        if self.session.is_finished:
            self._finish()

    async def _apply(self, effect: Effect, interaction: discord.Interaction | None) -> None:
        if isinstance(effect, RejectActor):
            assert interaction is not None
            logger.info("foreign_click_rejected", actor_id=interaction.user.id)
            await interaction.response.send_message(effect.notice, ephemeral=True)
        elif isinstance(effect, ShowSearching):
            assert interaction is not None
            self._source_interaction = interaction
            self._cancel_expiry()
            if self._source_view is not None:
                self._source_view.stop()
            await interaction.response.edit_message(content=effect.text, view=None)
        elif isinstance(effect, RunScrape):
            await self._run_scrape(effect.source)
        elif isinstance(effect, ReportNoResults):
            await self._send_follow_up(effect.text)
        elif isinstance(effect, ReportFailure):
            await self._report_failure(effect.text)
        elif isinstance(effect, ShowPage):
            await self._show_page(effect, interaction)
        elif isinstance(effect, DisableSourceChoice):
            await self._disable_source_choice()
        elif isinstance(effect, DisableNavigation):
            await self._disable_navigation()

    async def _run_scrape(self, source: FicSource) -> None:
        """Run the chosen scraper to completion and feed the outcome back in."""
        scraper = self._scraper_factory(source, self.settings)
        max_pages = max_pages_for(source, self.settings)
        logger.info("scrape_started", source=source.value, max_pages=max_pages)
        event: Event
        try:
            records = await scraper.scrape(self.session.search_term, max_pages)
        except Exception as e:
            logger.exception("scrape_failed", source=source.value, error=str(e))
            event = ScrapeFailed(str(e))
        else:
            logger.info("scrape_finished", source=source.value, records=len(records))
            event = ScrapeCompleted(records)
        await self._dispatch(event)

    async def _show_page(
        self, effect: ShowPage, interaction: discord.Interaction | None
    ) -> None:
        assert self.session.pages is not None
        embed = to_discord_embed(self.session.pages.render(effect.index))
        if effect.initial:
            self._navigation_view = NavigationView(self.on_navigate)
            self._results_message = await self._channel.send(
                embed=embed, view=self._navigation_view
            )
            logger.info("results_sent", pages=len(self.session.pages))
            self._schedule_expiry(
                self.settings.navigation_timeout_seconds,
                SessionState.BROWSING,
            )
            return
        assert interaction is not None
        await interaction.response.edit_message(embed=embed, view=self._navigation_view)

    async def _send_follow_up(self, text: str) -> None:
        if self._source_interaction is not None:
            await self._source_interaction.followup.send(text)
        else:
            await self._channel.send(text)

    async def _report_failure(self, text: str) -> None:
        if self._prompt_message is not None:
            await self._prompt_message.edit(content=text, view=None)
        else:
            await self._channel.send(text)

    async def _disable_source_choice(self) -> None:
        if self._source_view is None or self._prompt_message is None:
            return
        await self._prompt_message.edit(view=self._source_view.disable_all())
        logger.info("source_choice_disabled")

    async def _disable_navigation(self) -> None:
        if self._navigation_view is None or self._results_message is None:
            return
        await self._results_message.edit(view=self._navigation_view.disable_all())
        logger.info("navigation_disabled")

    # --- Windows ---

    def _schedule_expiry(self, delay: float, state: SessionState) -> None:
        task = asyncio.create_task(self._expire_after(delay, state))
        self._expiry_tasks.add(task)
        task.add_done_callback(self._expiry_tasks.discard)

    async def _expire_after(self, delay: float, state: SessionState) -> None:
        """Fire WindowExpired after ``delay`` if the session is still in ``state``."""
        await asyncio.sleep(delay)
        async with self._lock:
            if self.session.state is state:
                await self._dispatch(WindowExpired())

    def _cancel_expiry(self) -> None:
        current = asyncio.current_task()
        for task in list(self._expiry_tasks):
            if task is not current:
                task.cancel()

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._cancel_expiry()
        for view in (self._source_view, self._navigation_view):
            if view is not None:
                view.stop()
        logger.info("session_finished", state=self.session.state.value)
        if self._on_finished is not None:
            self._on_finished(self)

    def _bind_context(self) -> None:
        clear_session_context()
        bind_session_context(self.session_id, self.session.owner_id)
