"""Discord client: turns ``!fanfic`` messages into search sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord
import structlog

from fanfic_bot.controller import ScraperFactory, SearchController
from fanfic_scrapers.factories import create_scraper

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings

logger = structlog.get_logger()


def parse_command(content: str, prefix: str, default_term: str) -> str | None:
    """Return the search term for a command message, or None if it is not one.

    The prefix must be followed by whitespace or the end of the message, so
    ``!fanfics`` is not a command. A bare prefix yields ``default_term``.
    """
    if not content.startswith(prefix):
        return None
    rest = content[len(prefix) :]
    if rest and not rest[0].isspace():
        return None
    return rest.strip() or default_term


def build_intents() -> discord.Intents:
    """Guild, guild-message and message-content intents; nothing else."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class FanficBot(discord.Client):
    """Chat client owning the set of in-flight search sessions."""

    def __init__(
        self,
        settings: Settings,
        scraper_factory: ScraperFactory = create_scraper,
    ) -> None:
        """Initialize with settings and the scraper factory used by every session."""
        super().__init__(intents=build_intents())
        self.settings = settings
        self._scraper_factory = scraper_factory
        self._active: set[SearchController] = set()

    @property
    def active_sessions(self) -> int:
        return len(self._active)

    async def on_ready(self) -> None:
        logger.info("bot_ready", user=str(self.user))

    async def on_message(self, message: discord.Message) -> None:
        """Start a new search session for every command message from a human."""
        if message.author.bot:
            return
        search_term = parse_command(
            message.content,
            self.settings.command_prefix,
            self.settings.default_search_term,
        )
        if search_term is None:
            return

        controller = SearchController(
            message,
            search_term,
            self.settings,
            scraper_factory=self._scraper_factory,
            on_finished=self._active.discard,
        )
        self._active.add(controller)
        logger.info(
            "command_received",
            owner_id=message.author.id,
            search_term=search_term,
            active_sessions=len(self._active),
        )
        try:
            await controller.start()
        except discord.HTTPException:
            self._active.discard(controller)
            await controller.close()
            raise

    async def close(self) -> None:
        """Cancel every open session window before disconnecting."""
        for controller in list(self._active):
            await controller.close()
        self._active.clear()
        await super().close()
