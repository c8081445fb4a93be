"""Button views for source choice and page navigation.

Views only forward clicks; ownership and state rules live in
``fanfic_core.session``. Both views are created without a discord.py
timeout because their windows are fixed deadlines owned by the controller,
not idle timers reset by every click.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Self

import discord

from fanfic_core.models.source import FicSource
from fanfic_core.pagination import NavDirection

SourceHandler = Callable[[discord.Interaction, FicSource], Awaitable[None]]
NavigationHandler = Callable[[discord.Interaction, NavDirection], Awaitable[None]]

_SOURCE_STYLES: dict[FicSource, discord.ButtonStyle] = {
    FicSource.AO3: discord.ButtonStyle.primary,
    FicSource.FFN: discord.ButtonStyle.secondary,
}

_NAV_EMOJI: dict[NavDirection, str] = {
    NavDirection.PREVIOUS: "\N{BLACK LEFT-POINTING TRIANGLE}",
    NavDirection.NEXT: "\N{BLACK RIGHT-POINTING TRIANGLE}",
}


class _ButtonView(discord.ui.View):
    def disable_all(self) -> Self:
        """Grey out every button and stop listening for clicks."""
        for item in self.children:
            if isinstance(item, discord.ui.Button):
                item.disabled = True
        self.stop()
        return self


class SourceChoiceView(_ButtonView):
    """One button per archive."""

    def __init__(self, on_select: SourceHandler) -> None:
        super().__init__(timeout=None)
        self._on_select = on_select
        for source in FicSource:
            button: discord.ui.Button[SourceChoiceView] = discord.ui.Button(
                label=source.display_name,
                custom_id=source.custom_id,
                style=_SOURCE_STYLES[source],
            )
            button.callback = self._make_callback(source)
            self.add_item(button)

    def _make_callback(
        self, source: FicSource
    ) -> Callable[[discord.Interaction], Awaitable[None]]:
        async def callback(interaction: discord.Interaction) -> None:
            await self._on_select(interaction, source)

        return callback


class NavigationView(_ButtonView):
    """Previous / next buttons under a results embed."""

    def __init__(self, on_navigate: NavigationHandler) -> None:
        super().__init__(timeout=None)
        self._on_navigate = on_navigate
        for direction in NavDirection:
            button: discord.ui.Button[NavigationView] = discord.ui.Button(
                emoji=_NAV_EMOJI[direction],
                custom_id=direction.value,
                style=discord.ButtonStyle.primary,
            )
            button.callback = self._make_callback(direction)
            self.add_item(button)

    def _make_callback(
        self, direction: NavDirection
    ) -> Callable[[discord.Interaction], Awaitable[None]]:
        async def callback(interaction: discord.Interaction) -> None:
            await self._on_navigate(interaction, direction)

        return callback
