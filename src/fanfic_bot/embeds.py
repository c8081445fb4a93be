"""Convert platform-neutral embed payloads into discord.py embeds."""

from __future__ import annotations

import discord

from fanfic_core.constants import EMBED_FIELD_NAME_LIMIT, EMBED_FIELD_VALUE_LIMIT
from fanfic_core.pagination import EmbedPayload


def to_discord_embed(payload: EmbedPayload) -> discord.Embed:
    """Build a discord.Embed, clipping fields to Discord's hard limits."""
    embed = discord.Embed(title=payload.title, color=payload.color)
    for field in payload.fields:
        embed.add_field(
            name=field.name[:EMBED_FIELD_NAME_LIMIT],
            value=field.value[:EMBED_FIELD_VALUE_LIMIT],
            inline=False,
        )
    embed.set_footer(text=payload.footer)
    return embed
