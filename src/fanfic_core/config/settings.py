"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fanfic_core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SUMMARY_LIMIT,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    """Central configuration for fanfic-finder."""

    model_config = SettingsConfigDict(env_prefix="FANFIC_", env_file=".env")

    # --- Discord ---
    discord_token: SecretStr | None = Field(
        default=None,
        description="Bot token used to log in to the Discord gateway (required by `run`)",
    )
    command_prefix: str = Field(
        default="!fanfic",
        description="Message prefix that triggers a search",
    )
    default_search_term: str = Field(
        default="naruto sakura",
        description="Search term used when the command has no argument",
    )

    # --- Display ---
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Records shown per embed page",
    )
    summary_max_chars: int = Field(
        default=DEFAULT_SUMMARY_LIMIT,
        description="Summaries longer than this are truncated with an ellipsis",
    )

    # --- Interaction windows ---
    source_choice_timeout_seconds: float = Field(
        default=60.0,
        description="How long the source-choice buttons accept a selection",
    )
    navigation_timeout_seconds: float = Field(
        default=120.0,
        description="How long the prev/next buttons stay live",
    )

    # --- Scraping ---
    ao3_max_pages: int = Field(
        default=10,
        description="Upper bound on AO3 search pages fetched per command",
    )
    ffn_max_pages: int = Field(
        default=1,
        description="Upper bound on FanFiction.net pages rendered per command",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout per AO3 HTTP request in seconds",
    )
    fetch_retry_max: int = Field(
        default=3,
        description="Attempts per AO3 page on transient transport errors",
    )
    browser_navigation_timeout_ms: int = Field(
        default=30000,
        description="Playwright navigation timeout in milliseconds",
    )
    ffn_render_delay_seconds: float = Field(
        default=2.0,
        description="Extra wait after network idle before reading FFN markup",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="Browser User-Agent sent to both archives",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for shipping",
    )

    @model_validator(mode="after")
    def validate_paging(self) -> Settings:
        """Reject page and retry bounds that would make a search impossible."""
        if self.page_size < 1:
            msg = "page_size must be at least 1"
            raise ValueError(msg)
        if self.ao3_max_pages < 1 or self.ffn_max_pages < 1:
            msg = "max pages per source must be at least 1"
            raise ValueError(msg)
        if self.fetch_retry_max < 1:
            msg = "fetch_retry_max must be at least 1"
            raise ValueError(msg)
        return self
