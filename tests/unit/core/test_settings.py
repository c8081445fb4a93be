"""Tests for Settings configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from fanfic_core.config.settings import Settings


@pytest.mark.unit
class TestSettings:
    """Test Settings validation and defaults."""

    def test_default_settings(self) -> None:
        """Defaults match the bot's documented constants."""
        with patch.dict(os.environ, {"FANFIC_DISCORD_TOKEN": "tok"}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.discord_token is not None
        assert s.discord_token.get_secret_value() == "tok"
        assert s.command_prefix == "!fanfic"
        assert s.default_search_term == "naruto sakura"
        assert s.page_size == 5
        assert s.summary_max_chars == 200
        assert s.ao3_max_pages == 10
        assert s.ffn_max_pages == 1
        assert s.source_choice_timeout_seconds == 60.0
        assert s.navigation_timeout_seconds == 120.0

    def test_token_optional_at_load(self) -> None:
        """Settings load without a token; `run` enforces it."""
        with patch.dict(os.environ, {}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.discord_token is None

    def test_env_overrides(self) -> None:
        env = {"FANFIC_AO3_MAX_PAGES": "3", "FANFIC_LOG_FORMAT": "json"}
        with patch.dict(os.environ, env, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.ao3_max_pages == 3
        assert s.log_format == "json"

    def test_token_is_masked(self) -> None:
        with patch.dict(os.environ, {"FANFIC_DISCORD_TOKEN": "secret"}, clear=True):
            s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert "secret" not in repr(s)

    def test_zero_page_size_rejected(self) -> None:
        with patch.dict(os.environ, {"FANFIC_PAGE_SIZE": "0"}, clear=True):
            with pytest.raises(ValidationError, match="page_size"):
                Settings(_env_file=None)  # type: ignore[call-arg]

    def test_zero_max_pages_rejected(self) -> None:
        with patch.dict(os.environ, {"FANFIC_FFN_MAX_PAGES": "0"}, clear=True):
            with pytest.raises(ValidationError, match="max pages"):
                Settings(_env_file=None)  # type: ignore[call-arg]

    def test_unknown_log_format_rejected(self) -> None:
        with patch.dict(os.environ, {"FANFIC_LOG_FORMAT": "xml"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)  # type: ignore[call-arg]
