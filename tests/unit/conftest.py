"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from fanfic_core.models.record import FicRecord
from tests.mocks.mock_factories import make_records
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def twelve_records() -> list[FicRecord]:
    """Return twelve distinct records: three pages of 5, 5 and 2."""
    return make_records(12)
