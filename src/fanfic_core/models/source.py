"""Searchable fiction archives."""

from __future__ import annotations

from enum import StrEnum


class FicSource(StrEnum):
    """Fiction archives a search can target; the value doubles as button id."""

    AO3 = "ao3"
    FFN = "ffn"

    @property
    def custom_id(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[FicSource, str] = {
    FicSource.AO3: "AO3",
    FicSource.FFN: "FanFiction.net",
}
