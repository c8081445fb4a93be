"""Domain models for fanfic-finder."""

from fanfic_core.models.record import FicRecord, RawListing
from fanfic_core.models.source import FicSource

__all__ = [
    "FicRecord",
    "FicSource",
    "RawListing",
]
