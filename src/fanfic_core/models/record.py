"""Fanfic record models — raw listing and validated record."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fanfic_core.constants import NO_SUMMARY


@dataclass(frozen=True)
class RawListing:
    """One listing element as extracted from a search page, before validation."""

    title: str
    href: str | None
    summary: str


class FicRecord(BaseModel):
    """A single search hit: title, absolute link, and summary blurb."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, description="Work title")
    link: str = Field(min_length=1, description="Absolute URL of the work")
    summary: str = Field(default=NO_SUMMARY, description="Summary blurb")

    @field_validator("summary")
    @classmethod
    def default_blank_summary(cls, value: str) -> str:
        """Replace a blank summary with the sentinel text."""
        return value if value.strip() else NO_SUMMARY
