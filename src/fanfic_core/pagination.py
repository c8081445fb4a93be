"""Split a result set into fixed-size pages and render them as embed payloads."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from fanfic_core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SUMMARY_LIMIT,
    ELLIPSIS,
    EMBED_COLOR,
)
from fanfic_core.models.record import FicRecord

Page = tuple[FicRecord, ...]


class NavDirection(StrEnum):
    """Navigation buttons; the value doubles as button id."""

    PREVIOUS = "prev"
    NEXT = "next"


@dataclass(frozen=True)
class EmbedField:
    """One name/value row of an embed."""

    name: str
    value: str


@dataclass(frozen=True)
class EmbedPayload:
    """Platform-neutral description of one rendered results page."""

    title: str
    color: int
    fields: tuple[EmbedField, ...]
    footer: str


@dataclass(frozen=True)
class PageSet:
    """An immutable partition of a result set into consecutive pages."""

    pages: tuple[Page, ...]
    label: str
    summary_limit: int = DEFAULT_SUMMARY_LIMIT

    def __len__(self) -> int:
        return len(self.pages)

    def render(self, page_index: int) -> EmbedPayload:
        """Render one page.

        The caller guarantees that ``page_index`` is a valid index; wraparound
        is handled by :func:`wrap_page`, not here.
        """
        page = self.pages[page_index]
        fields = tuple(
            EmbedField(
                name=record.title,
                value=f"{record.link}\n{truncate_summary(record.summary, self.summary_limit)}",
            )
            for record in page
        )
        return EmbedPayload(
            title=f"Fanfics for {self.label}",
            color=EMBED_COLOR,
            fields=fields,
            footer=f"Page {page_index + 1} of {len(self.pages)}",
        )


def truncate_summary(summary: str, limit: int = DEFAULT_SUMMARY_LIMIT) -> str:
    """Cut a summary to ``limit`` characters plus an ellipsis when it is longer."""
    if len(summary) > limit:
        return summary[:limit] + ELLIPSIS
    return summary


def paginate(
    results: Sequence[FicRecord],
    label: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    summary_limit: int = DEFAULT_SUMMARY_LIMIT,
) -> PageSet:
    """Split results into consecutive chunks of ``page_size``, preserving order.

    An empty result set yields a PageSet with zero pages; callers must not
    render it.
    """
    if page_size < 1:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    pages = tuple(
        tuple(results[start : start + page_size])
        for start in range(0, len(results), page_size)
    )
    return PageSet(pages=pages, label=label, summary_limit=summary_limit)


def wrap_page(current: int, direction: NavDirection, page_count: int) -> int:
    """Return the page index after one step in ``direction``, wrapping at both ends."""
    if page_count < 1:
        msg = "cannot navigate an empty page set"
        raise ValueError(msg)
    if direction is NavDirection.PREVIOUS:
        return current - 1 if current > 0 else page_count - 1
    return (current + 1) % page_count
