"""Per-command search session as an explicit finite state machine.

Every transition is a pure function of ``(session, event)``: it returns the
next session plus a tuple of effects for the chat layer to carry out. Nothing
in this module talks to Discord, the network, or the clock.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import StrEnum

from fanfic_core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SUMMARY_LIMIT,
    OWNER_ONLY_NOTICE,
)
from fanfic_core.models.record import FicRecord
from fanfic_core.models.source import FicSource
from fanfic_core.pagination import NavDirection, PageSet, paginate, wrap_page


class SessionState(StrEnum):
    """Lifecycle of one search command."""

    AWAITING_SOURCE_CHOICE = "awaiting_source_choice"
    SCRAPING = "scraping"
    BROWSING = "browsing"
    NO_RESULTS = "no_results"
    FAILED = "failed"
    ABANDONED = "abandoned"
    DISABLED = "disabled"


TERMINAL_STATES = frozenset(
    {
        SessionState.NO_RESULTS,
        SessionState.FAILED,
        SessionState.ABANDONED,
        SessionState.DISABLED,
    }
)


# --- Events ---


@dataclass(frozen=True)
class SourceSelected:
    actor_id: int
    source: FicSource


@dataclass(frozen=True)
class ScrapeCompleted:
    records: Sequence[FicRecord]


@dataclass(frozen=True)
class ScrapeFailed:
    reason: str


@dataclass(frozen=True)
class NavigationPressed:
    actor_id: int
    direction: NavDirection


@dataclass(frozen=True)
class WindowExpired:
    pass


@dataclass(frozen=True)
class DeliveryFailed:
    """A Discord call made for this session was refused."""

    reason: str


Event = (
    SourceSelected
    | ScrapeCompleted
    | ScrapeFailed
    | NavigationPressed
    | WindowExpired
    | DeliveryFailed
)


# --- Effects ---


@dataclass(frozen=True)
class RejectActor:
    """Tell a non-owner, privately, that the controls are not theirs."""

    notice: str = OWNER_ONLY_NOTICE


@dataclass(frozen=True)
class ShowSearching:
    """Replace the source prompt with an in-progress status, controls removed."""

    source: FicSource
    text: str


@dataclass(frozen=True)
class RunScrape:
    source: FicSource


@dataclass(frozen=True)
class ReportNoResults:
    text: str


@dataclass(frozen=True)
class ReportFailure:
    text: str


@dataclass(frozen=True)
class ShowPage:
    """Render a page: ``initial`` sends a new message, otherwise edit in place."""

    index: int
    initial: bool


@dataclass(frozen=True)
class DisableSourceChoice:
    pass


@dataclass(frozen=True)
class DisableNavigation:
    pass


Effect = (
    RejectActor
    | ShowSearching
    | RunScrape
    | ReportNoResults
    | ReportFailure
    | ShowPage
    | DisableSourceChoice
    | DisableNavigation
)


@dataclass(frozen=True)
class SearchSession:
    """Immutable snapshot of one command's interaction state."""

    owner_id: int
    search_term: str
    state: SessionState = SessionState.AWAITING_SOURCE_CHOICE
    source: FicSource | None = None
    pages: PageSet | None = None
    current_page: int = 0

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES


@dataclass(frozen=True)
class Transition:
    session: SearchSession
    effects: tuple[Effect, ...] = ()


def source_prompt(search_term: str) -> str:
    """Text of the initial source-choice message."""
    return f"Choose a source for **{search_term}** fanfics:"


def advance(
    session: SearchSession,
    event: Event,
    page_size: int = DEFAULT_PAGE_SIZE,
    summary_limit: int = DEFAULT_SUMMARY_LIMIT,
) -> Transition:
    """Apply one event to a session.

    Button events from anyone but the owner produce a ``RejectActor`` effect
    and leave the session untouched. Events that make no sense in the current
    state are ignored. A refused Discord call ends any unfinished session
    as failed.
    """
    if isinstance(event, SourceSelected | NavigationPressed):
        if event.actor_id != session.owner_id:
            return Transition(session, (RejectActor(),))

    if isinstance(event, SourceSelected):
        return _on_source_selected(session, event)
    if isinstance(event, ScrapeCompleted):
        return _on_scrape_completed(session, event, page_size, summary_limit)
    if isinstance(event, ScrapeFailed):
        return _on_scrape_failed(session)
    if isinstance(event, NavigationPressed):
        return _on_navigation(session, event)
    if isinstance(event, DeliveryFailed):
        return _on_delivery_failed(session)
    return _on_window_expired(session)


def _on_source_selected(session: SearchSession, event: SourceSelected) -> Transition:
    if session.state is not SessionState.AWAITING_SOURCE_CHOICE:
        return Transition(session)
    source = event.source
    text = f"Searching {source.display_name} for **{session.search_term}**..."
    return Transition(
        replace(session, state=SessionState.SCRAPING, source=source),
        (ShowSearching(source, text), RunScrape(source)),
    )


def _on_scrape_completed(
    session: SearchSession,
    event: ScrapeCompleted,
    page_size: int,
    summary_limit: int,
) -> Transition:
    if session.state is not SessionState.SCRAPING or session.source is None:
        return Transition(session)
    if not event.records:
        text = f"No fanfics found on {session.source.display_name}."
        return Transition(
            replace(session, state=SessionState.NO_RESULTS),
            (ReportNoResults(text),),
        )
    pages = paginate(
        event.records,
        session.search_term,
        page_size=page_size,
        summary_limit=summary_limit,
    )
    return Transition(
        replace(session, state=SessionState.BROWSING, pages=pages, current_page=0),
        (ShowPage(0, initial=True),),
    )


def _on_scrape_failed(session: SearchSession) -> Transition:
    if session.state is not SessionState.SCRAPING or session.source is None:
        return Transition(session)
    text = (
        f"Couldn't fetch results from {session.source.display_name} right now. "
        "Please try again later."
    )
    return Transition(
        replace(session, state=SessionState.FAILED),
        (ReportFailure(text),),
    )


def _on_navigation(session: SearchSession, event: NavigationPressed) -> Transition:
    if session.state is not SessionState.BROWSING or not session.pages:
        return Transition(session)
    index = wrap_page(session.current_page, event.direction, len(session.pages))
    return Transition(
        replace(session, current_page=index),
        (ShowPage(index, initial=False),),
    )


def _on_window_expired(session: SearchSession) -> Transition:
    if session.state is SessionState.AWAITING_SOURCE_CHOICE:
        return Transition(
            replace(session, state=SessionState.ABANDONED),
            (DisableSourceChoice(),),
        )
    if session.state is SessionState.BROWSING:
        return Transition(
            replace(session, state=SessionState.DISABLED),
            (DisableNavigation(),),
        )
    return Transition(session)


def _on_delivery_failed(session: SearchSession) -> Transition:
    if session.is_finished:
        return Transition(session)
    return Transition(replace(session, state=SessionState.FAILED))
