"""structlog setup for the bot process.

discord.py, httpx and Playwright log through the standard library; their
records are rendered by the same ``ProcessorFormatter`` as the bot's own
structlog events, so one command's lines share ``session_id`` and
``owner_id`` regardless of which library emitted them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from fanfic_core.config.settings import Settings

# Library loggers that are chatty below WARNING (heartbeats, every request)
_NOISY_LOGGERS = ("httpx", "httpcore", "discord.gateway", "discord.client", "discord.http")


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one root handler."""
    level = _resolve_level(settings.log_level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.log_format),
            ],
            foreign_pre_chain=pre_chain,
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    floor = max(level, logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(floor)


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def bind_session_context(session_id: str, owner_id: int) -> None:
    """Tag subsequent log entries with the command's session and requester."""
    bind_contextvars(session_id=session_id, owner_id=owner_id)


def clear_session_context() -> None:
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Map a level name (any case) to its number; unknown names mean INFO."""
    level = logging.getLevelNamesMapping().get(level_name.upper())
    return level if level is not None else logging.INFO
