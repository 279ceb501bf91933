"""Structured logging configuration using structlog.

Every request starts with an empty context; the auth dependency binds the
caller's ``user_id`` so all log lines of that request carry it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from snippetbox.core.config import settings

# Third-party loggers and the level they run at outside debug mode
QUIET_LOGGERS = {
    "uvicorn": None,
    "uvicorn.error": None,
    "uvicorn.access": None,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def _renderer(debug: bool) -> list[Any]:
    if debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(level: str | None = None, debug: bool | None = None) -> None:
    """Configure structlog and route stdlib logging through stdout.

    Args:
        level: Log level name, defaults to ``settings.log_level``.
        debug: Console output instead of JSON, defaults to ``settings.debug``.
    """
    debug = settings.debug if debug is None else debug
    log_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=processors + _renderer(debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    for name, quiet_level in QUIET_LOGGERS.items():
        if debug or quiet_level is None:
            logging.getLogger(name).setLevel(log_level)
        else:
            logging.getLogger(name).setLevel(max(quiet_level, log_level))


def bind_request_context(**values: Any) -> None:
    """Attach values (user id, snippet id...) to every log line of this request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    """Drop per-request logging context."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses the caller's module name.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)
