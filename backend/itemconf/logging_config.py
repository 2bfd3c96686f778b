"""Structured logging setup shared by every itemconf entry point."""

import logging
from typing import Optional

import structlog

from itemconf.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog processors and the level filter from settings.

    Call once at process start, before the first unit of work, from the
    entry point that embeds itemconf (e.g. the web application factory).
    Library modules only call structlog.get_logger() and never configure.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
