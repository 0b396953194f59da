"""Logging configuration (stdlib logging + structlog)."""

import logging
import sys

import structlog

from hiring_portal.config import settings


def setup_logging(level: str = None, fmt: str = None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Log level name (defaults to settings.LOG_LEVEL)
        fmt: "json" or "console" (defaults to settings.LOG_FORMAT)
    """
    level = (level or settings.LOG_LEVEL).upper()
    fmt = (fmt or settings.LOG_FORMAT).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Uvicorn's access log is noisy next to the structured events
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
