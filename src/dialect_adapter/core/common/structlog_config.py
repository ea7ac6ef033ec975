"""
Structured logging configuration.

This module provides utilities for configuring and using structured logging.
Translation events go through structlog; plain module loggers keep using the
standard library and share the same handlers.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum

import structlog


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


DEFAULT_PLAIN_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d %(message)s"


def _renderer_for(log_format: LogFormat) -> structlog.types.Processor:
    if log_format is LogFormat.JSON:
        return structlog.processors.JSONRenderer(sort_keys=True)
    if log_format is LogFormat.CONSOLE:
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.KeyValueRenderer(
        key_order=["event", "request_id"], sort_keys=True
    )


def configure_logging(
    level: int | str = logging.INFO,
    log_format: LogFormat | str = LogFormat.CONSOLE,
) -> None:
    """Configure structlog and the root stdlib logger.

    Args:
        level: Logging level, either numeric or a level name
        log_format: One of the ``LogFormat`` values
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    log_format = LogFormat(log_format)

    logging.basicConfig(
        level=level,
        format=DEFAULT_PLAIN_FORMAT if log_format is LogFormat.PLAIN else "%(message)s",
        stream=sys.stderr,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer_for(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore
