"""
Structured logging setup.

Modules obtain loggers with ``structlog.get_logger``; scripts call
``configure_logging`` once at startup.
"""

import logging
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog processors and level filtering.

    Args:
        level: Log level name (defaults to LOG_LEVEL from the environment settings)
    """
    if level is None:
        from cargo_dispatch.core.config import get_config

        level = get_config().env.log_level

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )
