"""structlog setup for processes that drive dockfix fixtures.

The library only ever calls ``structlog.get_logger()``; configuring
processors and the level filter is left to the caller (a conftest.py or
a CLI entry point).

Usage:
    from dockfix.core.logging import configure_logging

    configure_logging(level="DEBUG", fmt="console")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog

from dockfix.core.config import VALID_LOG_LEVELS

if TYPE_CHECKING:
    from dockfix.core.config import Settings


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: "json" for machine-readable lines, "console" for humans.

    Raises:
        ValueError: If level or fmt is not recognized.
    """
    level = level.upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    elif fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        raise ValueError(f"Invalid log format: {fmt}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: "Settings") -> None:
    """Apply ``log_level`` and ``log_format`` from settings."""
    configure_logging(level=settings.log_level, fmt=settings.log_format)
