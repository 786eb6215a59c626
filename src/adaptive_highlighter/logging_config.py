"""
Structured logging configuration using structlog.

Sets up structlog for JSON or console output with context binding, driven by
the LOG_LEVEL and LOG_JSON settings.
"""

import logging
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(
    log_level: str | None = None,
    json_output: bool | None = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog for the engine, API and CLI.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings

    Args:
        log_level: Override for settings.log_level
        json_output: Override for settings.log_json
        stream: Output stream (default: stdout)
    """
    level = log_level or settings.log_level
    use_json = settings.log_json if json_output is None else json_output

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if use_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
