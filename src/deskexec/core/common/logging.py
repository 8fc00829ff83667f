"""
Structured logging configuration.

This module provides utilities for configuring and using structured logging.
Library modules log through the standard ``logging`` module; the processors
installed here render those records and structlog's own events the same way.
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


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.get_logger(name)  # type: ignore


def configure_logging(
    level: int = logging.WARNING,
    log_format: LogFormat = LogFormat.CONSOLE,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level
        log_format: Output renderer to use
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Log to stderr so command output on stdout stays clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[handler], force=True)
