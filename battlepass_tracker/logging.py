"""Logging helpers using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a configured structlog logger, configuring the stack on first use."""

    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so a replaced stream (redirects, captured
    # output) is picked up instead of the one present at configure time.
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging.

    Log lines go to stderr; stdout is reserved for the progress report.
    """

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            timestamper,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.WARNING)),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=level.upper(), format="%(message)s", stream=sys.stderr)
