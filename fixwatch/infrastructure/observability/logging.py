"""structlog setup for the FixWatch API.

``production`` emits one JSON object per line; any other environment
gets the colored console renderer. The level comes from ``LOG_LEVEL``.

A production entry looks like::

    {"event": "vote_counted", "level": "info",
     "timestamp": "2026-01-01T00:00:00.000000Z",
     "service": "ReportLifecycleService", "component": "lifecycle",
     "report_id": "K7Q2ZP9M", "correlation_id": "..."}
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from fixwatch.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
FINGERPRINT_LOG_CHARS = 16


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _renderer(environment: str) -> Processor:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_structlog(environment: str = "production") -> None:
    """Install the processor chain. Call once, from startup."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _renderer(environment),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_from_env()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def short_fingerprint(fingerprint: str) -> str:
    """Leading characters of a secret fingerprint, enough to correlate logs."""
    return fingerprint[:FINGERPRINT_LOG_CHARS]
