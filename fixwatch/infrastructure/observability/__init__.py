"""Observability infrastructure for structured logging and correlation.

Usage:
    from fixwatch.infrastructure.observability import (
        configure_structlog,
        get_correlation_id,
        set_correlation_id,
    )
"""

from fixwatch.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from fixwatch.infrastructure.observability.logging import (
    configure_structlog,
    short_fingerprint,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "short_fingerprint",
]
