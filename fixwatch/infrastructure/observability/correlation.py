"""Per-request correlation ids.

The logging middleware sets the id when a request arrives (taken from
``X-Correlation-ID`` or freshly generated). Services and the structlog
processor chain read it back from a contextvar, which follows the
request through every ``await``.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("fixwatch_correlation_id", default="")


def generate_correlation_id() -> str:
    return uuid4().hex


def get_correlation_id() -> str:
    """Current request's correlation id; empty outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor stamping entries with the correlation id.

    Entries that already carry an id (bound by a service) keep it, and
    nothing is added outside a request.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
