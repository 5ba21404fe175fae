"""Shared structured logging for FixWatch services.

Services call ``_init_logger`` once from ``__init__`` and then take an
operation-scoped logger per public call::

    log = self._log_operation("cast_vote", report_id=report_id)
    log.info("vote_counted", approve_votes=3)

Secrets never go into the bound context; log fingerprints through
``short_fingerprint`` instead.
"""

import structlog

from fixwatch.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a logger bound to its class name and component.

    Components group services in the log stream: ``lifecycle``,
    ``judge``, ``credential`` and ``dashboard``.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "lifecycle") -> None:
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Bind the operation name and the request's correlation id.

        The correlation id is read at call time, so a service instance
        shared between requests still tags each entry correctly.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
