"""Concurrent modification error for conditional status updates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixwatch.domain.errors.report import ReportError

if TYPE_CHECKING:
    from fixwatch.domain.models.report import ReportStatus


class ConcurrentModificationError(ReportError):
    """Raised when a conditional status update loses to another writer.

    The report was no longer in ``expected_status`` when the write was
    attempted. Callers should re-read the report; the threshold judge
    treats this as "already decided".

    HTTP Status: 409 Conflict
    """

    problem_type = "urn:fixwatch:report:concurrent-modification"
    title = "Concurrent Modification"
    status_code = 409

    def __init__(
        self,
        report_id: str,
        expected_status: ReportStatus,
        operation: str = "status_update",
    ) -> None:
        self.report_id = report_id
        self.expected_status = expected_status
        self.operation = operation
        super().__init__(
            f"Report {report_id} left {expected_status.value} before "
            f"{operation} could be written"
        )
