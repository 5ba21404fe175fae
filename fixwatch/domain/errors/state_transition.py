"""State transition errors for the report state machine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fixwatch.domain.errors.report import ReportError

if TYPE_CHECKING:
    from fixwatch.domain.models.report import ReportStatus


class InvalidStateTransitionError(ReportError):
    """Raised when an operation is attempted from the wrong lifecycle status.

    No mutation happens when this error is raised.

    HTTP Status: 409 Conflict

    Attributes:
        report_id: The report the operation targeted.
        from_status: Current status of the report.
        to_status: Attempted target status.
        allowed_transitions: Valid target statuses from the current status.
    """

    problem_type = "urn:fixwatch:report:invalid-state"
    title = "Invalid State"
    status_code = 409

    def __init__(
        self,
        report_id: str,
        from_status: ReportStatus,
        to_status: ReportStatus,
        allowed_transitions: list[ReportStatus] | None = None,
    ) -> None:
        self.report_id = report_id
        self.from_status = from_status
        self.to_status = to_status
        self.allowed_transitions = allowed_transitions or []

        message = (
            f"Report {report_id} is {from_status.value} and cannot move to "
            f"{to_status.value}"
        )
        if self.allowed_transitions:
            allowed = ", ".join(s.value for s in self.allowed_transitions)
            message += f" (allowed from here: {allowed})"
        super().__init__(message)

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize with the current and attempted status."""
        result = super().to_problem_dict()
        result["current_status"] = self.from_status.value
        result["attempted_status"] = self.to_status.value
        return result
