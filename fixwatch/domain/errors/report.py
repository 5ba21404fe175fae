"""Report lifecycle errors.

These errors are raised by the submission, lifecycle and dashboard
services. None of them leaves a partial mutation behind: every check
happens before the corresponding store write.
"""

from __future__ import annotations

from typing import Any

from fixwatch.domain.exceptions import FixWatchError


class ReportError(FixWatchError):
    """Base error for report operations."""

    problem_type: str = "urn:fixwatch:report:error"
    title: str = "Report Error"
    status_code: int = 400


class ReportNotFoundError(ReportError):
    """Raised when a report id does not exist.

    HTTP Status: 404 Not Found
    """

    problem_type = "urn:fixwatch:report:not-found"
    title = "Report Not Found"
    status_code = 404

    def __init__(self, report_id: str) -> None:
        """Initialize the error.

        Args:
            report_id: The report id that was looked up.
        """
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


class UnauthorizedSecretError(ReportError):
    """Raised when a presented secret does not match the report's fingerprint.

    The message never echoes the secret or the stored fingerprint.

    HTTP Status: 401 Unauthorized
    """

    problem_type = "urn:fixwatch:report:unauthorized"
    title = "Secret Mismatch"
    status_code = 401

    def __init__(self, report_id: str) -> None:
        """Initialize the error.

        Args:
            report_id: The report the secret was presented for.
        """
        self.report_id = report_id
        super().__init__(f"The secret does not match report {report_id}")


class InvalidInputError(ReportError):
    """Raised when a request is malformed, before any store access.

    HTTP Status: 400 Bad Request
    """

    problem_type = "urn:fixwatch:report:invalid-input"
    title = "Invalid Input"
    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        """Initialize the error.

        Args:
            field: The offending input field.
            reason: Why the value was rejected.
        """
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize with the offending field name."""
        result = super().to_problem_dict()
        result["field"] = self.field
        return result
