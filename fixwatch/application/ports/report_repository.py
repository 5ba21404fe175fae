"""Report repository port.

This module defines the abstract interface for report storage. It is the
only place the lifecycle services read or write reports.

Developer Golden Rules:
1. ATOMIC VOTES - Use increment_vote(), never read-increment-write
2. CAS FOR STATUS - Use transition_status() for lifecycle transitions
3. OVERRIDE IS ABSOLUTE - force_status() ignores the current status
4. FAIL LOUD - Repository raises on errors
"""

from __future__ import annotations

from typing import Protocol

from fixwatch.domain.models.report import Report, ReportStatus, VoteKind


class ReportRepositoryProtocol(Protocol):
    """Protocol for report storage operations.

    Methods:
        create: Store a new report
        get: Retrieve a report by id
        list_excluding_status: List reports not in a status
        increment_vote: Atomically increment a vote counter
        transition_status: Conditional status update
        force_status: Unconditional status update
    """

    async def create(self, report: Report) -> None:
        """Store a new report.

        Raises:
            DocumentAlreadyExistsError: If report.id is already taken.
        """
        ...

    async def get(self, report_id: str) -> Report | None:
        """Retrieve a report by id, or None if it does not exist."""
        ...

    async def list_excluding_status(self, status: ReportStatus) -> list[Report]:
        """List every report whose status is not ``status``."""
        ...

    async def increment_vote(self, report_id: str, vote_kind: VoteKind) -> Report:
        """Atomically increment the counter for ``vote_kind``.

        Returns:
            The report after the increment.

        Raises:
            ReportNotFoundError: If the report does not exist.
        """
        ...

    async def transition_status(
        self,
        report_id: str,
        expected_status: ReportStatus,
        new_status: ReportStatus,
    ) -> Report:
        """Set ``new_status`` only if the report is still in ``expected_status``.

        Returns:
            The updated report.

        Raises:
            ReportNotFoundError: If the report does not exist.
            ConcurrentModificationError: If the status no longer matches.
        """
        ...

    async def force_status(self, report_id: str, new_status: ReportStatus) -> Report:
        """Set ``new_status`` regardless of the current status.

        Raises:
            ReportNotFoundError: If the report does not exist.
        """
        ...
