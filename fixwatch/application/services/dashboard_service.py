"""Dashboard read path.

Public listing of reports for the dashboard. Junk reports are excluded,
timestamps are normalized to ISO-8601 strings, and the newest report
comes first. This is a pure projection: nothing is written.

The listing never carries secret fingerprints.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fixwatch.application.services.base import LoggingMixin
from fixwatch.domain.models.report import Report, ReportStatus

if TYPE_CHECKING:
    from fixwatch.application.ports.report_repository import (
        ReportRepositoryProtocol,
    )


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def to_iso8601(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with a Z suffix."""
    return _aware(value).astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ReportView:
    """Caller-facing projection of a report."""

    id: str
    title: str
    description: str
    location: str
    institution: str
    problem_type: str
    status: ReportStatus
    approve_votes: int
    challenge_votes: int
    timestamp: str

    @classmethod
    def from_report(cls, report: Report, fallback: datetime) -> ReportView:
        """Project a report, using ``fallback`` when it has no timestamp."""
        return cls(
            id=report.id,
            title=report.title,
            description=report.description,
            location=report.location,
            institution=report.institution,
            problem_type=report.problem_type,
            status=report.status,
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
            timestamp=to_iso8601(report.created_at or fallback),
        )


class DashboardService(LoggingMixin):
    """Service producing the public report listing."""

    def __init__(self, report_repo: ReportRepositoryProtocol) -> None:
        self._report_repo = report_repo
        self._init_logger(component="dashboard")

    async def list_reports(self) -> list[ReportView]:
        """List every non-Junk report, newest first.

        Records without a timestamp (legacy data) get the read time.
        """
        read_at = datetime.now(timezone.utc)
        reports = await self._report_repo.list_excluding_status(ReportStatus.JUNK)

        visible = [r for r in reports if r.status != ReportStatus.JUNK]
        legacy = sum(1 for r in visible if r.created_at is None)
        visible.sort(key=lambda r: _aware(r.created_at or read_at), reverse=True)
        views = [ReportView.from_report(r, fallback=read_at) for r in visible]

        self._log_operation("list_reports").debug(
            "reports_listed", count=len(views), legacy_timestamps=legacy
        )
        return views
