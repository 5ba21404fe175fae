"""Report API request/response models.

Pydantic models for the report lifecycle endpoints.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. NEVER ECHO SECRETS - Only SubmitReportResponse carries a secret
3. NEVER EXPOSE FINGERPRINTS
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

from fixwatch.application.ports.report_lifecycle import (
    JudgmentResult,
    KeyActionResult,
    VoteTally,
)
from fixwatch.application.services.dashboard_service import ReportView, to_iso8601
from fixwatch.domain.models.report import Report

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(lambda v: to_iso8601(v) if v else None, return_type=str),
]


class ReportStatusEnum(str, Enum):
    """Report status values exposed by the API."""

    NEW = "New"
    RESOLVED = "Resolved"
    IN_REVIEW = "InReview"
    CONFIRMED = "Confirmed"
    CONTESTED = "Contested"
    VETTED = "Vetted"
    JUNK = "Junk"


class VoteKindEnum(str, Enum):
    """The two vote kinds."""

    APPROVE = "approve"
    CHALLENGE = "challenge"


class SubmitReportRequest(BaseModel):
    """Request body for submitting a report."""

    description: str = Field(..., min_length=1, max_length=5_000)
    location: str = Field(..., min_length=1, max_length=5_000)
    title: str = Field(default="", max_length=5_000)
    institution: str = Field(default="", max_length=5_000)
    problem_type: str = Field(default="", max_length=5_000)


class SubmitReportResponse(BaseModel):
    """Response for a submitted report.

    ``secret`` is shown exactly once and cannot be retrieved again.
    """

    report_id: str
    secret: str
    created_at: DateTimeWithZ


class SecretRequest(BaseModel):
    """Request body carrying a reporter secret or golden-key secret."""

    secret: str = Field(..., min_length=1, max_length=64)


class VoteRequest(BaseModel):
    """Request body for casting a vote."""

    vote: VoteKindEnum


class ReportResponse(BaseModel):
    """Public view of a single report."""

    id: str
    title: str
    description: str
    location: str
    institution: str
    problem_type: str
    status: ReportStatusEnum
    approve_votes: int
    challenge_votes: int
    created_at: DateTimeWithZ | None = None

    @classmethod
    def from_report(cls, report: Report) -> "ReportResponse":
        """Build the response without the secret fingerprint."""
        return cls(
            id=report.id,
            title=report.title,
            description=report.description,
            location=report.location,
            institution=report.institution,
            problem_type=report.problem_type,
            status=ReportStatusEnum(report.status.value),
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
            created_at=report.created_at,
        )


class ReportListItem(BaseModel):
    """Dashboard row."""

    id: str
    title: str
    description: str
    location: str
    institution: str
    problem_type: str
    status: ReportStatusEnum
    approve_votes: int
    challenge_votes: int
    timestamp: str

    @classmethod
    def from_view(cls, view: ReportView) -> "ReportListItem":
        """Build a dashboard row from a ReportView."""
        return cls(
            id=view.id,
            title=view.title,
            description=view.description,
            location=view.location,
            institution=view.institution,
            problem_type=view.problem_type,
            status=ReportStatusEnum(view.status.value),
            approve_votes=view.approve_votes,
            challenge_votes=view.challenge_votes,
            timestamp=view.timestamp,
        )


class JudgmentResponse(BaseModel):
    """Outcome of the threshold judge after a vote."""

    outcome: str
    status: ReportStatusEnum
    golden_key_minted: bool

    @classmethod
    def from_result(cls, result: JudgmentResult) -> "JudgmentResponse":
        return cls(
            outcome=result.outcome.value,
            status=ReportStatusEnum(result.status.value),
            golden_key_minted=result.golden_key_minted,
        )


class VoteResponse(BaseModel):
    """Response for a counted vote.

    ``judgment`` is None when the judge could not run; the vote still counts.
    """

    report_id: str
    vote: VoteKindEnum
    approve_votes: int
    challenge_votes: int
    status: ReportStatusEnum
    judgment: JudgmentResponse | None = None

    @classmethod
    def from_tally(
        cls, tally: VoteTally, judgment: JudgmentResult | None
    ) -> "VoteResponse":
        status = judgment.status if judgment is not None else tally.status
        return cls(
            report_id=tally.report_id,
            vote=VoteKindEnum(tally.vote_kind.value),
            approve_votes=tally.approve_votes,
            challenge_votes=tally.challenge_votes,
            status=ReportStatusEnum(status.value),
            judgment=JudgmentResponse.from_result(judgment) if judgment else None,
        )


class KeyActionResponse(BaseModel):
    """Response for a sponsor or veto."""

    report_id: str
    action: str
    previous_status: ReportStatusEnum
    status: ReportStatusEnum

    @classmethod
    def from_result(cls, result: KeyActionResult) -> "KeyActionResponse":
        return cls(
            report_id=result.report_id,
            action=result.action.value,
            previous_status=ReportStatusEnum(result.previous_status.value),
            status=ReportStatusEnum(result.status.value),
        )


class ProblemDetailResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
