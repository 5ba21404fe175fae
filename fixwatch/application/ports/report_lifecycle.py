"""Report lifecycle result types.

Values passed between the lifecycle services and their
callers, keeping the vote -> judge pipeline explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from fixwatch.domain.models.golden_key import KeyAction
from fixwatch.domain.models.report import ReportStatus, VoteKind


@dataclass(frozen=True)
class SubmissionResult:
    """Result of a report submission.

    ``secret`` is the only time the plaintext secret is observable.
    """

    report_id: str
    secret: str
    created_at: datetime


@dataclass(frozen=True)
class VoteTally:
    """Counters of a report right after a vote was counted."""

    report_id: str
    vote_kind: VoteKind
    approve_votes: int
    challenge_votes: int
    status: ReportStatus


class JudgmentOutcome(Enum):
    """What the threshold judge did with a report."""

    CONFIRMED = "confirmed"
    CONTESTED = "contested"
    PENDING = "pending"
    NOT_IN_REVIEW = "not_in_review"
    ALREADY_DECIDED = "already_decided"


@dataclass(frozen=True)
class JudgmentResult:
    """Result of one threshold judge invocation.

    Attributes:
        report_id: The judged report.
        outcome: What happened.
        status: Report status after the judgment.
        approve_votes: Approve count the decision was based on.
        challenge_votes: Challenge count the decision was based on.
        golden_key_minted: True only if this invocation created the key.
    """

    report_id: str
    outcome: JudgmentOutcome
    status: ReportStatus
    approve_votes: int
    challenge_votes: int
    golden_key_minted: bool = False

    @property
    def transitioned(self) -> bool:
        """True if this invocation moved the report to a terminal status."""
        return self.outcome in (JudgmentOutcome.CONFIRMED, JudgmentOutcome.CONTESTED)


@dataclass(frozen=True)
class KeyActionResult:
    """Result of a sponsor or veto performed with a golden key."""

    report_id: str
    action: KeyAction
    previous_status: ReportStatus
    status: ReportStatus
    audit_entry_id: str
