"""Report domain model and lifecycle state machine.

A report is created by an anonymous reporter, marked resolved by an
outside party, opened for public judgment by the reporter, and finally
decided by the crowd or overridden by a golden-key holder.

State Machine:
    New -> Resolved          (external resolver)
    Resolved -> InReview     (reporter proves the secret, "confirm-fix")
    InReview -> Confirmed    (threshold judge, mints a golden key)
    InReview -> Contested    (threshold judge)
    * -> Vetted | Junk       (golden-key override, from any state)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ReportStatus(Enum):
    """Lifecycle status of a report.

    The enum values are the stored and externally visible status strings.
    """

    NEW = "New"
    RESOLVED = "Resolved"
    IN_REVIEW = "InReview"
    CONFIRMED = "Confirmed"
    CONTESTED = "Contested"
    VETTED = "Vetted"
    JUNK = "Junk"

    def valid_transitions(self) -> frozenset[ReportStatus]:
        """Get the statuses reachable through the normal lifecycle.

        Override targets (Vetted, Junk) are not listed here; they are
        reachable from every status through the golden-key authority.

        Returns:
            Frozenset of target statuses. Empty once the judge or an
            override has decided the report.
        """
        return STATUS_TRANSITION_MATRIX.get(self, frozenset())


class VoteKind(Enum):
    """The two kinds of vote a voter may cast on a report under review."""

    APPROVE = "approve"
    CHALLENGE = "challenge"

    @property
    def counter_field(self) -> str:
        """Name of the report field incremented by this vote."""
        return f"{self.value}_votes"


STATUS_TRANSITION_MATRIX: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.NEW: frozenset({ReportStatus.RESOLVED}),
    ReportStatus.RESOLVED: frozenset({ReportStatus.IN_REVIEW}),
    ReportStatus.IN_REVIEW: frozenset(
        {ReportStatus.CONFIRMED, ReportStatus.CONTESTED}
    ),
    ReportStatus.CONFIRMED: frozenset(),
    ReportStatus.CONTESTED: frozenset(),
    ReportStatus.VETTED: frozenset(),
    ReportStatus.JUNK: frozenset(),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Report:
    """A problem report and its judgment state.

    Attributes:
        id: Public opaque identifier, independent of the fingerprint.
        description: What is wrong.
        location: Where the problem is.
        secret_fingerprint: Hex digest of the reporter's secret. Set once.
        title: Optional short title.
        institution: Responsible institution, if known.
        problem_type: Free-text category.
        status: Current lifecycle status.
        approve_votes: Number of approve votes (never decreases).
        challenge_votes: Number of challenge votes (never decreases).
        created_at: Creation time (UTC). None only for legacy records.
        updated_at: Last modification time (UTC).
    """

    id: str
    description: str
    location: str
    secret_fingerprint: str
    title: str = field(default="")
    institution: str = field(default="")
    problem_type: str = field(default="")
    status: ReportStatus = field(default=ReportStatus.NEW)
    approve_votes: int = field(default=0)
    challenge_votes: int = field(default=0)
    created_at: datetime | None = field(default_factory=_utc_now)
    updated_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate report fields."""
        if not self.id:
            raise ValueError("Report id must not be empty")
        if not self.secret_fingerprint:
            raise ValueError("Report secret_fingerprint must not be empty")
        if self.approve_votes < 0 or self.challenge_votes < 0:
            raise ValueError("Vote counters must be non-negative")
