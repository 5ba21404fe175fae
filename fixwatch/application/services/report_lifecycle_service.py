"""Report lifecycle service.

Executes the non-terminal transitions of the report state machine and
counts votes. Terminal decisions belong to the threshold judge and the
golden-key authority.

Transitions handled here:
    New -> Resolved        mark_resolved() (external resolver, not modelled)
    Resolved -> InReview   confirm_fix() (reporter proves the secret)

Voting:
    cast_vote() atomically increments a counter and returns a VoteTally.
    It does NOT judge the report; the caller passes the tally on to the
    threshold judge, keeping the two steps independently testable.

Developer Golden Rules:
1. SECRET GATE FIRST - confirm_fix checks the fingerprint before the status
2. ATOMIC VOTES - counters only change through the store's increment
3. CAS FOR STATUS - transitions only commit from the expected status
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixwatch.application.ports.report_lifecycle import VoteTally
from fixwatch.application.services.base import LoggingMixin
from fixwatch.domain.errors.report import (
    InvalidInputError,
    ReportNotFoundError,
    UnauthorizedSecretError,
)
from fixwatch.domain.errors.state_transition import InvalidStateTransitionError
from fixwatch.domain.models.report import Report, ReportStatus, VoteKind
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector

if TYPE_CHECKING:
    from fixwatch.application.ports.report_repository import (
        ReportRepositoryProtocol,
    )
    from fixwatch.application.ports.secret_codec import SecretCodecProtocol


def normalize_report_id(report_id: str) -> str:
    """Normalize a caller-supplied report id (ids are issued upper-case)."""
    return (report_id or "").strip().upper()


def parse_vote_kind(vote_kind: VoteKind | str) -> VoteKind:
    """Parse a vote kind, rejecting anything outside the closed set.

    Raises:
        InvalidInputError: If the value is not 'approve' or 'challenge'.
    """
    if isinstance(vote_kind, VoteKind):
        return vote_kind
    try:
        return VoteKind(str(vote_kind).strip().lower())
    except ValueError:
        raise InvalidInputError(
            "vote", f"must be one of {[k.value for k in VoteKind]}"
        ) from None


class ReportLifecycleService(LoggingMixin):
    """Service for report lookups, lifecycle gates and vote casting."""

    def __init__(
        self,
        report_repo: ReportRepositoryProtocol,
        codec: SecretCodecProtocol,
    ) -> None:
        """Initialize the lifecycle service.

        Args:
            report_repo: Repository for report persistence.
            codec: Secret fingerprinter for the confirm-fix gate.
        """
        self._report_repo = report_repo
        self._codec = codec
        self._init_logger(component="lifecycle")

    async def get_report(self, report_id: str) -> Report:
        """Look up a report by id.

        Raises:
            ReportNotFoundError: If no report has this id.
        """
        report_id = normalize_report_id(report_id)
        if not report_id:
            raise InvalidInputError("report_id", "must not be blank")
        report = await self._report_repo.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    async def mark_resolved(self, report_id: str) -> Report:
        """Mark a New report as Resolved.

        Raises:
            ReportNotFoundError: If the report does not exist.
            InvalidStateTransitionError: If the report is not New.
        """
        report = await self.get_report(report_id)
        log = self._log_operation("mark_resolved", report_id=report.id)

        if report.status != ReportStatus.NEW:
            log.warning("mark_resolved_rejected", status=report.status.value)
            raise InvalidStateTransitionError(
                report_id=report.id,
                from_status=report.status,
                to_status=ReportStatus.RESOLVED,
                allowed_transitions=sorted(
                    report.status.valid_transitions(), key=lambda s: s.value
                ),
            )

        updated = await self._report_repo.transition_status(
            report.id, ReportStatus.NEW, ReportStatus.RESOLVED
        )
        log.info("report_resolved")
        return updated

    async def confirm_fix(self, report_id: str, secret: str) -> Report:
        """Open a Resolved report for public judgment.

        Only the holder of the report's secret may do this. The secret is
        checked before the status, so a wrong secret is always reported as
        Unauthorized and never reveals the report's status.

        Raises:
            ReportNotFoundError: If the report does not exist.
            UnauthorizedSecretError: If the secret does not match.
            InvalidStateTransitionError: If the report is not Resolved.
        """
        report = await self.get_report(report_id)
        log = self._log_operation("confirm_fix", report_id=report.id)

        if not secret or not self._codec.matches(secret, report.secret_fingerprint):
            log.warning("confirm_fix_secret_mismatch")
            raise UnauthorizedSecretError(report.id)

        if report.status != ReportStatus.RESOLVED:
            log.warning("confirm_fix_rejected", status=report.status.value)
            raise InvalidStateTransitionError(
                report_id=report.id,
                from_status=report.status,
                to_status=ReportStatus.IN_REVIEW,
            )

        updated = await self._report_repo.transition_status(
            report.id, ReportStatus.RESOLVED, ReportStatus.IN_REVIEW
        )
        log.info("report_opened_for_review")
        return updated

    async def cast_vote(
        self, report_id: str, vote_kind: VoteKind | str
    ) -> VoteTally:
        """Count one vote on a report.

        Voting is open to any caller. The vote kind is validated before the
        store is touched.

        Returns:
            VoteTally with the counters right after the increment.

        Raises:
            InvalidInputError: If the vote kind or report id is invalid.
            ReportNotFoundError: If the report does not exist.
        """
        kind = parse_vote_kind(vote_kind)
        report_id = normalize_report_id(report_id)
        if not report_id:
            raise InvalidInputError("report_id", "must not be blank")

        report = await self._report_repo.increment_vote(report_id, kind)
        get_metrics_collector().increment_votes_cast(kind.value)

        self._log_operation("cast_vote", report_id=report.id).info(
            "vote_counted",
            vote=kind.value,
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
            status=report.status.value,
        )
        return VoteTally(
            report_id=report.id,
            vote_kind=kind,
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
            status=report.status,
        )
