"""Threshold judge service.

Decides the terminal outcome of a report under review from its vote
counters, and mints the reporter's golden key when the fix is confirmed.

Decision rule (fixed priority order):
1. approve >= T_confirm AND approve > challenge  -> Confirmed + golden key
2. challenge >= T_contest                          -> Contested
3. otherwise                                       -> no transition

Approval needs both a quorum and a strict majority over challenges,
while a challenge quorum alone is enough to contest. A tie in which both
quorums are met (e.g. 5/5) is deadlocked: neither rule fires and the
report waits for the next vote to break it.

Concurrency:
The judge runs after each vote, outside the vote's write. Two judges may
run at once for the same report. Safety rests on two conditional writes:
- the status only moves if it is still InReview (CAS)
- a golden key is only created if the fingerprint has none
A judge that loses the CAS reports ALREADY_DECIDED and mints nothing.

Minting happens after the Confirmed write. If it fails, the next judge
call on the Confirmed report mints the missing key, so a retried
judgment converges on "Confirmed with a key" without a second transition.

Developer Golden Rules:
1. NO TRANSITION UNLESS InReview
2. CAS FOR STATUS, CREATE-IF-ABSENT FOR KEYS
3. THIS IS THE ONLY PLACE A GOLDEN KEY IS MINTED
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixwatch.application.ports.report_lifecycle import (
    JudgmentOutcome,
    JudgmentResult,
)
from fixwatch.application.services.base import LoggingMixin
from fixwatch.config.lifecycle_config import (
    DEFAULT_JUDGE_THRESHOLD_CONFIG,
    JudgeThresholdConfig,
)
from fixwatch.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from fixwatch.domain.errors.report import ReportNotFoundError
from fixwatch.domain.models.golden_key import GoldenKey
from fixwatch.domain.models.report import Report, ReportStatus
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.observability.logging import short_fingerprint

if TYPE_CHECKING:
    from structlog import BoundLogger

    from fixwatch.application.ports.golden_key_repository import (
        GoldenKeyRepositoryProtocol,
    )
    from fixwatch.application.ports.report_repository import (
        ReportRepositoryProtocol,
    )

_OUTCOME_STATUS = {
    JudgmentOutcome.CONFIRMED: ReportStatus.CONFIRMED,
    JudgmentOutcome.CONTESTED: ReportStatus.CONTESTED,
}


class ThresholdJudgeService(LoggingMixin):
    """Service judging reports under review against vote thresholds.

    Example:
        >>> judge = ThresholdJudgeService(report_repo, golden_key_repo)
        >>> judge.decide(approve_votes=5, challenge_votes=2)
        <JudgmentOutcome.CONFIRMED: 'confirmed'>
        >>> judge.decide(approve_votes=1, challenge_votes=5)
        <JudgmentOutcome.CONTESTED: 'contested'>
        >>> judge.decide(approve_votes=5, challenge_votes=5)
        <JudgmentOutcome.PENDING: 'pending'>
    """

    def __init__(
        self,
        report_repo: ReportRepositoryProtocol,
        golden_key_repo: GoldenKeyRepositoryProtocol,
        config: JudgeThresholdConfig | None = None,
    ) -> None:
        """Initialize the judge.

        Args:
            report_repo: Repository for report persistence.
            golden_key_repo: Repository the golden keys are minted into.
            config: Vote thresholds. Defaults to 5 and 5.
        """
        self._report_repo = report_repo
        self._golden_key_repo = golden_key_repo
        self._config = config or DEFAULT_JUDGE_THRESHOLD_CONFIG
        self._init_logger(component="judge")

    @property
    def confirm_threshold(self) -> int:
        """Approve votes needed for confirmation."""
        return self._config.confirm_threshold

    @property
    def contest_threshold(self) -> int:
        """Challenge votes needed for contesting."""
        return self._config.contest_threshold

    def decide(self, approve_votes: int, challenge_votes: int) -> JudgmentOutcome:
        """Apply the decision rule to a pair of counters.

        Pure calculation with no side effects.

        Returns:
            CONFIRMED, CONTESTED or PENDING.
        """
        if (
            approve_votes >= self._config.confirm_threshold
            and approve_votes > challenge_votes
        ):
            return JudgmentOutcome.CONFIRMED
        deadlocked = (
            approve_votes == challenge_votes
            and approve_votes >= self._config.confirm_threshold
        )
        if challenge_votes >= self._config.contest_threshold and not deadlocked:
            return JudgmentOutcome.CONTESTED
        return JudgmentOutcome.PENDING

    async def judge(self, report_id: str) -> JudgmentResult:
        """Judge a report from its current counters.

        Safe to call any number of times, concurrently or not.

        Returns:
            JudgmentResult describing what this invocation did.

        Raises:
            ReportNotFoundError: If the report does not exist.
        """
        report = await self._report_repo.get(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)

        log = self._log_operation(
            "judge",
            report_id=report.id,
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
        )
        metrics = get_metrics_collector()

        if report.status != ReportStatus.IN_REVIEW:
            minted = False
            if report.status == ReportStatus.CONFIRMED:
                # Finishes a confirmation whose mint failed
                minted = await self._mint_golden_key(report, log)
            log.debug("judge_skipped_not_in_review", status=report.status.value)
            metrics.increment_judgments(JudgmentOutcome.NOT_IN_REVIEW.value)
            return JudgmentResult(
                report_id=report.id,
                outcome=JudgmentOutcome.NOT_IN_REVIEW,
                status=report.status,
                approve_votes=report.approve_votes,
                challenge_votes=report.challenge_votes,
                golden_key_minted=minted,
            )

        outcome = self.decide(report.approve_votes, report.challenge_votes)
        if outcome is JudgmentOutcome.PENDING:
            log.debug(
                "judge_pending",
                confirm_threshold=self._config.confirm_threshold,
                contest_threshold=self._config.contest_threshold,
            )
            metrics.increment_judgments(outcome.value)
            return JudgmentResult(
                report_id=report.id,
                outcome=outcome,
                status=report.status,
                approve_votes=report.approve_votes,
                challenge_votes=report.challenge_votes,
            )

        try:
            updated = await self._report_repo.transition_status(
                report.id, ReportStatus.IN_REVIEW, _OUTCOME_STATUS[outcome]
            )
        except ConcurrentModificationError:
            # Another judge (or an override) got there first
            current = await self._report_repo.get(report.id)
            status = current.status if current is not None else report.status
            log.info("judge_already_decided", status=status.value)
            metrics.increment_judgments(JudgmentOutcome.ALREADY_DECIDED.value)
            return JudgmentResult(
                report_id=report.id,
                outcome=JudgmentOutcome.ALREADY_DECIDED,
                status=status,
                approve_votes=report.approve_votes,
                challenge_votes=report.challenge_votes,
            )

        minted = False
        if outcome is JudgmentOutcome.CONFIRMED:
            minted = await self._mint_golden_key(report, log)

        log.info("report_judged", outcome=outcome.value, status=updated.status.value)
        metrics.increment_judgments(outcome.value)
        return JudgmentResult(
            report_id=report.id,
            outcome=outcome,
            status=updated.status,
            approve_votes=report.approve_votes,
            challenge_votes=report.challenge_votes,
            golden_key_minted=minted,
        )

    async def _mint_golden_key(self, report: Report, log: BoundLogger) -> bool:
        """Mint the reporter's key unless their fingerprint already holds one."""
        minted = await self._golden_key_repo.mint_if_absent(
            GoldenKey(
                fingerprint=report.secret_fingerprint,
                origin_report_id=report.id,
            )
        )
        if minted:
            get_metrics_collector().increment_golden_keys_minted()
            log.info(
                "golden_key_minted",
                fingerprint=short_fingerprint(report.secret_fingerprint),
            )
        else:
            log.debug(
                "golden_key_already_held",
                fingerprint=short_fingerprint(report.secret_fingerprint),
            )
        return minted
