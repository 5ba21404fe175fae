"""Unit tests for ThresholdJudgeService.

Tests cover:
- decide() priority order and the deadlocked tie
- judge() transitions and golden key minting
- idempotence on already-decided reports
- concurrent duplicate invocation minting exactly one key
"""

import asyncio
import pytest

from fixwatch.application.ports.report_lifecycle import JudgmentOutcome
from fixwatch.application.services.secret_codec_service import Blake3SecretCodec
from fixwatch.application.services.threshold_judge_service import (
    ThresholdJudgeService,
)
from fixwatch.config.lifecycle_config import JudgeThresholdConfig
from fixwatch.domain.errors import ReportNotFoundError, StoreUnavailableError
from fixwatch.domain.models.report import ReportStatus
from fixwatch.infrastructure.adapters.golden_key_store import (
    DocumentGoldenKeyRepository,
)
from fixwatch.infrastructure.adapters.report_store import DocumentReportRepository
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore
from tests.helpers.report_factory import TEST_SECRET, make_report


@pytest.fixture
def judge(
    report_repo: DocumentReportRepository,
    golden_key_repo: DocumentGoldenKeyRepository,
) -> ThresholdJudgeService:
    return ThresholdJudgeService(report_repo=report_repo, golden_key_repo=golden_key_repo)


class TestDecide:
    """Tests for the pure decision rule (defaults 5 and 5)."""

    @pytest.mark.parametrize(
        ("approve", "challenge", "expected"),
        [
            (5, 2, JudgmentOutcome.CONFIRMED),
            (6, 5, JudgmentOutcome.CONFIRMED),
            (5, 0, JudgmentOutcome.CONFIRMED),
            (1, 5, JudgmentOutcome.CONTESTED),
            (0, 5, JudgmentOutcome.CONTESTED),
            (5, 6, JudgmentOutcome.CONTESTED),
            (5, 5, JudgmentOutcome.PENDING),
            (7, 7, JudgmentOutcome.PENDING),
            (4, 4, JudgmentOutcome.PENDING),
            (4, 0, JudgmentOutcome.PENDING),
            (0, 0, JudgmentOutcome.PENDING),
        ],
    )
    def test_decision_table(
        self,
        judge: ThresholdJudgeService,
        approve: int,
        challenge: int,
        expected: JudgmentOutcome,
    ) -> None:
        assert judge.decide(approve, challenge) is expected

    def test_tie_below_confirm_quorum_is_contested(
        self,
        report_repo: DocumentReportRepository,
        golden_key_repo: DocumentGoldenKeyRepository,
    ) -> None:
        """A 3/3 tie with T_contest=3 but T_confirm=5 is not deadlocked."""
        judge = ThresholdJudgeService(
            report_repo,
            golden_key_repo,
            JudgeThresholdConfig(confirm_threshold=5, contest_threshold=3),
        )

        assert judge.decide(3, 3) is JudgmentOutcome.CONTESTED

    def test_custom_thresholds(
        self,
        report_repo: DocumentReportRepository,
        golden_key_repo: DocumentGoldenKeyRepository,
    ) -> None:
        judge = ThresholdJudgeService(
            report_repo,
            golden_key_repo,
            JudgeThresholdConfig(confirm_threshold=2, contest_threshold=10),
        )

        assert judge.confirm_threshold == 2
        assert judge.contest_threshold == 10
        assert judge.decide(2, 1) is JudgmentOutcome.CONFIRMED
        assert judge.decide(1, 9) is JudgmentOutcome.PENDING


class TestJudge:
    """Tests for judge()."""

    @pytest.mark.asyncio
    async def test_confirm_mints_golden_key(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
        codec: Blake3SecretCodec,
    ) -> None:
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5, challenge_votes=2)
        )

        result = await judge.judge("ABC12345")

        assert result.outcome is JudgmentOutcome.CONFIRMED
        assert result.status == ReportStatus.CONFIRMED
        assert result.golden_key_minted
        assert result.transitioned

        record = await document_store.get("golden_keys", codec.fingerprint(TEST_SECRET))
        assert record is not None
        assert record["origin_report_id"] == "ABC12345"

    @pytest.mark.asyncio
    async def test_contest_mints_nothing(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=1, challenge_votes=5)
        )

        result = await judge.judge("ABC12345")

        assert result.outcome is JudgmentOutcome.CONTESTED
        assert result.status == ReportStatus.CONTESTED
        assert not result.golden_key_minted
        assert document_store.count("golden_keys") == 0

    @pytest.mark.asyncio
    async def test_tie_stays_in_review(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5, challenge_votes=5)
        )

        result = await judge.judge("ABC12345")

        assert result.outcome is JudgmentOutcome.PENDING
        assert not result.transitioned
        stored = await report_repo.get("ABC12345")
        assert stored is not None
        assert stored.status == ReportStatus.IN_REVIEW
        assert document_store.count("golden_keys") == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [
            ReportStatus.NEW,
            ReportStatus.RESOLVED,
            ReportStatus.CONTESTED,
            ReportStatus.VETTED,
            ReportStatus.JUNK,
        ],
    )
    async def test_no_transition_outside_review(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
        status: ReportStatus,
    ) -> None:
        await report_repo.create(make_report(status=status, approve_votes=9))

        result = await judge.judge("ABC12345")

        assert result.outcome is JudgmentOutcome.NOT_IN_REVIEW
        assert result.status == status
        assert document_store.count("golden_keys") == 0

    @pytest.mark.asyncio
    async def test_second_judgment_is_idempotent(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5)
        )

        first = await judge.judge("ABC12345")
        second = await judge.judge("ABC12345")

        assert first.outcome is JudgmentOutcome.CONFIRMED
        assert second.outcome is JudgmentOutcome.NOT_IN_REVIEW
        assert second.status == ReportStatus.CONFIRMED
        assert document_store.count("golden_keys") == 1

    @pytest.mark.asyncio
    async def test_concurrent_judges_mint_exactly_once(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5, challenge_votes=2)
        )

        results = await asyncio.gather(*(judge.judge("ABC12345") for _ in range(10)))

        outcomes = [r.outcome for r in results]
        assert outcomes.count(JudgmentOutcome.CONFIRMED) == 1
        assert sum(r.golden_key_minted for r in results) == 1
        assert document_store.count("golden_keys") == 1
        assert all(r.status == ReportStatus.CONFIRMED for r in results)

    @pytest.mark.asyncio
    async def test_second_confirmation_with_same_secret_keeps_one_key(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        """Two reports sharing a fingerprint never produce two keys."""
        await report_repo.create(
            make_report(report_id="AAAA1111", status=ReportStatus.IN_REVIEW, approve_votes=5)
        )
        await report_repo.create(
            make_report(report_id="BBBB2222", status=ReportStatus.IN_REVIEW, approve_votes=5)
        )

        first = await judge.judge("AAAA1111")
        second = await judge.judge("BBBB2222")

        assert first.golden_key_minted
        assert second.outcome is JudgmentOutcome.CONFIRMED
        assert not second.golden_key_minted
        assert document_store.count("golden_keys") == 1

    @pytest.mark.asyncio
    async def test_lost_race_reports_already_decided(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        """An override landing between read and write wins; nothing is minted."""
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5)
        )
        original_get = report_repo.get
        calls = 0

        async def get_then_veto(report_id: str):  # type: ignore[no-untyped-def]
            nonlocal calls
            calls += 1
            report = await original_get(report_id)
            if calls == 1:
                await report_repo.force_status(report_id, ReportStatus.JUNK)
            return report

        report_repo.get = get_then_veto  # type: ignore[method-assign]

        result = await judge.judge("ABC12345")

        assert result.outcome is JudgmentOutcome.ALREADY_DECIDED
        assert result.status == ReportStatus.JUNK
        assert document_store.count("golden_keys") == 0

    @pytest.mark.asyncio
    async def test_unknown_report(self, judge: ThresholdJudgeService) -> None:
        with pytest.raises(ReportNotFoundError):
            await judge.judge("NOPE0000")

    @pytest.mark.asyncio
    async def test_retry_mints_key_after_failed_mint(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
        golden_key_repo: DocumentGoldenKeyRepository,
        document_store: InMemoryDocumentStore,
        codec: Blake3SecretCodec,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A mint lost to a store outage is completed by the next judgment."""
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5)
        )
        original_create = document_store.create
        failures = 0

        async def create_failing_once(collection, document_id, record):  # type: ignore[no-untyped-def]
            nonlocal failures
            if collection == "golden_keys" and failures == 0:
                failures += 1
                raise StoreUnavailableError("create")
            return await original_create(collection, document_id, record)

        monkeypatch.setattr(document_store, "create", create_failing_once)

        with pytest.raises(StoreUnavailableError):
            await judge.judge("ABC12345")

        stored = await report_repo.get("ABC12345")
        assert stored is not None
        assert stored.status == ReportStatus.CONFIRMED
        assert not await golden_key_repo.exists(codec.fingerprint(TEST_SECRET))

        retry = await judge.judge("ABC12345")

        assert retry.outcome is JudgmentOutcome.NOT_IN_REVIEW
        assert retry.status == ReportStatus.CONFIRMED
        assert retry.golden_key_minted
        assert await golden_key_repo.exists(codec.fingerprint(TEST_SECRET))
        assert document_store.count("golden_keys") == 1

    @pytest.mark.asyncio
    async def test_outcomes_counted(
        self,
        judge: ThresholdJudgeService,
        report_repo: DocumentReportRepository,
    ) -> None:
        collector = get_metrics_collector()
        await report_repo.create(
            make_report(status=ReportStatus.IN_REVIEW, approve_votes=5)
        )

        await judge.judge("ABC12345")

        registry = collector.get_registry()
        labels = collector._labels()
        assert registry.get_sample_value(
            "judgments_total", {**labels, "outcome": "confirmed"}
        ) == 1.0
        assert registry.get_sample_value("golden_keys_minted_total", labels) == 1.0
