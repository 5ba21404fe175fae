"""Unit tests for ReportSubmissionService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from fixwatch.application.ports.report_lifecycle import SubmissionResult
from fixwatch.application.services.report_submission_service import (
    MAX_FIELD_LENGTH,
    MAX_ID_ATTEMPTS,
    ReportSubmissionService,
)
from fixwatch.application.services.secret_codec_service import Blake3SecretCodec
from fixwatch.domain.errors import (
    DocumentAlreadyExistsError,
    InvalidInputError,
    StoreUnavailableError,
)
from fixwatch.domain.models.report import ReportStatus
from fixwatch.infrastructure.adapters.report_store import DocumentReportRepository
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore


class TestReportSubmissionService:
    """Tests for submit()."""

    @pytest.fixture
    def service(
        self, report_repo: DocumentReportRepository, codec: Blake3SecretCodec
    ) -> ReportSubmissionService:
        return ReportSubmissionService(report_repo=report_repo, codec=codec)

    @pytest.mark.asyncio
    async def test_submit_creates_new_report(
        self,
        service: ReportSubmissionService,
        report_repo: DocumentReportRepository,
        codec: Blake3SecretCodec,
    ) -> None:
        result = await service.submit(
            description="Streetlight out",
            location="Main St & 3rd",
            title="Dark corner",
            institution="City Works",
            problem_type="lighting",
        )

        assert isinstance(result, SubmissionResult)
        stored = await report_repo.get(result.report_id)
        assert stored is not None
        assert stored.status == ReportStatus.NEW
        assert stored.approve_votes == 0
        assert stored.challenge_votes == 0
        assert stored.title == "Dark corner"
        assert stored.created_at == result.created_at
        assert codec.matches(result.secret, stored.secret_fingerprint)

    @pytest.mark.asyncio
    async def test_secret_is_never_persisted(
        self,
        service: ReportSubmissionService,
        document_store: InMemoryDocumentStore,
    ) -> None:
        result = await service.submit(description="Leak", location="Lab 2")

        record = await document_store.get("reports", result.report_id)
        assert record is not None
        assert result.secret not in record.values()

    @pytest.mark.asyncio
    async def test_report_id_independent_of_secret(
        self, service: ReportSubmissionService
    ) -> None:
        result = await service.submit(description="Leak", location="Lab 2")

        assert result.report_id != result.secret

    @pytest.mark.asyncio
    async def test_fields_are_trimmed(
        self,
        service: ReportSubmissionService,
        report_repo: DocumentReportRepository,
    ) -> None:
        result = await service.submit(description="  Leak  ", location=" Lab 2 ")

        stored = await report_repo.get(result.report_id)
        assert stored is not None
        assert stored.description == "Leak"
        assert stored.location == "Lab 2"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("description", "location", "field"),
        [("", "Lab 2", "description"), ("Leak", "   ", "location")],
    )
    async def test_blank_required_field_rejected(
        self,
        service: ReportSubmissionService,
        document_store: InMemoryDocumentStore,
        description: str,
        location: str,
        field: str,
    ) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await service.submit(description=description, location=location)

        assert exc_info.value.field == field
        assert document_store.count("reports") == 0

    @pytest.mark.asyncio
    async def test_oversized_field_rejected(
        self, service: ReportSubmissionService
    ) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await service.submit(
                description="Leak",
                location="Lab 2",
                title="x" * (MAX_FIELD_LENGTH + 1),
            )

        assert exc_info.value.field == "title"

    @pytest.mark.asyncio
    async def test_id_collision_is_retried(self, codec: Blake3SecretCodec) -> None:
        repo = MagicMock()
        repo.create = AsyncMock(
            side_effect=[DocumentAlreadyExistsError("reports", "ABC12345"), None]
        )
        service = ReportSubmissionService(report_repo=repo, codec=codec)

        result = await service.submit(description="Leak", location="Lab 2")

        assert repo.create.await_count == 2
        assert result.report_id

    @pytest.mark.asyncio
    async def test_id_collision_gives_up(self, codec: Blake3SecretCodec) -> None:
        repo = MagicMock()
        repo.create = AsyncMock(
            side_effect=DocumentAlreadyExistsError("reports", "ABC12345")
        )
        service = ReportSubmissionService(report_repo=repo, codec=codec)

        with pytest.raises(DocumentAlreadyExistsError):
            await service.submit(description="Leak", location="Lab 2")

        assert repo.create.await_count == MAX_ID_ATTEMPTS

    @pytest.mark.asyncio
    async def test_store_unavailable_propagates(
        self,
        service: ReportSubmissionService,
        document_store: InMemoryDocumentStore,
    ) -> None:
        document_store.set_unavailable()

        with pytest.raises(StoreUnavailableError):
            await service.submit(description="Leak", location="Lab 2")

    @pytest.mark.asyncio
    async def test_submission_counted(self, service: ReportSubmissionService) -> None:
        collector = get_metrics_collector()

        await service.submit(description="Leak", location="Lab 2")

        value = collector.get_registry().get_sample_value(
            "reports_submitted_total", collector._labels()
        )
        assert value == 1.0
