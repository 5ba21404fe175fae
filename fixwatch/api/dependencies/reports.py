"""Report API dependencies.

Dependency injection setup for the report lifecycle. Services receive
their stores explicitly; this module is the only place that holds
process-wide instances.

Note: The document store is the in-memory stub. A deployment backed by a
real document database replaces get_document_store() only.
"""

from fixwatch.application.ports.document_store import DocumentStoreProtocol
from fixwatch.application.ports.golden_key_repository import (
    GoldenKeyRepositoryProtocol,
)
from fixwatch.application.ports.report_repository import ReportRepositoryProtocol
from fixwatch.application.ports.secret_codec import SecretCodecProtocol
from fixwatch.application.services.dashboard_service import DashboardService
from fixwatch.application.services.golden_key_authority_service import (
    GoldenKeyAuthorityService,
)
from fixwatch.application.services.report_lifecycle_service import (
    ReportLifecycleService,
)
from fixwatch.application.services.report_submission_service import (
    ReportSubmissionService,
)
from fixwatch.application.services.secret_codec_service import Blake3SecretCodec
from fixwatch.application.services.threshold_judge_service import (
    ThresholdJudgeService,
)
from fixwatch.config.lifecycle_config import JudgeThresholdConfig, SecretConfig
from fixwatch.infrastructure.adapters.golden_key_store import (
    DocumentGoldenKeyRepository,
)
from fixwatch.infrastructure.adapters.report_store import DocumentReportRepository
from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore

_document_store: DocumentStoreProtocol | None = None
_report_repository: ReportRepositoryProtocol | None = None
_golden_key_repository: GoldenKeyRepositoryProtocol | None = None
_secret_codec: SecretCodecProtocol | None = None


def get_document_store() -> DocumentStoreProtocol:
    """Get the document store instance (in-memory stub)."""
    global _document_store
    if _document_store is None:
        _document_store = InMemoryDocumentStore()
    return _document_store


def get_report_repository() -> ReportRepositoryProtocol:
    """Get the report store adapter."""
    global _report_repository
    if _report_repository is None:
        _report_repository = DocumentReportRepository(get_document_store())
    return _report_repository


def get_golden_key_repository() -> GoldenKeyRepositoryProtocol:
    """Get the golden key store adapter."""
    global _golden_key_repository
    if _golden_key_repository is None:
        _golden_key_repository = DocumentGoldenKeyRepository(get_document_store())
    return _golden_key_repository


def get_secret_codec() -> SecretCodecProtocol:
    """Get the secret codec, configured from the environment."""
    global _secret_codec
    if _secret_codec is None:
        _secret_codec = Blake3SecretCodec(SecretConfig.from_environment())
    return _secret_codec


def get_report_submission_service() -> ReportSubmissionService:
    """Get a report submission service."""
    return ReportSubmissionService(
        report_repo=get_report_repository(),
        codec=get_secret_codec(),
    )


def get_report_lifecycle_service() -> ReportLifecycleService:
    """Get a report lifecycle service."""
    return ReportLifecycleService(
        report_repo=get_report_repository(),
        codec=get_secret_codec(),
    )


def get_threshold_judge_service() -> ThresholdJudgeService:
    """Get a threshold judge configured from the environment."""
    return ThresholdJudgeService(
        report_repo=get_report_repository(),
        golden_key_repo=get_golden_key_repository(),
        config=JudgeThresholdConfig.from_environment(),
    )


def get_golden_key_authority_service() -> GoldenKeyAuthorityService:
    """Get the golden-key authority."""
    return GoldenKeyAuthorityService(
        report_repo=get_report_repository(),
        golden_key_repo=get_golden_key_repository(),
        codec=get_secret_codec(),
    )


def get_dashboard_service() -> DashboardService:
    """Get the dashboard service."""
    return DashboardService(report_repo=get_report_repository())


def reset_report_dependencies() -> None:
    """Reset all singletons (for testing only)."""
    global _document_store, _report_repository, _golden_key_repository
    global _secret_codec
    _document_store = None
    _report_repository = None
    _golden_key_repository = None
    _secret_codec = None
