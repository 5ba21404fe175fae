"""
Pytest configuration and shared fixtures for FixWatch tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Iterator

import pytest

from fixwatch.api.dependencies.reports import reset_report_dependencies
from fixwatch.application.services.secret_codec_service import Blake3SecretCodec
from fixwatch.infrastructure.adapters.golden_key_store import (
    DocumentGoldenKeyRepository,
)
from fixwatch.infrastructure.adapters.report_store import DocumentReportRepository
from fixwatch.infrastructure.monitoring.metrics import reset_metrics_collector
from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from fixwatch import __version__

    return __version__


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    """Reset process-wide singletons around every test."""
    reset_metrics_collector()
    reset_report_dependencies()
    yield
    reset_metrics_collector()
    reset_report_dependencies()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Create a fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def report_repo(document_store: InMemoryDocumentStore) -> DocumentReportRepository:
    """Report adapter over the fresh store."""
    return DocumentReportRepository(document_store)


@pytest.fixture
def golden_key_repo(
    document_store: InMemoryDocumentStore,
) -> DocumentGoldenKeyRepository:
    """Golden key adapter over the fresh store."""
    return DocumentGoldenKeyRepository(document_store)


@pytest.fixture
def codec() -> Blake3SecretCodec:
    """BLAKE3 codec with default lengths."""
    return Blake3SecretCodec()

