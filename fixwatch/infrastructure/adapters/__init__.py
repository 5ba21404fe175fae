"""Store adapters mapping domain objects onto the document store."""

from fixwatch.infrastructure.adapters.golden_key_store import (
    GOLDEN_KEYS_COLLECTION,
    KEY_ACTION_LOG_COLLECTION,
    DocumentGoldenKeyRepository,
)
from fixwatch.infrastructure.adapters.report_store import (
    REPORTS_COLLECTION,
    DocumentReportRepository,
)

__all__: list[str] = [
    "DocumentGoldenKeyRepository",
    "DocumentReportRepository",
    "GOLDEN_KEYS_COLLECTION",
    "KEY_ACTION_LOG_COLLECTION",
    "REPORTS_COLLECTION",
]
