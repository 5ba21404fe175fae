"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- DocumentStoreProtocol: Opaque document store (get/set/create/update/query/append)
- ReportRepositoryProtocol: Report persistence
- GoldenKeyRepositoryProtocol: Golden key and audit persistence
- SecretCodecProtocol: Secret generation and fingerprinting
"""

from fixwatch.application.ports.document_store import (
    DocumentStoreProtocol,
    Filter,
    Increment,
)
from fixwatch.application.ports.golden_key_repository import (
    GoldenKeyRepositoryProtocol,
)
from fixwatch.application.ports.report_repository import ReportRepositoryProtocol
from fixwatch.application.ports.secret_codec import SecretCodecProtocol

__all__: list[str] = [
    "DocumentStoreProtocol",
    "Filter",
    "GoldenKeyRepositoryProtocol",
    "Increment",
    "ReportRepositoryProtocol",
    "SecretCodecProtocol",
]
