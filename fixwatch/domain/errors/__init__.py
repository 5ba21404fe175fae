"""Domain errors for FixWatch.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from FixWatchError.
"""

from fixwatch.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from fixwatch.domain.errors.document_store import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentStoreError,
    PreconditionFailedError,
    StoreUnavailableError,
)
from fixwatch.domain.errors.golden_key import GoldenKeyForbiddenError
from fixwatch.domain.errors.report import (
    InvalidInputError,
    ReportError,
    ReportNotFoundError,
    UnauthorizedSecretError,
)
from fixwatch.domain.errors.state_transition import InvalidStateTransitionError

__all__: list[str] = [
    "ConcurrentModificationError",
    "DocumentAlreadyExistsError",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "GoldenKeyForbiddenError",
    "InvalidInputError",
    "InvalidStateTransitionError",
    "PreconditionFailedError",
    "ReportError",
    "ReportNotFoundError",
    "StoreUnavailableError",
    "UnauthorizedSecretError",
]
