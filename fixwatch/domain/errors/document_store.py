"""Document store errors.

Raised by document store implementations and translated by the store
adapters. ``StoreUnavailableError`` is the only one that reaches the
API unchanged: it is fatal for the request and never retried.
"""

from __future__ import annotations

from typing import Any

from fixwatch.domain.exceptions import FixWatchError


class DocumentStoreError(FixWatchError):
    """Base error for document store operations."""


class StoreUnavailableError(DocumentStoreError):
    """Raised when the underlying store cannot be reached.

    HTTP Status: 503 Service Unavailable
    """

    problem_type = "urn:fixwatch:store:unavailable"
    title = "Store Unavailable"
    status_code = 503

    def __init__(self, operation: str, reason: str = "store unreachable") -> None:
        """Initialize the error.

        Args:
            operation: The store operation that failed.
            reason: Underlying failure description.
        """
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store unavailable during {operation}: {reason}")

    def to_problem_dict(self) -> dict[str, Any]:
        """Serialize without internal failure details."""
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.status_code,
            "detail": "The report store is temporarily unavailable",
        }


class DocumentNotFoundError(DocumentStoreError):
    """Raised when updating a document that does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {collection}/{document_id} not found")


class DocumentAlreadyExistsError(DocumentStoreError):
    """Raised when creating a document whose id is taken."""

    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {collection}/{document_id} already exists")


class PreconditionFailedError(DocumentStoreError):
    """Raised when a conditional update's expected fields do not match."""

    def __init__(
        self,
        collection: str,
        document_id: str,
        field: str,
        expected: object,
        actual: object,
    ) -> None:
        self.collection = collection
        self.document_id = document_id
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Precondition failed on {collection}/{document_id}: "
            f"{field} expected {expected!r}, found {actual!r}"
        )
