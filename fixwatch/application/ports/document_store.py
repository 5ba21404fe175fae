"""Document store port.

This module defines the abstract interface of the document store that
backs both the report store and the golden-key store. Records are plain
dictionaries addressed by ``(collection, document_id)``.

Developer Golden Rules:
1. NO BUSINESS LOGIC - The store knows nothing about reports or keys
2. ATOMIC INCREMENT - ``Increment`` values are applied atomically
3. CONDITIONAL WRITES - ``expected`` preconditions and ``create`` are the
   only concurrency control; there are no locks above this layer
4. FAIL LOUD - Unreachable store raises StoreUnavailableError, never retried
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

Record = dict[str, Any]


@dataclass(frozen=True)
class Increment:
    """Field value that atomically adds ``amount`` to a numeric field.

    A missing field is treated as zero.
    """

    amount: int = 1


@dataclass(frozen=True)
class Filter:
    """Equality or inequality filter for ``query``."""

    field: str
    op: Literal["==", "!="]
    value: Any

    def matches(self, record: Record) -> bool:
        """Check whether a record satisfies this filter."""
        actual = record.get(self.field)
        if self.op == "==":
            return actual == self.value
        return actual != self.value


class DocumentStoreProtocol(Protocol):
    """Protocol for document store operations.

    Methods:
        get: Read a record
        set: Create or overwrite a record
        create: Create a record only if absent
        update_fields: Partial, optionally conditional, update
        query: Filter a collection
        append: Insert with a store-generated id
    """

    async def get(self, collection: str, document_id: str) -> Record | None:
        """Read a record.

        Returns:
            A copy of the record, or None if it does not exist.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    async def set(self, collection: str, document_id: str, record: Record) -> None:
        """Create or overwrite a record.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    async def create(
        self, collection: str, document_id: str, record: Record
    ) -> None:
        """Create a record only if no record with that id exists.

        Raises:
            DocumentAlreadyExistsError: If the id is taken.
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    async def update_fields(
        self,
        collection: str,
        document_id: str,
        fields: Record,
        expected: Record | None = None,
    ) -> Record:
        """Partially update a record.

        ``Increment`` values in ``fields`` are applied atomically. When
        ``expected`` is given, every listed field must currently equal the
        given value or nothing is written.

        Returns:
            A copy of the record after the update.

        Raises:
            DocumentNotFoundError: If the record does not exist.
            PreconditionFailedError: If an expected field does not match.
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    async def query(
        self, collection: str, filters: list[Filter] | None = None
    ) -> list[Record]:
        """Return copies of all records matching every filter.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    async def append(self, collection: str, record: Record) -> str:
        """Insert a record under a store-generated id.

        Returns:
            The generated document id.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        ...
