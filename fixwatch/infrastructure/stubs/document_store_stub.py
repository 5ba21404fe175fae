"""In-memory document store stub.

This module provides an in-memory implementation of DocumentStoreProtocol
for development and testing. It simulates the behaviour the services rely
on from a real document store:
- Atomic field increments (Increment)
- Conditional updates (expected field preconditions)
- Create-if-absent
- Store-generated ids for appended records
- Unavailability, for failure-path tests

Each call holds an asyncio.Lock for its whole duration, which is the
in-memory equivalent of per-document atomicity.
"""

from __future__ import annotations

import asyncio
import copy
from uuid import uuid4

from fixwatch.application.ports.document_store import (
    DocumentStoreProtocol,
    Filter,
    Increment,
    Record,
)
from fixwatch.domain.errors.document_store import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    PreconditionFailedError,
    StoreUnavailableError,
)


class InMemoryDocumentStore(DocumentStoreProtocol):
    """In-memory stub implementation of DocumentStoreProtocol.

    It is NOT suitable for production use: contents are lost on restart.

    Attributes:
        _collections: collection name -> document id -> record.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._collections: dict[str, dict[str, Record]] = {}
        self._lock = asyncio.Lock()
        self._unavailable = False

    def set_unavailable(self, unavailable: bool = True) -> None:
        """Make every subsequent call fail with StoreUnavailableError."""
        self._unavailable = unavailable

    def _check_available(self, operation: str) -> None:
        if self._unavailable:
            raise StoreUnavailableError(operation=operation)

    def _collection(self, collection: str) -> dict[str, Record]:
        return self._collections.setdefault(collection, {})

    async def get(self, collection: str, document_id: str) -> Record | None:
        """Read a copy of a record, or None."""
        self._check_available("get")
        async with self._lock:
            record = self._collection(collection).get(document_id)
            return copy.deepcopy(record) if record is not None else None

    async def set(self, collection: str, document_id: str, record: Record) -> None:
        """Create or overwrite a record."""
        self._check_available("set")
        async with self._lock:
            self._collection(collection)[document_id] = copy.deepcopy(record)

    async def create(
        self, collection: str, document_id: str, record: Record
    ) -> None:
        """Create a record only if the id is free.

        Raises:
            DocumentAlreadyExistsError: If the id is taken.
        """
        self._check_available("create")
        async with self._lock:
            documents = self._collection(collection)
            if document_id in documents:
                raise DocumentAlreadyExistsError(collection, document_id)
            documents[document_id] = copy.deepcopy(record)

    async def update_fields(
        self,
        collection: str,
        document_id: str,
        fields: Record,
        expected: Record | None = None,
    ) -> Record:
        """Partially update a record, applying increments atomically.

        Raises:
            DocumentNotFoundError: If the record does not exist.
            PreconditionFailedError: If an expected field does not match.
        """
        self._check_available("update_fields")
        async with self._lock:
            record = self._collection(collection).get(document_id)
            if record is None:
                raise DocumentNotFoundError(collection, document_id)

            for field_name, expected_value in (expected or {}).items():
                actual = record.get(field_name)
                if actual != expected_value:
                    raise PreconditionFailedError(
                        collection=collection,
                        document_id=document_id,
                        field=field_name,
                        expected=expected_value,
                        actual=actual,
                    )

            for field_name, value in fields.items():
                if isinstance(value, Increment):
                    record[field_name] = record.get(field_name, 0) + value.amount
                else:
                    record[field_name] = copy.deepcopy(value)
            return copy.deepcopy(record)

    async def query(
        self, collection: str, filters: list[Filter] | None = None
    ) -> list[Record]:
        """Return copies of records matching every filter."""
        self._check_available("query")
        async with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._collection(collection).values()
                if all(f.matches(record) for f in filters or [])
            ]

    async def append(self, collection: str, record: Record) -> str:
        """Insert a record under a generated id."""
        self._check_available("append")
        async with self._lock:
            document_id = uuid4().hex
            self._collection(collection)[document_id] = copy.deepcopy(record)
            return document_id

    def count(self, collection: str) -> int:
        """Number of records in a collection (for testing)."""
        return len(self._collections.get(collection, {}))
