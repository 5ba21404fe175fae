"""Infrastructure stubs for development and testing.

Available stubs:
- InMemoryDocumentStore: Document store with atomic increments,
  conditional updates and injectable unavailability

WARNING: These stubs are NOT for production use.
"""

from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore

__all__: list[str] = ["InMemoryDocumentStore"]
