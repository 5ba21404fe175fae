"""Golden key store adapter over the document store.

Golden keys live in the ``golden_keys`` collection keyed by fingerprint.
Key actions are appended to ``key_action_log`` with store-generated ids.
Neither collection is ever updated or deleted from.
"""

from __future__ import annotations

from fixwatch.application.ports.document_store import DocumentStoreProtocol
from fixwatch.application.ports.golden_key_repository import (
    GoldenKeyRepositoryProtocol,
)
from fixwatch.domain.errors.document_store import DocumentAlreadyExistsError
from fixwatch.domain.models.golden_key import GoldenKey, KeyActionLogEntry

GOLDEN_KEYS_COLLECTION = "golden_keys"
KEY_ACTION_LOG_COLLECTION = "key_action_log"


class DocumentGoldenKeyRepository(GoldenKeyRepositoryProtocol):
    """GoldenKeyRepositoryProtocol implementation backed by a document store."""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        keys_collection: str = GOLDEN_KEYS_COLLECTION,
        log_collection: str = KEY_ACTION_LOG_COLLECTION,
    ) -> None:
        self._store = store
        self._keys_collection = keys_collection
        self._log_collection = log_collection

    async def exists(self, fingerprint: str) -> bool:
        """Check whether a fingerprint holds a golden key."""
        return await self._store.get(self._keys_collection, fingerprint) is not None

    async def mint_if_absent(self, key: GoldenKey) -> bool:
        """Create the key unless the fingerprint already has one."""
        try:
            await self._store.create(
                self._keys_collection,
                key.fingerprint,
                {
                    "origin_report_id": key.origin_report_id,
                    "created_at": key.created_at,
                },
            )
        except DocumentAlreadyExistsError:
            return False
        return True

    async def append_action(self, entry: KeyActionLogEntry) -> str:
        """Append one key-action audit entry."""
        return await self._store.append(
            self._log_collection,
            {
                "fingerprint": entry.fingerprint,
                "action": entry.action.value,
                "target_report_id": entry.target_report_id,
                "timestamp": entry.timestamp,
            },
        )
