"""Unit tests for DocumentGoldenKeyRepository."""

import asyncio

import pytest

from fixwatch.domain.models.golden_key import GoldenKey, KeyAction, KeyActionLogEntry
from fixwatch.infrastructure.adapters.golden_key_store import (
    DocumentGoldenKeyRepository,
)
from fixwatch.infrastructure.stubs.document_store_stub import InMemoryDocumentStore

FINGERPRINT = "a" * 64


class TestDocumentGoldenKeyRepository:
    """Tests for minting and the audit log."""

    @pytest.mark.asyncio
    async def test_mint_stores_origin(
        self,
        golden_key_repo: DocumentGoldenKeyRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        key = GoldenKey(fingerprint=FINGERPRINT, origin_report_id="ABC12345")

        assert await golden_key_repo.mint_if_absent(key)

        assert await golden_key_repo.exists(FINGERPRINT)
        record = await document_store.get("golden_keys", FINGERPRINT)
        assert record == {
            "origin_report_id": "ABC12345",
            "created_at": key.created_at,
        }

    @pytest.mark.asyncio
    async def test_missing_key(
        self, golden_key_repo: DocumentGoldenKeyRepository
    ) -> None:
        assert not await golden_key_repo.exists(FINGERPRINT)

    @pytest.mark.asyncio
    async def test_second_mint_keeps_first_key(
        self,
        golden_key_repo: DocumentGoldenKeyRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        await golden_key_repo.mint_if_absent(
            GoldenKey(fingerprint=FINGERPRINT, origin_report_id="FIRST001")
        )

        minted = await golden_key_repo.mint_if_absent(
            GoldenKey(fingerprint=FINGERPRINT, origin_report_id="SECOND01")
        )

        assert not minted
        record = await document_store.get("golden_keys", FINGERPRINT)
        assert record is not None
        assert record["origin_report_id"] == "FIRST001"

    @pytest.mark.asyncio
    async def test_concurrent_mints(
        self,
        golden_key_repo: DocumentGoldenKeyRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        results = await asyncio.gather(
            *(
                golden_key_repo.mint_if_absent(
                    GoldenKey(fingerprint=FINGERPRINT, origin_report_id="ABC12345")
                )
                for _ in range(10)
            )
        )

        assert results.count(True) == 1
        assert document_store.count("golden_keys") == 1

    @pytest.mark.asyncio
    async def test_append_action(
        self,
        golden_key_repo: DocumentGoldenKeyRepository,
        document_store: InMemoryDocumentStore,
    ) -> None:
        entry_id = await golden_key_repo.append_action(
            KeyActionLogEntry(
                fingerprint=FINGERPRINT,
                action=KeyAction.SPONSOR,
                target_report_id="ABC12345",
            )
        )

        record = await document_store.get("key_action_log", entry_id)
        assert record is not None
        assert record["action"] == "sponsor"
        assert record["target_report_id"] == "ABC12345"
