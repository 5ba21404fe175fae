"""Golden key repository port.

Golden keys and their action log are append-only: there is no update or
delete operation in this interface.
"""

from __future__ import annotations

from typing import Protocol

from fixwatch.domain.models.golden_key import GoldenKey, KeyActionLogEntry


class GoldenKeyRepositoryProtocol(Protocol):
    """Protocol for golden key and key-action audit storage.

    Methods:
        exists: Check whether a fingerprint holds a golden key
        mint_if_absent: Create a golden key unless one exists
        append_action: Record one use of a golden key
    """

    async def exists(self, fingerprint: str) -> bool:
        """Check whether a golden key exists for a fingerprint."""
        ...

    async def mint_if_absent(self, key: GoldenKey) -> bool:
        """Create a golden key unless the fingerprint already has one.

        Returns:
            True if the key was created, False if one already existed.
        """
        ...

    async def append_action(self, entry: KeyActionLogEntry) -> str:
        """Append an audit entry.

        Returns:
            Store-generated id of the entry.
        """
        ...
