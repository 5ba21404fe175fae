"""Secret codec port.

Developer Golden Rules:
1. ONE WAY - A fingerprint can be derived from a secret, never the reverse
2. DETERMINISM - The same secret always yields the same fingerprint
3. COMPARE DIGESTS - Equality is checked on fingerprints, never on secrets
4. NEVER PERSIST OR LOG SECRETS
"""

from __future__ import annotations

from typing import Protocol


class SecretCodecProtocol(Protocol):
    """Protocol for secret generation and fingerprinting."""

    def fingerprint(self, secret: str) -> str:
        """Derive the fixed-length hex fingerprint of a secret."""
        ...

    def matches(self, secret: str, fingerprint: str) -> bool:
        """Check whether a secret's fingerprint equals ``fingerprint``."""
        ...

    def generate_secret(self) -> str:
        """Generate a fresh short, human-transcribable secret."""
        ...

    def generate_report_id(self) -> str:
        """Generate a fresh public report id, independent of any secret."""
        ...
