"""BLAKE3 secret codec.

Generates reporter secrets and public report ids, and derives the one-way
fingerprint that stands in for a secret everywhere it must be stored.

Why BLAKE3:
- Fixed 32-byte output (64 hex characters)
- Modern cryptographic design, collision resistant
- Same hash family used for every other digest in the system

Usage:
    codec = Blake3SecretCodec()
    secret = codec.generate_secret()          # e.g. "K7Q2ZP9M"
    fingerprint = codec.fingerprint(secret)   # 64 hex chars
    codec.matches(secret, fingerprint)        # True
"""

from __future__ import annotations

import hmac
import secrets
import string

import blake3

from fixwatch.application.ports.secret_codec import SecretCodecProtocol
from fixwatch.application.services.base import LoggingMixin
from fixwatch.config.lifecycle_config import DEFAULT_SECRET_CONFIG, SecretConfig

# Uppercase alphanumeric: readable aloud and safe to copy by hand
TOKEN_ALPHABET = string.ascii_uppercase + string.digits


class Blake3SecretCodec(SecretCodecProtocol, LoggingMixin):
    """BLAKE3 implementation of the secret codec.

    Attributes:
        FINGERPRINT_SIZE: Digest length in bytes requested from BLAKE3.
    """

    FINGERPRINT_SIZE: int = 32

    def __init__(self, config: SecretConfig | None = None) -> None:
        """Initialize the codec.

        Args:
            config: Secret and report id lengths. Defaults to 8 and 8.
        """
        self._config = config or DEFAULT_SECRET_CONFIG
        self._init_logger(component="credential")

    def fingerprint(self, secret: str) -> str:
        """Derive the hex BLAKE3 fingerprint of a secret.

        Secrets are upper-cased before hashing, since they are issued in
        upper case and may be typed back in either case.

        Args:
            secret: The plaintext secret.

        Returns:
            64-character lowercase hex digest.
        """
        digest = blake3.blake3(secret.strip().upper().encode("utf-8"))
        return digest.hexdigest(length=self.FINGERPRINT_SIZE)

    def matches(self, secret: str, fingerprint: str) -> bool:
        """Check whether ``secret`` derives ``fingerprint``.

        Uses a constant-time comparison of the two digests.
        """
        return hmac.compare_digest(self.fingerprint(secret), fingerprint)

    def _random_token(self, length: int) -> str:
        return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))

    def generate_secret(self) -> str:
        """Generate a fresh reporter secret.

        Only the length is logged; the secret itself never is.
        """
        secret = self._random_token(self._config.secret_length)
        self._log_operation("generate_secret").debug(
            "secret_generated", secret_length=len(secret)
        )
        return secret

    def generate_report_id(self) -> str:
        """Generate a fresh public report id, drawn independently of any secret."""
        report_id = self._random_token(self._config.report_id_length)
        self._log_operation("generate_report_id").debug(
            "report_id_generated", report_id=report_id
        )
        return report_id
