"""Golden key credential and its audit trail.

A golden key is minted when a report is confirmed by the crowd. It is
keyed by the same secret fingerprint that produced the report, so the
reporter's secret is the only way to present it.

Invariants:
- At most one golden key per fingerprint
- Golden keys are never mutated or deleted
- Every sponsor/veto performed with a key appends one audit entry
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class KeyAction(Enum):
    """Privileged actions a golden-key holder can perform."""

    SPONSOR = "sponsor"
    VETO = "veto"


@dataclass(frozen=True, eq=True)
class GoldenKey:
    """An escalated trust credential.

    Attributes:
        fingerprint: Secret fingerprint the key is addressed by.
        origin_report_id: Report whose confirmation earned the key (audit only).
        created_at: Mint time (UTC).
    """

    fingerprint: str
    origin_report_id: str
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate golden key fields."""
        if not self.fingerprint:
            raise ValueError("GoldenKey fingerprint must not be empty")
        if not self.origin_report_id:
            raise ValueError("GoldenKey origin_report_id must not be empty")


@dataclass(frozen=True, eq=True)
class KeyActionLogEntry:
    """One use of a golden key, kept for abuse analysis."""

    fingerprint: str
    action: KeyAction
    target_report_id: str
    timestamp: datetime = field(default_factory=_utc_now)
