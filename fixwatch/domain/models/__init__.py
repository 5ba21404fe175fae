"""Domain models for reports and golden keys."""

from fixwatch.domain.models.golden_key import GoldenKey, KeyAction, KeyActionLogEntry
from fixwatch.domain.models.report import (
    STATUS_TRANSITION_MATRIX,
    Report,
    ReportStatus,
    VoteKind,
)

__all__: list[str] = [
    "GoldenKey",
    "KeyAction",
    "KeyActionLogEntry",
    "Report",
    "ReportStatus",
    "STATUS_TRANSITION_MATRIX",
    "VoteKind",
]
