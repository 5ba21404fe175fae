"""Golden-key authority service.

Admission gate in front of the two privileged override actions:
- sponsor: force a report to Vetted, bypassing the vote entirely
- veto:    force a report to Junk, hiding it from the dashboard

Both work from ANY status, including New and terminal ones.

Gate: the presented secret is fingerprinted and must match an existing
golden key. The secret itself is never compared or stored.

Burn rule: every use appends one KeyActionLogEntry so operators can spot
abuse. Nothing here limits how often a key may be used.

Developer Golden Rules:
1. GATE FIRST - No report is read before the key is authenticated
2. AUDIT EVERY USE - One log entry per successful action
3. NEVER LOG THE SECRET - Fingerprints are logged truncated
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixwatch.application.ports.report_lifecycle import KeyActionResult
from fixwatch.application.services.base import LoggingMixin
from fixwatch.application.services.report_lifecycle_service import (
    normalize_report_id,
)
from fixwatch.domain.errors.golden_key import GoldenKeyForbiddenError
from fixwatch.domain.errors.report import ReportNotFoundError
from fixwatch.domain.models.golden_key import KeyAction, KeyActionLogEntry
from fixwatch.domain.models.report import ReportStatus
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.observability.logging import short_fingerprint

if TYPE_CHECKING:
    from fixwatch.application.ports.golden_key_repository import (
        GoldenKeyRepositoryProtocol,
    )
    from fixwatch.application.ports.report_repository import (
        ReportRepositoryProtocol,
    )
    from fixwatch.application.ports.secret_codec import SecretCodecProtocol

ACTION_TARGET_STATUS: dict[KeyAction, ReportStatus] = {
    KeyAction.SPONSOR: ReportStatus.VETTED,
    KeyAction.VETO: ReportStatus.JUNK,
}


class GoldenKeyAuthorityService(LoggingMixin):
    """Service executing privileged overrides for golden-key holders."""

    def __init__(
        self,
        report_repo: ReportRepositoryProtocol,
        golden_key_repo: GoldenKeyRepositoryProtocol,
        codec: SecretCodecProtocol,
    ) -> None:
        """Initialize the authority.

        Args:
            report_repo: Repository for report persistence.
            golden_key_repo: Golden keys and the action audit log.
            codec: Secret fingerprinter.
        """
        self._report_repo = report_repo
        self._golden_key_repo = golden_key_repo
        self._codec = codec
        self._init_logger(component="credential")

    async def authenticate(self, secret: str, action: KeyAction) -> str:
        """Check that a secret holds a golden key.

        Args:
            secret: The presented plaintext secret.
            action: The action being attempted (for the error message).

        Returns:
            The secret's fingerprint.

        Raises:
            GoldenKeyForbiddenError: If no golden key exists for the secret.
        """
        if not secret or not secret.strip():
            raise GoldenKeyForbiddenError(action.value)

        fingerprint = self._codec.fingerprint(secret)
        if not await self._golden_key_repo.exists(fingerprint):
            self._log_operation(
                "authenticate",
                action=action.value,
                fingerprint=short_fingerprint(fingerprint),
            ).warning("golden_key_rejected")
            raise GoldenKeyForbiddenError(action.value)
        return fingerprint

    async def sponsor(self, report_id: str, secret: str) -> KeyActionResult:
        """Force a report to Vetted.

        Raises:
            GoldenKeyForbiddenError: If the secret holds no golden key.
            ReportNotFoundError: If the report does not exist.
        """
        return await self._execute(KeyAction.SPONSOR, report_id, secret)

    async def veto(self, report_id: str, secret: str) -> KeyActionResult:
        """Force a report to Junk.

        Raises:
            GoldenKeyForbiddenError: If the secret holds no golden key.
            ReportNotFoundError: If the report does not exist.
        """
        return await self._execute(KeyAction.VETO, report_id, secret)

    async def _execute(
        self, action: KeyAction, report_id: str, secret: str
    ) -> KeyActionResult:
        fingerprint = await self.authenticate(secret, action)
        report_id = normalize_report_id(report_id)
        log = self._log_operation(
            action.value,
            report_id=report_id,
            fingerprint=short_fingerprint(fingerprint),
        )

        report = await self._report_repo.get(report_id)
        if report is None:
            log.warning("golden_key_target_not_found")
            raise ReportNotFoundError(report_id)

        target_status = ACTION_TARGET_STATUS[action]
        updated = await self._report_repo.force_status(report.id, target_status)

        entry_id = await self._golden_key_repo.append_action(
            KeyActionLogEntry(
                fingerprint=fingerprint,
                action=action,
                target_report_id=report.id,
            )
        )
        get_metrics_collector().increment_golden_key_actions(action.value)

        log.info(
            "golden_key_action_executed",
            previous_status=report.status.value,
            status=updated.status.value,
            audit_entry_id=entry_id,
        )
        return KeyActionResult(
            report_id=report.id,
            action=action,
            previous_status=report.status,
            status=updated.status,
            audit_entry_id=entry_id,
        )
