"""Report submission service.

Creates a new report in status New and hands the reporter the plaintext
secret. This is the only moment the secret exists outside the reporter's
hands: only its fingerprint is persisted.

Developer Golden Rules:
1. VALIDATE FIRST - Reject invalid input before touching the store
2. NEVER PERSIST OR LOG THE SECRET
3. FAIL LOUD - Store unavailability fails the request, no retry
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fixwatch.application.ports.report_lifecycle import SubmissionResult
from fixwatch.application.services.base import LoggingMixin
from fixwatch.domain.errors.document_store import DocumentAlreadyExistsError
from fixwatch.domain.errors.report import InvalidInputError
from fixwatch.domain.models.report import Report, ReportStatus
from fixwatch.infrastructure.monitoring.metrics import get_metrics_collector
from fixwatch.infrastructure.observability.logging import short_fingerprint

if TYPE_CHECKING:
    from fixwatch.application.ports.report_repository import (
        ReportRepositoryProtocol,
    )
    from fixwatch.application.ports.secret_codec import SecretCodecProtocol

# Attempts at drawing a free report id before giving up
MAX_ID_ATTEMPTS = 3

MAX_FIELD_LENGTH = 5_000


class ReportSubmissionService(LoggingMixin):
    """Service for submitting new reports.

    Example:
        >>> service = ReportSubmissionService(report_repo=repo, codec=codec)
        >>> result = await service.submit(
        ...     description="Streetlight out",
        ...     location="Main St & 3rd",
        ... )
        >>> result.secret  # shown to the reporter once
        'K7Q2ZP9M'
    """

    def __init__(
        self,
        report_repo: ReportRepositoryProtocol,
        codec: SecretCodecProtocol,
    ) -> None:
        """Initialize the submission service.

        Args:
            report_repo: Repository for report persistence.
            codec: Secret generator and fingerprinter.
        """
        self._report_repo = report_repo
        self._codec = codec
        self._init_logger(component="lifecycle")

    @staticmethod
    def _validate(field: str, value: str, required: bool) -> str:
        value = (value or "").strip()
        if required and not value:
            raise InvalidInputError(field, "must not be blank")
        if len(value) > MAX_FIELD_LENGTH:
            raise InvalidInputError(
                field, f"must be at most {MAX_FIELD_LENGTH} characters"
            )
        return value

    async def submit(
        self,
        description: str,
        location: str,
        title: str = "",
        institution: str = "",
        problem_type: str = "",
    ) -> SubmissionResult:
        """Submit a new report.

        Args:
            description: What is wrong (required).
            location: Where the problem is (required).
            title: Optional short title.
            institution: Responsible institution, if known.
            problem_type: Free-text category.

        Returns:
            SubmissionResult with the report id and the plaintext secret.

        Raises:
            InvalidInputError: If a required field is blank or a field is too long.
            StoreUnavailableError: If the store cannot be reached.
        """
        description = self._validate("description", description, required=True)
        location = self._validate("location", location, required=True)
        title = self._validate("title", title, required=False)
        institution = self._validate("institution", institution, required=False)
        problem_type = self._validate("problem_type", problem_type, required=False)

        secret = self._codec.generate_secret()
        fingerprint = self._codec.fingerprint(secret)
        created_at = datetime.now(timezone.utc)

        attempt = 0
        while True:
            attempt += 1
            report = Report(
                id=self._codec.generate_report_id(),
                title=title,
                description=description,
                location=location,
                institution=institution,
                problem_type=problem_type,
                status=ReportStatus.NEW,
                secret_fingerprint=fingerprint,
                created_at=created_at,
            )
            log = self._log_operation(
                "submit",
                report_id=report.id,
                fingerprint=short_fingerprint(fingerprint),
            )
            try:
                await self._report_repo.create(report)
                break
            except DocumentAlreadyExistsError:
                log.warning("report_id_collision", attempt=attempt)
                if attempt >= MAX_ID_ATTEMPTS:
                    raise

        log.info("report_submitted")
        get_metrics_collector().increment_reports_submitted()
        return SubmissionResult(
            report_id=report.id,
            secret=secret,
            created_at=created_at,
        )
