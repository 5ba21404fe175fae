"""Report store adapter over the document store.

Maps Report objects to document records in the ``reports`` collection
and translates document store errors into report errors. Contains no
business logic beyond the transition matrix check on conditional updates.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from structlog import get_logger

from fixwatch.application.ports.document_store import (
    DocumentStoreProtocol,
    Filter,
    Increment,
    Record,
)
from fixwatch.application.ports.report_repository import ReportRepositoryProtocol
from fixwatch.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from fixwatch.domain.errors.document_store import (
    DocumentNotFoundError,
    PreconditionFailedError,
)
from fixwatch.domain.errors.report import ReportNotFoundError
from fixwatch.domain.errors.state_transition import InvalidStateTransitionError
from fixwatch.domain.models.report import Report, ReportStatus, VoteKind

logger = get_logger(__name__)

REPORTS_COLLECTION = "reports"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime | None:
    """Read a stored timestamp.

    Accepts datetimes and ISO-8601 strings. Anything else (including a
    missing value on legacy records) yields None.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def report_to_record(report: Report) -> Record:
    """Serialize a report to a document record."""
    return {
        "id": report.id,
        "title": report.title,
        "description": report.description,
        "location": report.location,
        "institution": report.institution,
        "problem_type": report.problem_type,
        "status": report.status.value,
        "secret_fingerprint": report.secret_fingerprint,
        "approve_votes": report.approve_votes,
        "challenge_votes": report.challenge_votes,
        "created_at": report.created_at,
        "updated_at": report.updated_at,
    }


def record_to_report(record: Record) -> Report:
    """Deserialize a document record to a report."""
    return Report(
        id=record["id"],
        title=record.get("title") or "",
        description=record.get("description") or "",
        location=record.get("location") or "",
        institution=record.get("institution") or "",
        problem_type=record.get("problem_type") or "",
        status=ReportStatus(record.get("status", ReportStatus.NEW.value)),
        secret_fingerprint=record["secret_fingerprint"],
        approve_votes=int(record.get("approve_votes") or 0),
        challenge_votes=int(record.get("challenge_votes") or 0),
        created_at=_parse_timestamp(record.get("created_at")),
        updated_at=_parse_timestamp(record.get("updated_at")),
    )


class DocumentReportRepository(ReportRepositoryProtocol):
    """ReportRepositoryProtocol implementation backed by a document store."""

    def __init__(
        self,
        store: DocumentStoreProtocol,
        collection: str = REPORTS_COLLECTION,
    ) -> None:
        """Initialize the adapter.

        Args:
            store: The document store holding report records.
            collection: Collection name for reports.
        """
        self._store = store
        self._collection = collection

    async def create(self, report: Report) -> None:
        """Store a new report, failing if the id is taken."""
        await self._store.create(self._collection, report.id, report_to_record(report))

    async def get(self, report_id: str) -> Report | None:
        """Retrieve a report by id."""
        record = await self._store.get(self._collection, report_id)
        return record_to_report(record) if record is not None else None

    async def list_excluding_status(self, status: ReportStatus) -> list[Report]:
        """List reports whose status differs from ``status``."""
        records = await self._store.query(
            self._collection, [Filter("status", "!=", status.value)]
        )
        return [record_to_report(r) for r in records]

    async def increment_vote(self, report_id: str, vote_kind: VoteKind) -> Report:
        """Atomically increment one vote counter."""
        try:
            record = await self._store.update_fields(
                self._collection,
                report_id,
                {vote_kind.counter_field: Increment(1), "updated_at": _utc_now()},
            )
        except DocumentNotFoundError:
            raise ReportNotFoundError(report_id) from None
        return record_to_report(record)

    async def transition_status(
        self,
        report_id: str,
        expected_status: ReportStatus,
        new_status: ReportStatus,
    ) -> Report:
        """Set ``new_status`` only if the report is still in ``expected_status``."""
        allowed = expected_status.valid_transitions()
        if new_status not in allowed:
            raise InvalidStateTransitionError(
                report_id=report_id,
                from_status=expected_status,
                to_status=new_status,
                allowed_transitions=sorted(allowed, key=lambda s: s.value),
            )

        try:
            record = await self._store.update_fields(
                self._collection,
                report_id,
                {"status": new_status.value, "updated_at": _utc_now()},
                expected={"status": expected_status.value},
            )
        except DocumentNotFoundError:
            raise ReportNotFoundError(report_id) from None
        except PreconditionFailedError as e:
            logger.info(
                "conditional_status_update_lost",
                report_id=report_id,
                expected_status=expected_status.value,
                actual_status=e.actual,
                new_status=new_status.value,
            )
            raise ConcurrentModificationError(
                report_id=report_id,
                expected_status=expected_status,
                operation=f"transition_to_{new_status.value}",
            ) from None
        return record_to_report(record)

    async def force_status(self, report_id: str, new_status: ReportStatus) -> Report:
        """Set ``new_status`` regardless of the current status."""
        try:
            record = await self._store.update_fields(
                self._collection,
                report_id,
                {"status": new_status.value, "updated_at": _utc_now()},
            )
        except DocumentNotFoundError:
            raise ReportNotFoundError(report_id) from None
        return record_to_report(record)
