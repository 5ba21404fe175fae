"""Report API routes.

FastAPI router for the report lifecycle: submission, status lookup,
resolution, confirm-fix, voting and the public dashboard.

Error responses are RFC 7807 problem details:
- 400 InvalidInput
- 401 secret mismatch on confirm-fix
- 404 unknown report
- 409 operation attempted from the wrong status
- 503 store unavailable

Developer Golden Rules:
1. NEVER ECHO SECRETS - Only submission returns the secret, once
2. VOTE THEN JUDGE - The judge runs as a separate step after a counted vote
3. FAIL LOUD - Store failures surface as 503, never retried here
"""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request
from structlog import get_logger

from fixwatch.api.dependencies.reports import (
    get_dashboard_service,
    get_report_lifecycle_service,
    get_report_submission_service,
    get_threshold_judge_service,
)
from fixwatch.api.models.report import (
    ProblemDetailResponse,
    ReportListItem,
    ReportResponse,
    SecretRequest,
    SubmitReportRequest,
    SubmitReportResponse,
    VoteRequest,
    VoteResponse,
)
from fixwatch.application.ports.report_lifecycle import JudgmentResult
from fixwatch.application.services.dashboard_service import DashboardService
from fixwatch.application.services.report_lifecycle_service import (
    ReportLifecycleService,
)
from fixwatch.application.services.report_submission_service import (
    ReportSubmissionService,
)
from fixwatch.application.services.threshold_judge_service import (
    ThresholdJudgeService,
)
from fixwatch.domain.errors import (
    DocumentAlreadyExistsError,
    GoldenKeyForbiddenError,
    ReportError,
    StoreUnavailableError,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/reports", tags=["reports"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ProblemDetailResponse, "description": "Invalid input"},
    404: {"model": ProblemDetailResponse, "description": "Report not found"},
    503: {"model": ProblemDetailResponse, "description": "Store unavailable"},
}


def raise_problem(
    error: ReportError | GoldenKeyForbiddenError | StoreUnavailableError,
    request: Request,
) -> NoReturn:
    """Translate a domain error into an RFC 7807 HTTPException."""
    detail = error.to_problem_dict()
    detail["instance"] = str(request.url.path)
    if isinstance(error, StoreUnavailableError):
        logger.error(
            "store_unavailable",
            operation=error.operation,
            reason=error.reason,
            path=request.url.path,
        )
    raise HTTPException(status_code=error.status_code, detail=detail) from None


@router.post(
    "",
    response_model=SubmitReportResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Submit a report",
    description=(
        "Flag a problem anonymously. The response carries the reporter's "
        "secret, which is shown only once and is needed to confirm the fix."
    ),
)
async def submit_report(
    request_data: SubmitReportRequest,
    request: Request,
    service: ReportSubmissionService = Depends(get_report_submission_service),
) -> SubmitReportResponse:
    """Submit a new report and return its id and secret."""
    try:
        result = await service.submit(
            description=request_data.description,
            location=request_data.location,
            title=request_data.title,
            institution=request_data.institution,
            problem_type=request_data.problem_type,
        )
    except (ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    except DocumentAlreadyExistsError:
        raise HTTPException(
            status_code=503,
            detail={
                "type": "urn:fixwatch:report:id-allocation-failed",
                "title": "Report Id Allocation Failed",
                "status": 503,
                "detail": "Could not allocate a report id, please retry",
                "instance": str(request.url.path),
            },
        ) from None

    return SubmitReportResponse(
        report_id=result.report_id,
        secret=result.secret,
        created_at=result.created_at,
    )


@router.get(
    "",
    response_model=list[ReportListItem],
    responses={503: _ERROR_RESPONSES[503]},
    summary="List reports for the public dashboard",
    description="All reports except Junk, newest first.",
)
async def list_reports(
    request: Request,
    service: DashboardService = Depends(get_dashboard_service),
) -> list[ReportListItem]:
    """List every non-Junk report."""
    try:
        views = await service.list_reports()
    except StoreUnavailableError as e:
        raise_problem(e, request)
    return [ReportListItem.from_view(v) for v in views]


@router.get(
    "/{report_id}",
    response_model=ReportResponse,
    responses=_ERROR_RESPONSES,
    summary="Check the status of a report",
)
async def get_report(
    report_id: str,
    request: Request,
    service: ReportLifecycleService = Depends(get_report_lifecycle_service),
) -> ReportResponse:
    """Look up a report by id (case-insensitive)."""
    try:
        report = await service.get_report(report_id)
    except (ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    return ReportResponse.from_report(report)


@router.post(
    "/{report_id}/resolve",
    response_model=ReportResponse,
    responses={
        **_ERROR_RESPONSES,
        409: {"model": ProblemDetailResponse, "description": "Report is not New"},
    },
    summary="Mark a report as resolved",
)
async def resolve_report(
    report_id: str,
    request: Request,
    service: ReportLifecycleService = Depends(get_report_lifecycle_service),
) -> ReportResponse:
    """Move a New report to Resolved."""
    try:
        report = await service.mark_resolved(report_id)
    except (ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    return ReportResponse.from_report(report)


@router.post(
    "/{report_id}/confirm-fix",
    response_model=ReportResponse,
    responses={
        **_ERROR_RESPONSES,
        401: {"model": ProblemDetailResponse, "description": "Secret mismatch"},
        409: {
            "model": ProblemDetailResponse,
            "description": "Report is not Resolved",
        },
    },
    summary="Open a resolved report for public review",
    description="Only the reporter, holding the report's secret, may do this.",
)
async def confirm_fix(
    report_id: str,
    request_data: SecretRequest,
    request: Request,
    service: ReportLifecycleService = Depends(get_report_lifecycle_service),
) -> ReportResponse:
    """Move a Resolved report to InReview after checking the secret."""
    try:
        report = await service.confirm_fix(report_id, request_data.secret)
    except (ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    return ReportResponse.from_report(report)


@router.post(
    "/{report_id}/votes",
    response_model=VoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Vote on a report",
    description=(
        "Approve or challenge a fix. After the vote is counted the "
        "threshold judge decides whether the report is confirmed or contested."
    ),
)
async def cast_vote(
    report_id: str,
    request_data: VoteRequest,
    request: Request,
    lifecycle: ReportLifecycleService = Depends(get_report_lifecycle_service),
    judge: ThresholdJudgeService = Depends(get_threshold_judge_service),
) -> VoteResponse:
    """Count a vote, then run the threshold judge for the report."""
    try:
        tally = await lifecycle.cast_vote(report_id, request_data.vote.value)
    except (ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)

    judgment: JudgmentResult | None = None
    try:
        judgment = await judge.judge(tally.report_id)
    except Exception as e:
        # The vote is counted. The next judge call retries the decision or
        # mints a key left missing after a Confirmed write.
        logger.error(
            "judge_failed_after_vote",
            report_id=tally.report_id,
            error=str(e),
            error_type=type(e).__name__,
        )

    return VoteResponse.from_tally(tally, judgment)
