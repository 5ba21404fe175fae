"""Golden-key override routes.

Holders of a golden key may sponsor a report (force Vetted) or veto it
(force Junk) from any status. Every successful use is written to the
key action log.

Error responses:
- 403 the secret does not hold a golden key
- 404 unknown report
- 503 store unavailable
"""

from fastapi import APIRouter, Depends, Request

from fixwatch.api.dependencies.reports import get_golden_key_authority_service
from fixwatch.api.models.report import (
    KeyActionResponse,
    ProblemDetailResponse,
    SecretRequest,
)
from fixwatch.api.routes.reports import raise_problem
from fixwatch.application.services.golden_key_authority_service import (
    GoldenKeyAuthorityService,
)
from fixwatch.domain.errors import (
    GoldenKeyForbiddenError,
    ReportError,
    StoreUnavailableError,
)

router = APIRouter(prefix="/v1/reports", tags=["golden-keys"])

_KEY_RESPONSES: dict[int | str, dict[str, object]] = {
    403: {"model": ProblemDetailResponse, "description": "No golden key"},
    404: {"model": ProblemDetailResponse, "description": "Report not found"},
    503: {"model": ProblemDetailResponse, "description": "Store unavailable"},
}


@router.post(
    "/{report_id}/sponsor",
    response_model=KeyActionResponse,
    responses=_KEY_RESPONSES,
    summary="Sponsor a report with a golden key",
)
async def sponsor_report(
    report_id: str,
    request_data: SecretRequest,
    request: Request,
    authority: GoldenKeyAuthorityService = Depends(get_golden_key_authority_service),
) -> KeyActionResponse:
    """Force a report to Vetted."""
    try:
        result = await authority.sponsor(report_id, request_data.secret)
    except (GoldenKeyForbiddenError, ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    return KeyActionResponse.from_result(result)


@router.post(
    "/{report_id}/veto",
    response_model=KeyActionResponse,
    responses=_KEY_RESPONSES,
    summary="Veto a report with a golden key",
)
async def veto_report(
    report_id: str,
    request_data: SecretRequest,
    request: Request,
    authority: GoldenKeyAuthorityService = Depends(get_golden_key_authority_service),
) -> KeyActionResponse:
    """Force a report to Junk."""
    try:
        result = await authority.veto(report_id, request_data.secret)
    except (GoldenKeyForbiddenError, ReportError, StoreUnavailableError) as e:
        raise_problem(e, request)
    return KeyActionResponse.from_result(result)
