"""Metrics endpoint for Prometheus scraping.

Exposes HTTP and lifecycle counters in Prometheus exposition format.
Counters never carry report ids, secrets or fingerprints as labels.
"""

from fastapi import APIRouter, Response

from fixwatch.infrastructure.monitoring.metrics import (
    METRICS_CONTENT_TYPE,
    generate_metrics,
)

router = APIRouter(prefix="/v1", tags=["metrics"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    description="Returns metrics in Prometheus exposition format for scraping.",
    response_class=Response,
    responses={
        200: {
            "description": "Metrics in Prometheus format",
            "content": {"text/plain": {}},
        }
    },
)
async def get_metrics() -> Response:
    """Get metrics in Prometheus format. Uptime is refreshed per scrape."""
    return Response(content=generate_metrics(), media_type=METRICS_CONTENT_TYPE)
