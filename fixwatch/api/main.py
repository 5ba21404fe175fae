"""FastAPI application entry point for FixWatch."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from structlog import get_logger

from fixwatch import __version__
from fixwatch.api.middleware.logging_middleware import LoggingMiddleware
from fixwatch.api.middleware.metrics_middleware import MetricsMiddleware
from fixwatch.api.routes.golden_keys import router as golden_keys_router
from fixwatch.api.routes.health import router as health_router
from fixwatch.api.routes.metrics import router as metrics_router
from fixwatch.api.routes.reports import router as reports_router
from fixwatch.api.startup import run_startup
from fixwatch.domain.exceptions import FixWatchError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    run_startup()
    yield


app = FastAPI(
    title="FixWatch API",
    description="Anonymous problem reporting with community verification",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(FixWatchError)
async def fixwatch_error_handler(request: Request, exc: FixWatchError) -> JSONResponse:
    """Render domain errors that escaped a route as problem details."""
    status_code = exc.status_code
    body = exc.to_problem_dict()
    body["instance"] = str(request.url.path)
    logger.error(
        "unhandled_domain_error",
        error_type=type(exc).__name__,
        status_code=status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body,
        media_type="application/problem+json",
    )


app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(reports_router)
app.include_router(golden_keys_router)
