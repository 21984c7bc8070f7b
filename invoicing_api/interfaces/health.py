"""
Health check router.

Liveness returns application status and version without touching
storage. Readiness additionally runs a liveness query through the pool.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from invoicing_api.core.config import settings
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.errors import InvoiceError
from invoicing_api.domain.invoicing.ports import InvoiceRepository
from invoicing_api.interfaces.invoicing.dependencies import (
    get_invoice_repository,
    get_request_context,
)
from invoicing_api.interfaces.invoicing.schemas import HealthResponse

router = APIRouter(tags=["health"])

HTTP_503 = 503


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)


@router.get(
    "/health/ready",
    response_model=HealthResponse,
    responses={HTTP_503: {"model": HealthResponse}},
    summary="Readiness check",
    description="Returns 200 when the database answers, 503 otherwise.",
)
def readiness_check(
    ctx: RequestContext = Depends(get_request_context),
    repo: InvoiceRepository = Depends(get_invoice_repository),
):
    """Report whether storage is reachable."""
    try:
        repo.ping(ctx)
    except InvoiceError as exc:
        ctx.logger.warning("readiness check failed: %s", exc.message)
        return JSONResponse(
            status_code=HTTP_503,
            content={"status": "unavailable", "version": settings.version},
        )
    return HealthResponse(status="ok", version=settings.version)
