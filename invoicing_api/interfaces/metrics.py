"""
Metrics router.

Exposes the Prometheus text exposition of the process registry. Answers
404 when metrics are disabled in settings.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from invoicing_api.core.config import settings

router = APIRouter(tags=["metrics"])

HTTP_404 = 404


@router.get(
    "/metrics",
    response_class=PlainTextResponse,
    summary="Prometheus metrics",
    description="Request counters and latency histograms in Prometheus text format.",
)
def metrics() -> PlainTextResponse:
    if not settings.metrics_enabled:
        raise HTTPException(status_code=HTTP_404, detail="metrics disabled")
    return PlainTextResponse(generate_latest().decode(), media_type=CONTENT_TYPE_LATEST)
