"""
Prometheus request metrics.

Counts every HTTP request by method, matched route template and status
code, and records its latency. Route templates (``/invoices/{invoice_id}``)
keep label cardinality bounded; requests that match no route share the
``unmatched`` label.
"""

import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

UNMATCHED_ROUTE = "unmatched"

HTTP_REQUESTS_TOTAL = Counter(
    "invoicing_http_requests_total",
    "HTTP requests handled",
    labelnames=("method", "route", "status"),
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "invoicing_http_request_duration_seconds",
    "HTTP request latency in seconds",
    labelnames=("method", "route"),
)


def route_label(request: Request) -> str:
    """Return the path template of the route that served ``request``."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def observe_request(method: str, route: str, status: int, elapsed: float) -> None:
    HTTP_REQUESTS_TOTAL.labels(method=method, route=route, status=str(status)).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(method=method, route=route).observe(elapsed)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records one counter sample and one latency sample per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors become a 500 in the outer server error middleware.
            observe_request(
                request.method, route_label(request), 500, time.perf_counter() - started
            )
            raise

        observe_request(
            request.method,
            route_label(request),
            response.status_code,
            time.perf_counter() - started,
        )
        return response
