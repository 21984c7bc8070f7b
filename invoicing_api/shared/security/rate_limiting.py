"""
Rate limiting configuration and setup.

Uses slowapi to enforce a per-client request budget on every route.
"""

from fastapi import FastAPI
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import Response

from invoicing_api.core.config import settings

HTTP_429 = 429

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> Response:
    """Answer rate-limited requests with an empty 429.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        An empty 429 response carrying a Retry-After header.
    """
    return Response(status_code=HTTP_429, headers={"Retry-After": "60"})


def install_rate_limiting(app: FastAPI, rate_limiter: Limiter = limiter) -> None:
    """Attach ``rate_limiter`` to ``app`` so its default limits apply to every route."""
    app.state.limiter = rate_limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
