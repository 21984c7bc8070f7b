"""
Secure HTTP headers middleware.

Stamps every response with restrictive defaults suitable for a JSON API
and echoes the request id so clients can correlate log lines.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

API_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds API security headers and the request id to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in API_SECURITY_HEADERS.items():
            response.headers.setdefault(header_name, header_value)

        context = getattr(request.state, "context", None)
        if context is not None and REQUEST_ID_HEADER not in response.headers:
            request_id = getattr(context.logger, "extra", {}).get("request_id")
            if request_id:
                response.headers[REQUEST_ID_HEADER] = str(request_id)
        return response
