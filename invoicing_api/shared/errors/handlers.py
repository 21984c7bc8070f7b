"""
Centralized error handlers for FastAPI.

Translates any error that escapes a route into one log record and a
terminal HTTP status. Error responses have an empty body; details go
to the log only.

Dispatch order:
    1. InvoiceError: logged at its own severity with its fields,
       answered with its own status code.
    2. Framework HTTP errors: status code passed through, not logged.
    3. Request parsing errors: 400, logged as a warning.
    4. Anything else: 500, logged as an error with the traceback.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from invoicing_api.domain.invoicing.errors import HTTP_400, HTTP_500, InvoiceError
from invoicing_api.shared.logging import render_fields

logger = logging.getLogger(__name__)


def request_logger(request: Request):
    """Return the logger bound to this request, or the module logger.

    Routes store their RequestContext on ``request.state.context``;
    errors raised before that happens fall back to the module logger.
    """
    context = getattr(request.state, "context", None)
    if context is None:
        return logger
    return context.logger


def log_invoice_error(log, exc: InvoiceError) -> None:
    """Emit one record for ``exc`` at its severity, fields included."""
    if exc.fields:
        log.log(exc.severity.level, "%s | %s", exc.message, render_fields(exc.fields))
    else:
        log.log(exc.severity.level, "%s", exc.message)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error translators on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(InvoiceError)
    async def handle_invoice_error(request: Request, exc: InvoiceError) -> Response:
        """Log at the carried severity and answer with the carried status."""
        log_invoice_error(request_logger(request), exc)
        return Response(status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        _request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Pass framework status codes through unchanged."""
        return Response(status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Reject requests whose body or query could not be parsed."""
        locations = ", ".join(
            ".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()
        )
        request_logger(request).warning("invalid request | fields=%s", locations)
        return Response(status_code=HTTP_400)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unrecognized errors. Never exposes internals."""
        request_logger(request).error(
            "Unexpected error: %s", type(exc).__name__, exc_info=exc
        )
        return Response(status_code=HTTP_500)
