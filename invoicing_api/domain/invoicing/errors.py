"""
Domain-specific errors for the invoicing bounded context.

Every failure that crosses a layer boundary is one of the InvoiceError
subclasses below. Each carries the HTTP status it maps to, a human
message, a log severity and structured diagnostic fields.
These are translated to HTTP responses and log records at the interface layer.
No framework imports allowed.
"""

import logging
from enum import Enum
from typing import Any, Optional

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500


class Severity(Enum):
    """Log severity attached to an error."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def level(self) -> int:
        """Return the matching ``logging`` level number."""
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


def describe_cause(exc: BaseException) -> dict[str, str]:
    """Return diagnostic fields describing a low-level exception.

    Driver errors wrapped by another library expose the original as
    ``orig``; that one is reported so statements and bound values
    are not copied into logs.
    """
    cause = getattr(exc, "orig", None) or exc
    return {"error": str(cause).strip(), "error_type": type(cause).__name__}


class InvoiceError(Exception):
    """Base error for all invoicing errors.

    Subclasses fix the status code and default severity. Callers may
    override the severity per instance and attach diagnostic fields.
    """

    status_code: int = HTTP_500
    default_severity: Severity = Severity.ERROR

    def __init__(
        self,
        message: str,
        severity: Optional[Severity] = None,
        fields: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.severity = severity or self.default_severity
        self.fields = dict(fields or {})
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"message={self.message!r}, severity={self.severity.value})"
        )


class PoolAcquireError(InvoiceError):
    """Raised when no database connection could be obtained."""

    def __init__(
        self,
        message: str = "failed to acquire connection",
        severity: Optional[Severity] = None,
        fields: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, severity, fields)


class StorageError(InvoiceError):
    """Raised when a statement fails in the storage engine."""


class NotFoundError(InvoiceError):
    """Raised when no invoice matches the requested id."""

    status_code = HTTP_404
    default_severity = Severity.WARN

    def __init__(self, invoice_id: str) -> None:
        super().__init__("invoice not found", fields={"invoice_id": invoice_id})
        self.invoice_id = invoice_id


class MappingError(InvoiceError):
    """Raised when a stored row cannot be converted into an Invoice."""


class InvalidRequestError(InvoiceError):
    """Raised when request input fails validation."""

    status_code = HTTP_400
    default_severity = Severity.WARN

    def __init__(self, message: str, violations: list) -> None:
        super().__init__(
            message,
            fields={"violations": "; ".join(str(v) for v in violations)},
        )
        self.violations = list(violations)
