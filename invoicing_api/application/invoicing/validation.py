"""
Explicit input validation for invoicing use cases.

One function per input shape. Each returns the list of field-level
violations; an empty list means the input is valid. Use cases raise
InvalidRequestError when a list is non-empty.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from invoicing_api.application.invoicing.dtos import InvoicePayload
from invoicing_api.domain.invoicing.entities import InvoiceStatus, ServiceName

SERVICE_NAMES = tuple(member.value for member in ServiceName)
STATUSES = tuple(member.value for member in InvoiceStatus)

# Bounds of the NUMERIC(14, 2) amount column.
MAX_AMOUNT = Decimal("1000000000000")
AMOUNT_QUANTUM = Decimal("0.01")

# OFFSET is a signed 64-bit value in PostgreSQL.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class FieldViolation:
    """A single invalid field and the reason it was rejected."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


def validate_invoice_payload(payload: InvoicePayload) -> list[FieldViolation]:
    """Check a create/update body."""
    violations = []

    if payload.service_name not in SERVICE_NAMES:
        violations.append(
            FieldViolation("serviceName", f"must be one of {', '.join(SERVICE_NAMES)}")
        )

    if payload.status not in STATUSES:
        violations.append(FieldViolation("status", f"must be one of {', '.join(STATUSES)}"))

    amount_reason = _check_amount(payload.amount)
    if amount_reason:
        violations.append(FieldViolation("amount", amount_reason))

    if payload.date is None:
        violations.append(FieldViolation("date", "is required"))

    return violations


def validate_invoice_id(value: str) -> list[FieldViolation]:
    """Check that ``value`` is a canonical UUID version 4 string."""
    try:
        parsed = UUID(value)
    except (TypeError, ValueError, AttributeError):
        return [FieldViolation("id", "must be a UUID")]

    if parsed.version != 4 or str(parsed) != value.lower():
        return [FieldViolation("id", "must be a UUID version 4")]
    return []


def validate_list_query(page: int, page_size: int, max_page_size: int) -> list[FieldViolation]:
    """Check raw pagination parameters before defaults are applied."""
    violations = []
    max_page = MAX_OFFSET // max(max_page_size, 1)

    if page < 0:
        violations.append(FieldViolation("page", "must not be negative"))
    elif page > max_page:
        violations.append(FieldViolation("page", f"must not exceed {max_page}"))

    if page_size < 0:
        violations.append(FieldViolation("pageSize", "must not be negative"))
    elif page_size > max_page_size:
        violations.append(FieldViolation("pageSize", f"must not exceed {max_page_size}"))

    return violations


def _check_amount(amount) -> Optional[str]:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return "must be greater than 0"

    if not value.is_finite() or value <= 0:
        return "must be greater than 0"
    if value >= MAX_AMOUNT:
        return f"must be less than {MAX_AMOUNT}"
    if value != value.quantize(AMOUNT_QUANTUM):
        return "must have at most 2 decimal places"
    return None
