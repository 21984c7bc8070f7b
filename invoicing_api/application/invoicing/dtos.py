"""
Data Transfer Objects for the invoicing application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class InvoicePayload:
    """Raw invoice fields as received from the client.

    Values are unvalidated: enums arrive as plain strings.

    Attributes:
        service_name: Billed service, expected DMP or SSP.
        amount: Invoice amount, expected > 0.
        status: Payment status, expected PAID, UNPAID or PENDING.
        date: Client-supplied date. Required but discarded on write.
    """

    service_name: str
    amount: Decimal
    status: str
    date: Optional[datetime]


@dataclass(frozen=True)
class CreateInvoiceCommand:
    """Input DTO for creating an invoice."""

    payload: InvoicePayload


@dataclass(frozen=True)
class UpdateInvoiceCommand:
    """Input DTO for updating an invoice.

    Attributes:
        invoice_id: Raw id from the URL path.
        payload: New invoice fields.
    """

    invoice_id: str
    payload: InvoicePayload


@dataclass(frozen=True)
class ListInvoicesQuery:
    """Input DTO for listing invoices.

    Attributes:
        page: 1-indexed page; 0 means "first page".
        page_size: Rows per page; 0 means "default page size".
        search: Full-text term; empty means no filter.
    """

    page: int = 0
    page_size: int = 0
    search: str = ""


@dataclass(frozen=True)
class InvoiceIdQuery:
    """Input DTO for single-invoice operations (get, delete)."""

    invoice_id: str


@dataclass(frozen=True)
class InvoiceResult:
    """Output DTO for a stored invoice."""

    id: UUID
    service_name: str
    amount: Decimal
    status: str
    date: datetime
