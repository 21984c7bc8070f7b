"""
Domain entities for the invoicing bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class ServiceName(Enum):
    """Service an invoice is billed for."""

    DMP = "DMP"
    SSP = "SSP"


class InvoiceStatus(Enum):
    """Payment status of an invoice."""

    PAID = "PAID"
    UNPAID = "UNPAID"
    PENDING = "PENDING"


@dataclass(frozen=True)
class Invoice:
    """A single service invoice.

    The id is assigned by the server on creation and never changes.
    The date is the server's UTC time at insertion; any client-supplied
    date is discarded by the write path.
    """

    id: UUID
    service_name: ServiceName
    amount: Decimal
    status: InvoiceStatus
    date: datetime
