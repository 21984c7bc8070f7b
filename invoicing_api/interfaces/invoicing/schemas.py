"""
Pydantic schemas for the invoicing API request/response bodies.

These schemas only parse JSON into typed values and define the wire
shape (camelCase keys). Business constraints are checked by the
explicit validators in the application layer, not here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Amounts are stored as Decimal but rendered as JSON numbers.
JsonAmount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InvoiceRequest(CamelModel):
    """Request body for creating or updating an invoice.

    Attributes:
        service_name: Billed service (DMP or SSP).
        amount: Invoice amount, greater than 0 with at most 2 decimals.
        status: PAID, UNPAID or PENDING.
        date: Required, but the stored date is always the server's
            insertion time.
    """

    service_name: str = Field(..., description="Billed service: DMP or SSP")
    amount: Decimal = Field(..., description="Invoice amount, greater than 0")
    status: str = Field(..., description="Payment status: PAID, UNPAID or PENDING")
    date: Optional[datetime] = Field(..., description="Invoice date (replaced by server time)")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_literal(cls, value):
        # JSON numbers arrive as floats; keep the digits the client sent.
        if isinstance(value, float):
            return Decimal(str(value))
        return value


class InvoiceItem(CamelModel):
    """A single invoice in a response."""

    id: UUID
    service_name: str
    amount: JsonAmount
    status: str
    date: datetime


class HealthResponse(BaseModel):
    """Response schema for health endpoints."""

    status: str
    version: str
