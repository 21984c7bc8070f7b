"""
Use case: Fetch a single invoice.

Input: InvoiceIdQuery
Output: InvoiceResult
Side effects: None (read-only query).
Failure cases: InvalidRequestError, NotFoundError, PoolAcquireError,
StorageError, MappingError.
"""

from uuid import UUID

from invoicing_api.application.invoicing.dtos import InvoiceIdQuery, InvoiceResult
from invoicing_api.application.invoicing.validation import validate_invoice_id
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice
from invoicing_api.domain.invoicing.errors import InvalidRequestError
from invoicing_api.domain.invoicing.ports import InvoiceRepository


def to_result(invoice: Invoice) -> InvoiceResult:
    """Map an Invoice entity to its output DTO."""
    return InvoiceResult(
        id=invoice.id,
        service_name=invoice.service_name.value,
        amount=invoice.amount,
        status=invoice.status.value,
        date=invoice.date,
    )


def parse_invoice_id(raw_id: str) -> UUID:
    """Validate a raw id and return it as a UUID.

    Raises:
        InvalidRequestError: If ``raw_id`` is not a UUID v4.
    """
    violations = validate_invoice_id(raw_id)
    if violations:
        raise InvalidRequestError("invalid invoice id", violations)
    return UUID(raw_id)


class GetInvoiceUseCase:
    """Orchestrates single-invoice lookup."""

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def execute(self, ctx: RequestContext, query: InvoiceIdQuery) -> InvoiceResult:
        """Run the get invoice use case.

        Raises:
            NotFoundError: If no invoice has that id.
        """
        invoice_id = parse_invoice_id(query.invoice_id)
        return to_result(self._invoice_repo.get_by_id(ctx, invoice_id))
