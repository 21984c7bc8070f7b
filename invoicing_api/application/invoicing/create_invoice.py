"""
Use case: Create an invoice.

Input: CreateInvoiceCommand (raw payload)
Output: UUID of the new invoice
Side effects: Inserts one row into storage.
Failure cases: InvalidRequestError, PoolAcquireError, StorageError.
"""

from decimal import Decimal
from uuid import UUID, uuid4

from invoicing_api.application.invoicing.dtos import CreateInvoiceCommand, InvoicePayload
from invoicing_api.application.invoicing.validation import validate_invoice_payload
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice, InvoiceStatus, ServiceName
from invoicing_api.domain.invoicing.errors import InvalidRequestError
from invoicing_api.domain.invoicing.ports import InvoiceRepository


def payload_to_invoice(invoice_id: UUID, payload: InvoicePayload) -> Invoice:
    """Build an Invoice from an already validated payload."""
    return Invoice(
        id=invoice_id,
        service_name=ServiceName(payload.service_name),
        amount=Decimal(str(payload.amount)),
        status=InvoiceStatus(payload.status),
        date=payload.date,
    )


class CreateInvoiceUseCase:
    """Orchestrates invoice creation.

    Validates the payload, assigns a fresh UUID v4 and hands the
    invoice to the repository. The client's date travels along but
    the repository replaces it with the insertion time.
    """

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def execute(self, ctx: RequestContext, command: CreateInvoiceCommand) -> UUID:
        """Run the create invoice use case.

        Returns:
            The id assigned to the new invoice.

        Raises:
            InvalidRequestError: If the payload fails validation.
        """
        violations = validate_invoice_payload(command.payload)
        if violations:
            raise InvalidRequestError("invalid request body", violations)

        invoice = payload_to_invoice(uuid4(), command.payload)
        self._invoice_repo.create(ctx, invoice)

        ctx.logger.info("Created invoice %s", invoice.id)
        return invoice.id
