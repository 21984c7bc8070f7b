"""
Use case: Update an invoice.

Input: UpdateInvoiceCommand (raw id, raw payload)
Output: None
Side effects: Overwrites service name, amount and status of one row.
Failure cases: InvalidRequestError, PoolAcquireError, StorageError,
NotFoundError (only when strict writes are enabled).
"""

from uuid import UUID

from invoicing_api.application.invoicing.create_invoice import payload_to_invoice
from invoicing_api.application.invoicing.dtos import UpdateInvoiceCommand
from invoicing_api.application.invoicing.validation import (
    validate_invoice_id,
    validate_invoice_payload,
)
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.errors import InvalidRequestError
from invoicing_api.domain.invoicing.ports import InvoiceRepository


class UpdateInvoiceUseCase:
    """Orchestrates invoice updates.

    The id and body are validated together, so a single log record
    lists every violation.
    """

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def execute(self, ctx: RequestContext, command: UpdateInvoiceCommand) -> None:
        """Run the update invoice use case."""
        violations = validate_invoice_id(command.invoice_id) + validate_invoice_payload(
            command.payload
        )
        if violations:
            raise InvalidRequestError("invalid request body", violations)

        invoice_id = UUID(command.invoice_id)
        invoice = payload_to_invoice(invoice_id, command.payload)
        self._invoice_repo.update_by_id(ctx, invoice_id, invoice)

        ctx.logger.info("Updated invoice %s", invoice_id)
