"""
Use case: Delete an invoice.

Input: InvoiceIdQuery
Output: None
Side effects: Removes at most one row.
Failure cases: InvalidRequestError, PoolAcquireError, StorageError,
NotFoundError (only when strict writes are enabled).
"""

from invoicing_api.application.invoicing.dtos import InvoiceIdQuery
from invoicing_api.application.invoicing.get_invoice import parse_invoice_id
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.ports import InvoiceRepository


class DeleteInvoiceUseCase:
    """Orchestrates invoice deletion.

    Deleting an id that does not exist succeeds unless the repository
    was built with strict writes.
    """

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    def execute(self, ctx: RequestContext, query: InvoiceIdQuery) -> None:
        invoice_id = parse_invoice_id(query.invoice_id)
        self._invoice_repo.delete_by_id(ctx, invoice_id)
        ctx.logger.info("Deleted invoice %s", invoice_id)
