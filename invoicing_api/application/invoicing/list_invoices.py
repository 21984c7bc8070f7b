"""
Use case: List invoices page by page.

Input: ListInvoicesQuery (page, page_size, search)
Output: list[InvoiceResult]
Side effects: None (read-only query).
Failure cases: InvalidRequestError, PoolAcquireError, StorageError, MappingError.
"""

from invoicing_api.application.invoicing.dtos import InvoiceResult, ListInvoicesQuery
from invoicing_api.application.invoicing.get_invoice import to_result
from invoicing_api.application.invoicing.validation import validate_list_query
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.errors import InvalidRequestError
from invoicing_api.domain.invoicing.ports import InvoiceRepository

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500


class ListInvoicesUseCase:
    """Orchestrates paginated invoice listing.

    Normalizes page 0 to the first page and page size 0 to the default
    before calling the repository, which only accepts positive values.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def execute(self, ctx: RequestContext, query: ListInvoicesQuery) -> list[InvoiceResult]:
        """Run the list invoices use case.

        Args:
            ctx: Request context.
            query: Raw pagination and search parameters.

        Returns:
            Invoices on the requested page, possibly empty.
        """
        violations = validate_list_query(query.page, query.page_size, self._max_page_size)
        if violations:
            raise InvalidRequestError("invalid request query", violations)

        page = query.page or DEFAULT_PAGE
        page_size = query.page_size or self._default_page_size
        search = query.search.strip()

        invoices = self._invoice_repo.list_invoices(ctx, page, page_size, search)
        return [to_result(invoice) for invoice in invoices]
