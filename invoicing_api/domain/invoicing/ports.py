"""
Port interfaces (ABCs) for the invoicing bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice


class InvoiceRepository(ABC):
    """Port for persisting and retrieving invoices.

    Callers guarantee that ids are valid UUIDs, enums are in range,
    amounts are positive and page/page_size are positive integers.
    Implementations do not re-validate these.

    Failures are raised as InvoiceError subclasses:
    PoolAcquireError, StorageError, NotFoundError, MappingError.
    """

    @abstractmethod
    def create(self, ctx: RequestContext, invoice: Invoice) -> None:
        """Insert a new invoice, stamping it with the server's current UTC time."""
        raise NotImplementedError

    @abstractmethod
    def list_invoices(
        self, ctx: RequestContext, page: int, page_size: int, search: str = ""
    ) -> list[Invoice]:
        """Return one page of invoices, optionally full-text filtered.

        Args:
            ctx: Request context (logger, deadline).
            page: 1-indexed page number.
            page_size: Maximum number of invoices per page.
            search: Full-text search term; empty means no filter.

        Returns:
            List of invoices, empty when nothing matches.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, ctx: RequestContext, invoice_id: UUID) -> Invoice:
        """Return the invoice with the given id or raise NotFoundError."""
        raise NotImplementedError

    @abstractmethod
    def update_by_id(self, ctx: RequestContext, invoice_id: UUID, invoice: Invoice) -> None:
        """Overwrite service name, amount and status. The date is left untouched."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, ctx: RequestContext, invoice_id: UUID) -> None:
        """Delete the invoice with the given id."""
        raise NotImplementedError

    @abstractmethod
    def ping(self, ctx: RequestContext) -> None:
        """Check that storage is reachable. Raises InvoiceError if not."""
        raise NotImplementedError
