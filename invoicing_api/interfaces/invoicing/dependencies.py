"""
Dependency injection for the invoicing bounded context.

Provides FastAPI dependency functions that wire the repository held on
``app.state`` into use cases via constructor injection, and build the
per-request context every repository call receives.
"""

from uuid import uuid4

from fastapi import Depends, Request

from invoicing_api.application.invoicing.create_invoice import CreateInvoiceUseCase
from invoicing_api.application.invoicing.delete_invoice import DeleteInvoiceUseCase
from invoicing_api.application.invoicing.get_invoice import GetInvoiceUseCase
from invoicing_api.application.invoicing.list_invoices import ListInvoicesUseCase
from invoicing_api.application.invoicing.update_invoice import UpdateInvoiceUseCase
from invoicing_api.core.config import settings
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.ports import InvoiceRepository
from invoicing_api.shared.logging import get_context_logger
from invoicing_api.shared.security.headers import REQUEST_ID_HEADER


def get_invoice_repository(request: Request) -> InvoiceRepository:
    """Return the repository wired onto the application at startup."""
    return request.app.state.invoice_repository


def get_request_context(request: Request) -> RequestContext:
    """Build the request context and remember it on ``request.state``.

    The logger is bound with the request id and the route's endpoint
    name. Storing the context on the request lets the error translator
    log through the same logger.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    endpoint = request.scope.get("endpoint")
    method = getattr(endpoint, "__name__", request.url.path)

    ctx = RequestContext.with_timeout(
        logger=get_context_logger("invoicing_api.requests", request_id=request_id, method=method),
        timeout_seconds=settings.request_timeout_seconds,
    )
    request.state.context = ctx
    return ctx


def get_create_invoice_use_case(
    repo: InvoiceRepository = Depends(get_invoice_repository),
) -> CreateInvoiceUseCase:
    """Build CreateInvoiceUseCase with its repository."""
    return CreateInvoiceUseCase(invoice_repo=repo)


def get_list_invoices_use_case(
    repo: InvoiceRepository = Depends(get_invoice_repository),
) -> ListInvoicesUseCase:
    """Build ListInvoicesUseCase with its repository and paging limits."""
    return ListInvoicesUseCase(
        invoice_repo=repo,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def get_get_invoice_use_case(
    repo: InvoiceRepository = Depends(get_invoice_repository),
) -> GetInvoiceUseCase:
    """Build GetInvoiceUseCase with its repository."""
    return GetInvoiceUseCase(invoice_repo=repo)


def get_update_invoice_use_case(
    repo: InvoiceRepository = Depends(get_invoice_repository),
) -> UpdateInvoiceUseCase:
    """Build UpdateInvoiceUseCase with its repository."""
    return UpdateInvoiceUseCase(invoice_repo=repo)


def get_delete_invoice_use_case(
    repo: InvoiceRepository = Depends(get_invoice_repository),
) -> DeleteInvoiceUseCase:
    """Build DeleteInvoiceUseCase with its repository."""
    return DeleteInvoiceUseCase(invoice_repo=repo)
