"""
FastAPI router for the invoicing bounded context.

All routes delegate to use cases. No business logic here.
Bodies are parsed by Pydantic schemas; business rules are validated
by the use cases. Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from invoicing_api.application.invoicing.create_invoice import CreateInvoiceUseCase
from invoicing_api.application.invoicing.delete_invoice import DeleteInvoiceUseCase
from invoicing_api.application.invoicing.dtos import (
    CreateInvoiceCommand,
    InvoiceIdQuery,
    InvoicePayload,
    InvoiceResult,
    ListInvoicesQuery,
    UpdateInvoiceCommand,
)
from invoicing_api.application.invoicing.get_invoice import GetInvoiceUseCase
from invoicing_api.application.invoicing.list_invoices import ListInvoicesUseCase
from invoicing_api.application.invoicing.update_invoice import UpdateInvoiceUseCase
from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.interfaces.invoicing.dependencies import (
    get_create_invoice_use_case,
    get_delete_invoice_use_case,
    get_get_invoice_use_case,
    get_list_invoices_use_case,
    get_request_context,
    get_update_invoice_use_case,
)
from invoicing_api.interfaces.invoicing.schemas import InvoiceItem, InvoiceRequest

router = APIRouter(prefix="/invoices", tags=["invoices"])

ERROR_RESPONSES = {
    400: {"description": "Invalid request"},
    500: {"description": "Storage failure"},
}


def _to_payload(body: InvoiceRequest) -> InvoicePayload:
    return InvoicePayload(
        service_name=body.service_name,
        amount=body.amount,
        status=body.status,
        date=body.date,
    )


def _to_item(result: InvoiceResult) -> InvoiceItem:
    return InvoiceItem(
        id=result.id,
        service_name=result.service_name,
        amount=result.amount,
        status=result.status,
        date=result.date,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Create an invoice",
    description="Store a new invoice. The id and date are assigned by the server.",
)
def create_invoice(
    request: Request,
    body: InvoiceRequest,
    ctx: RequestContext = Depends(get_request_context),
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> Response:
    """Create an invoice. The new resource path is returned in Location."""
    invoice_id = use_case.execute(ctx, CreateInvoiceCommand(payload=_to_payload(body)))
    ctx.logger.info("successfully finished")
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"{request.url.path.rstrip('/')}/{invoice_id}"},
    )


@router.get(
    "",
    response_model=list[InvoiceItem],
    responses=ERROR_RESPONSES,
    summary="List invoices",
    description="Page through invoices, optionally filtered by a full-text search term.",
)
def list_invoices(
    page: int = Query(0, description="1-indexed page; 0 or absent means the first page"),
    page_size: int = Query(0, alias="pageSize", description="Rows per page; 0 or absent means 50"),
    search: str = Query("", description="Full-text term matched against id and service name"),
    ctx: RequestContext = Depends(get_request_context),
    use_case: ListInvoicesUseCase = Depends(get_list_invoices_use_case),
) -> list[InvoiceItem]:
    """List invoices page by page."""
    results = use_case.execute(
        ctx, ListInvoicesQuery(page=page, page_size=page_size, search=search)
    )
    ctx.logger.info("successfully finished")
    return [_to_item(r) for r in results]


@router.get(
    "/{invoice_id}",
    response_model=InvoiceItem,
    responses={**ERROR_RESPONSES, 404: {"description": "Invoice not found"}},
    summary="Get an invoice",
)
def get_invoice(
    invoice_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: GetInvoiceUseCase = Depends(get_get_invoice_use_case),
) -> InvoiceItem:
    """Fetch one invoice by id."""
    result = use_case.execute(ctx, InvoiceIdQuery(invoice_id=invoice_id))
    ctx.logger.info("successfully finished")
    return _to_item(result)


@router.put(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Update an invoice",
    description="Overwrite service name, amount and status. The stored date never changes.",
)
def update_invoice(
    invoice_id: str,
    body: InvoiceRequest,
    ctx: RequestContext = Depends(get_request_context),
    use_case: UpdateInvoiceUseCase = Depends(get_update_invoice_use_case),
) -> Response:
    """Update one invoice by id."""
    use_case.execute(
        ctx, UpdateInvoiceCommand(invoice_id=invoice_id, payload=_to_payload(body))
    )
    ctx.logger.info("successfully finished")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
    summary="Delete an invoice",
)
def delete_invoice(
    invoice_id: str,
    ctx: RequestContext = Depends(get_request_context),
    use_case: DeleteInvoiceUseCase = Depends(get_delete_invoice_use_case),
) -> Response:
    """Delete one invoice by id."""
    use_case.execute(ctx, InvoiceIdQuery(invoice_id=invoice_id))
    ctx.logger.info("successfully finished")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
