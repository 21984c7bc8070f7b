"""
Adapter: Invoice repository.

Implements InvoiceRepository port against the PostgreSQL ``invoices`` table.
Every operation borrows one connection from the pool for its duration and
translates SQLAlchemy failures into the invoicing error taxonomy.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice, InvoiceStatus, ServiceName
from invoicing_api.domain.invoicing.errors import (
    MappingError,
    NotFoundError,
    Severity,
    StorageError,
    describe_cause,
)
from invoicing_api.domain.invoicing.ports import InvoiceRepository
from invoicing_api.infrastructure.db.pool import ConnectionPool

INVOICE_COLUMNS = "id, service_name, amount, status, date"

INSERT_INVOICE = text(
    """
    INSERT INTO invoices (id, service_name, amount, status, date)
    VALUES (:id, :service_name, :amount, :status, :date)
    """
)

SELECT_INVOICE_BY_ID = text(
    f"""
    SELECT {INVOICE_COLUMNS}
    FROM invoices
    WHERE id = :id
    """
)

UPDATE_INVOICE_BY_ID = text(
    """
    UPDATE invoices
    SET service_name = :service_name, amount = :amount, status = :status
    WHERE id = :id
    """
)

DELETE_INVOICE_BY_ID = text("DELETE FROM invoices WHERE id = :id")

SEARCH_PREDICATE = (
    "to_tsvector('simple', id::text || ' ' || service_name) "
    "@@ plainto_tsquery('simple', :search)"
)


def build_list_query(page: int, page_size: int, search: str = "") -> tuple[TextClause, dict[str, Any]]:
    """Build the paginated list statement and its bind parameters.

    With a search term the statement gets a full-text WHERE clause;
    without one there is no WHERE clause at all. Rows are ordered by
    insertion time, then id, so pages are stable.

    Args:
        page: 1-indexed page number.
        page_size: Rows per page.
        search: Full-text search term, empty for no filter.

    Returns:
        The statement and its parameters.
    """
    query = f"SELECT {INVOICE_COLUMNS} FROM invoices"
    params: dict[str, Any] = {}

    if search:
        query += f" WHERE {SEARCH_PREDICATE}"
        params["search"] = search

    query += " ORDER BY date ASC, id ASC LIMIT :limit OFFSET :offset"
    params["limit"] = page_size
    params["offset"] = (page - 1) * page_size

    return text(query), params


def row_to_invoice(row: Mapping[str, Any]) -> Invoice:
    """Convert a result row into an Invoice.

    Raises:
        MappingError: A column is missing or holds a value outside the domain.
    """
    try:
        return Invoice(
            id=row["id"] if isinstance(row["id"], UUID) else UUID(str(row["id"])),
            service_name=ServiceName(row["service_name"]),
            amount=Decimal(str(row["amount"])),
            status=InvoiceStatus(row["status"]),
            date=_as_utc(row["date"]),
        )
    except (KeyError, ValueError, TypeError, ArithmeticError) as exc:
        raise MappingError("failed to collect invoice", fields=describe_cause(exc)) from exc


def _as_utc(value: datetime) -> datetime:
    if not isinstance(value, datetime):
        raise TypeError(f"date column holds {type(value).__name__}, expected datetime")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostgresInvoiceRepository(InvoiceRepository):
    """PostgreSQL implementation of the invoice repository.

    Stateless apart from the pool handle, so one instance is shared by
    every request.
    """

    def __init__(self, pool: ConnectionPool, strict_writes: bool = False) -> None:
        """Initialize the repository.

        Args:
            pool: Connection pool to borrow connections from.
            strict_writes: Raise NotFoundError when an update or delete
                matches no row instead of treating it as success.
        """
        self._pool = pool
        self._strict_writes = strict_writes

    def create(self, ctx: RequestContext, invoice: Invoice) -> None:
        """Insert an invoice stamped with the current UTC time.

        The date carried by ``invoice`` is ignored.
        """
        with self._pool.acquire(
            ctx, failure="failed to create invoice", severity=Severity.WARN
        ) as conn:
            self._execute(
                conn,
                INSERT_INVOICE,
                {
                    "id": str(invoice.id),
                    "service_name": invoice.service_name.value,
                    "amount": invoice.amount,
                    "status": invoice.status.value,
                    "date": _utcnow(),
                },
                failure="failed to create invoice",
                severity=Severity.WARN,
            )
        ctx.logger.debug("Inserted invoice %s", invoice.id)

    def list_invoices(
        self, ctx: RequestContext, page: int, page_size: int, search: str = ""
    ) -> list[Invoice]:
        """Return one page of invoices ordered by date, then id.

        Args:
            ctx: Request context (logger, deadline).
            page: 1-indexed page number, already normalized.
            page_size: Rows per page, already normalized.
            search: Full-text term matched against id and service name.

        Returns:
            List of invoices; empty when no row matches.
        """
        query, params = build_list_query(page, page_size, search)

        with self._pool.acquire(ctx) as conn:
            result = self._execute(conn, query, params, failure="failed to get invoices")
            rows = result.mappings().all()

        invoices = [row_to_invoice(row) for row in rows]
        ctx.logger.debug(
            "Fetched %d invoices (page=%d, page_size=%d, search=%r)",
            len(invoices),
            page,
            page_size,
            search,
        )
        return invoices

    def get_by_id(self, ctx: RequestContext, invoice_id: UUID) -> Invoice:
        """Return the invoice with ``invoice_id``.

        Raises:
            NotFoundError: No row has that id.
        """
        with self._pool.acquire(ctx) as conn:
            result = self._execute(
                conn,
                SELECT_INVOICE_BY_ID,
                {"id": str(invoice_id)},
                failure="failed to get invoice",
            )
            row = result.mappings().first()

        if row is None:
            raise NotFoundError(str(invoice_id))
        return row_to_invoice(row)

    def update_by_id(self, ctx: RequestContext, invoice_id: UUID, invoice: Invoice) -> None:
        """Overwrite service name, amount and status. The date is never updated."""
        with self._pool.acquire(ctx, failure="failed to update invoice by id") as conn:
            result = self._execute(
                conn,
                UPDATE_INVOICE_BY_ID,
                {
                    "id": str(invoice_id),
                    "service_name": invoice.service_name.value,
                    "amount": invoice.amount,
                    "status": invoice.status.value,
                },
                failure="failed to update invoice by id",
            )
            self._check_affected(ctx, result.rowcount, invoice_id)

    def delete_by_id(self, ctx: RequestContext, invoice_id: UUID) -> None:
        """Delete the invoice with ``invoice_id``."""
        with self._pool.acquire(ctx, failure="failed to delete invoice") as conn:
            result = self._execute(
                conn,
                DELETE_INVOICE_BY_ID,
                {"id": str(invoice_id)},
                failure="failed to delete invoice",
            )
            self._check_affected(ctx, result.rowcount, invoice_id)

    def ping(self, ctx: RequestContext) -> None:
        self._pool.ping(ctx)

    def _check_affected(self, ctx: RequestContext, rowcount: int, invoice_id: UUID) -> None:
        if rowcount:
            return
        if self._strict_writes:
            raise NotFoundError(str(invoice_id))
        ctx.logger.warning("No invoice matched id %s", invoice_id)

    @staticmethod
    def _execute(
        conn: Connection,
        statement: TextClause,
        params: dict[str, Any],
        failure: str,
        severity: Optional[Severity] = None,
    ):
        try:
            return conn.execute(statement, params)
        except SQLAlchemyError as exc:
            raise StorageError(failure, severity=severity, fields=describe_cause(exc)) from exc
