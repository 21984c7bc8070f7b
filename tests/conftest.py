"""
Shared fixtures for the invoicing test suite.

Provides an in-memory InvoiceRepository that mimics the PostgreSQL
adapter's observable behavior (server-side dates, date/id ordering,
tokenized AND search, silent zero-row writes), plus an HTTP client
wired to it.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice
from invoicing_api.domain.invoicing.errors import NotFoundError, PoolAcquireError
from invoicing_api.domain.invoicing.ports import InvoiceRepository
from invoicing_api.main import app
from invoicing_api.shared.security.rate_limiting import limiter


class InMemoryInvoiceRepository(InvoiceRepository):
    """Dictionary-backed InvoiceRepository used by API and use case tests."""

    def __init__(self, strict_writes: bool = False) -> None:
        self.rows: dict[UUID, Invoice] = {}
        self.strict_writes = strict_writes
        self.available = True
        self.list_calls: list[tuple[int, int, str]] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        """Return a strictly increasing server time."""
        self._clock += timedelta(seconds=1)
        return self._clock

    def create(self, ctx: RequestContext, invoice: Invoice) -> None:
        self.rows[invoice.id] = replace(invoice, date=self.now())

    def list_invoices(
        self, ctx: RequestContext, page: int, page_size: int, search: str = ""
    ) -> list[Invoice]:
        self.list_calls.append((page, page_size, search))
        rows = sorted(self.rows.values(), key=lambda i: (i.date, str(i.id)))
        if search:
            terms = search.lower().split()
            rows = [r for r in rows if all(t in _tokens(r) for t in terms)]
        offset = (page - 1) * page_size
        return rows[offset : offset + page_size]

    def get_by_id(self, ctx: RequestContext, invoice_id: UUID) -> Invoice:
        if invoice_id not in self.rows:
            raise NotFoundError(str(invoice_id))
        return self.rows[invoice_id]

    def update_by_id(self, ctx: RequestContext, invoice_id: UUID, invoice: Invoice) -> None:
        current = self.rows.get(invoice_id)
        if current is None:
            if self.strict_writes:
                raise NotFoundError(str(invoice_id))
            return
        self.rows[invoice_id] = replace(
            current,
            service_name=invoice.service_name,
            amount=invoice.amount,
            status=invoice.status,
        )

    def delete_by_id(self, ctx: RequestContext, invoice_id: UUID) -> None:
        if self.rows.pop(invoice_id, None) is None and self.strict_writes:
            raise NotFoundError(str(invoice_id))

    def ping(self, ctx: RequestContext) -> None:
        if not self.available:
            raise PoolAcquireError(fields={"error": "connection refused"})


def _tokens(invoice: Invoice) -> set[str]:
    """Approximate PostgreSQL 'simple' parsing of ``id || ' ' || service_name``."""
    raw = str(invoice.id).lower()
    return {raw, *raw.split("-"), invoice.service_name.value.lower()}


@pytest.fixture(autouse=True)
def _disable_rate_limiting():
    """Keep the shared limiter from rejecting requests across tests."""
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous


@pytest.fixture
def ctx() -> RequestContext:
    """A request context with no deadline."""
    return RequestContext(logger=logging.getLogger("tests"))


@pytest.fixture
def repo() -> InMemoryInvoiceRepository:
    return InMemoryInvoiceRepository()


@pytest.fixture
def client(repo: InMemoryInvoiceRepository):
    """HTTP client against the real app, with the in-memory repository wired in.

    The lifespan is not entered, so no database is contacted.
    """
    app.state.invoice_repository = repo
    yield TestClient(app)
    del app.state.invoice_repository
