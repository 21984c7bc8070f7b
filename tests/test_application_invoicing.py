"""
Tests for the invoicing application layer (use cases).

Tests use cases with mocked or in-memory repositories. No real
infrastructure needed. Each test verifies orchestration logic:
validation, normalization, id generation and delegation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from invoicing_api.application.invoicing.create_invoice import CreateInvoiceUseCase
from invoicing_api.application.invoicing.delete_invoice import DeleteInvoiceUseCase
from invoicing_api.application.invoicing.dtos import (
    CreateInvoiceCommand,
    InvoiceIdQuery,
    InvoicePayload,
    ListInvoicesQuery,
    UpdateInvoiceCommand,
)
from invoicing_api.application.invoicing.get_invoice import GetInvoiceUseCase
from invoicing_api.application.invoicing.list_invoices import ListInvoicesUseCase
from invoicing_api.application.invoicing.update_invoice import UpdateInvoiceUseCase
from invoicing_api.domain.invoicing.entities import InvoiceStatus, ServiceName
from invoicing_api.domain.invoicing.errors import InvalidRequestError, NotFoundError
from invoicing_api.domain.invoicing.ports import InvoiceRepository

CLIENT_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


def _payload(**overrides) -> InvoicePayload:
    values = {
        "service_name": "SSP",
        "amount": Decimal("99.90"),
        "status": "PENDING",
        "date": CLIENT_DATE,
    }
    values.update(overrides)
    return InvoicePayload(**values)


class TestCreateInvoiceUseCase:

    def test_assigns_uuid4_and_delegates(self, ctx) -> None:
        repo = MagicMock(spec=InvoiceRepository)
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))

        assert isinstance(invoice_id, UUID)
        assert invoice_id.version == 4
        repo.create.assert_called_once()
        passed_ctx, invoice = repo.create.call_args.args
        assert passed_ctx is ctx
        assert invoice.id == invoice_id
        assert invoice.service_name is ServiceName.SSP
        assert invoice.status is InvoiceStatus.PENDING
        assert invoice.amount == Decimal("99.90")

    def test_each_create_gets_a_fresh_id(self, ctx) -> None:
        repo = MagicMock(spec=InvoiceRepository)
        use_case = CreateInvoiceUseCase(repo)
        ids = {use_case.execute(ctx, CreateInvoiceCommand(_payload())) for _ in range(5)}
        assert len(ids) == 5

    def test_invalid_payload_never_reaches_repository(self, ctx) -> None:
        repo = MagicMock(spec=InvoiceRepository)
        with pytest.raises(InvalidRequestError) as exc_info:
            CreateInvoiceUseCase(repo).execute(
                ctx, CreateInvoiceCommand(_payload(amount=Decimal("0")))
            )
        assert exc_info.value.status_code == 400
        repo.create.assert_not_called()

    def test_server_date_replaces_client_date(self, ctx, repo) -> None:
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))
        assert repo.rows[invoice_id].date != CLIENT_DATE


class TestListInvoicesUseCase:

    def test_zero_page_and_size_are_normalized(self, ctx, repo) -> None:
        ListInvoicesUseCase(repo).execute(ctx, ListInvoicesQuery(page=0, page_size=0))
        assert repo.list_calls == [(1, 50, "")]

    def test_configured_default_page_size(self, ctx, repo) -> None:
        ListInvoicesUseCase(repo, default_page_size=20).execute(ctx, ListInvoicesQuery())
        assert repo.list_calls == [(1, 20, "")]

    def test_explicit_values_pass_through(self, ctx, repo) -> None:
        ListInvoicesUseCase(repo).execute(
            ctx, ListInvoicesQuery(page=3, page_size=10, search="  DMP ")
        )
        assert repo.list_calls == [(3, 10, "DMP")]

    def test_negative_page_is_rejected(self, ctx, repo) -> None:
        with pytest.raises(InvalidRequestError):
            ListInvoicesUseCase(repo).execute(ctx, ListInvoicesQuery(page=-1))
        assert repo.list_calls == []

    def test_page_size_above_maximum_is_rejected(self, ctx, repo) -> None:
        with pytest.raises(InvalidRequestError):
            ListInvoicesUseCase(repo, max_page_size=100).execute(
                ctx, ListInvoicesQuery(page_size=101)
            )

    def test_maps_entities_to_results(self, ctx, repo) -> None:
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))
        results = ListInvoicesUseCase(repo).execute(ctx, ListInvoicesQuery())
        assert [r.id for r in results] == [invoice_id]
        assert results[0].service_name == "SSP"
        assert results[0].status == "PENDING"


class TestGetInvoiceUseCase:

    def test_returns_stored_invoice(self, ctx, repo) -> None:
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))
        result = GetInvoiceUseCase(repo).execute(ctx, InvoiceIdQuery(str(invoice_id)))
        assert result.id == invoice_id
        assert result.amount == Decimal("99.90")

    def test_unknown_id_raises_not_found(self, ctx, repo) -> None:
        with pytest.raises(NotFoundError):
            GetInvoiceUseCase(repo).execute(ctx, InvoiceIdQuery(str(uuid4())))

    def test_malformed_id_is_rejected_before_lookup(self, ctx) -> None:
        repo = MagicMock(spec=InvoiceRepository)
        with pytest.raises(InvalidRequestError) as exc_info:
            GetInvoiceUseCase(repo).execute(ctx, InvoiceIdQuery("42"))
        assert exc_info.value.message == "invalid invoice id"
        repo.get_by_id.assert_not_called()


class TestUpdateInvoiceUseCase:

    def test_updates_fields_but_not_date(self, ctx, repo) -> None:
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))
        original_date = repo.rows[invoice_id].date

        UpdateInvoiceUseCase(repo).execute(
            ctx,
            UpdateInvoiceCommand(
                invoice_id=str(invoice_id),
                payload=_payload(status="PAID", service_name="DMP", amount=Decimal("5")),
            ),
        )

        stored = repo.rows[invoice_id]
        assert stored.status is InvoiceStatus.PAID
        assert stored.service_name is ServiceName.DMP
        assert stored.amount == Decimal("5")
        assert stored.date == original_date

    def test_id_and_body_violations_are_reported_together(self, ctx) -> None:
        repo = MagicMock(spec=InvoiceRepository)
        with pytest.raises(InvalidRequestError) as exc_info:
            UpdateInvoiceUseCase(repo).execute(
                ctx, UpdateInvoiceCommand(invoice_id="nope", payload=_payload(status="?"))
            )
        fields = {v.field for v in exc_info.value.violations}
        assert fields == {"id", "status"}
        repo.update_by_id.assert_not_called()


class TestDeleteInvoiceUseCase:

    def test_deletes_existing_invoice(self, ctx, repo) -> None:
        invoice_id = CreateInvoiceUseCase(repo).execute(ctx, CreateInvoiceCommand(_payload()))
        DeleteInvoiceUseCase(repo).execute(ctx, InvoiceIdQuery(str(invoice_id)))
        assert invoice_id not in repo.rows

    def test_missing_invoice_is_not_an_error(self, ctx, repo) -> None:
        DeleteInvoiceUseCase(repo).execute(ctx, InvoiceIdQuery(str(uuid4())))
