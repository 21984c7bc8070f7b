"""
Tests for the invoicing domain layer.

Tests entities, the error taxonomy and the request context in isolation.
No external dependencies or IO required.
"""

import logging
import time
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from invoicing_api.domain.invoicing.context import RequestContext
from invoicing_api.domain.invoicing.entities import Invoice, InvoiceStatus, ServiceName
from invoicing_api.domain.invoicing.errors import (
    InvalidRequestError,
    InvoiceError,
    MappingError,
    NotFoundError,
    PoolAcquireError,
    Severity,
    StorageError,
    describe_cause,
)


class TestInvoiceEntity:
    """Tests for the Invoice entity."""

    def test_invoice_is_immutable(self) -> None:
        invoice = Invoice(
            id=uuid4(),
            service_name=ServiceName.DMP,
            amount=Decimal("10.50"),
            status=InvoiceStatus.PENDING,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        with pytest.raises(AttributeError):
            invoice.status = InvoiceStatus.PAID

    def test_enum_values_match_wire_format(self) -> None:
        assert [s.value for s in ServiceName] == ["DMP", "SSP"]
        assert [s.value for s in InvoiceStatus] == ["PAID", "UNPAID", "PENDING"]


class TestSeverity:
    """Severity tags map onto logging levels."""

    @pytest.mark.parametrize(
        "severity, level",
        [
            (Severity.DEBUG, logging.DEBUG),
            (Severity.INFO, logging.INFO),
            (Severity.WARN, logging.WARNING),
            (Severity.ERROR, logging.ERROR),
            (Severity.FATAL, logging.CRITICAL),
        ],
    )
    def test_level(self, severity: Severity, level: int) -> None:
        assert severity.level == level


class TestErrorTaxonomy:
    """Each error variant carries its own status, severity and fields."""

    def test_pool_acquire_error_defaults(self) -> None:
        err = PoolAcquireError()
        assert err.status_code == 500
        assert err.severity is Severity.ERROR
        assert err.message == "failed to acquire connection"

    def test_storage_error_severity_can_be_overridden(self) -> None:
        err = StorageError("failed to create invoice", severity=Severity.WARN)
        assert err.status_code == 500
        assert err.severity is Severity.WARN

    def test_not_found_error(self) -> None:
        err = NotFoundError("abc")
        assert err.status_code == 404
        assert err.severity is Severity.WARN
        assert err.message == "invoice not found"
        assert err.fields == {"invoice_id": "abc"}

    def test_mapping_error_is_server_error(self) -> None:
        err = MappingError("failed to collect invoice")
        assert err.status_code == 500
        assert err.severity is Severity.ERROR

    def test_invalid_request_error_lists_violations(self) -> None:
        err = InvalidRequestError("invalid request body", ["amount: must be greater than 0"])
        assert err.status_code == 400
        assert err.severity is Severity.WARN
        assert "amount" in err.fields["violations"]

    def test_all_variants_share_the_base(self) -> None:
        for cls in (PoolAcquireError, StorageError, NotFoundError, MappingError, InvalidRequestError):
            assert issubclass(cls, InvoiceError)

    def test_fields_are_copied(self) -> None:
        fields = {"error": "boom"}
        err = StorageError("failed", fields=fields)
        fields["error"] = "changed"
        assert err.fields == {"error": "boom"}


class TestDescribeCause:
    """Low-level causes become diagnostic fields."""

    def test_plain_exception(self) -> None:
        assert describe_cause(ValueError(" bad value ")) == {
            "error": "bad value",
            "error_type": "ValueError",
        }

    def test_prefers_wrapped_driver_error(self) -> None:
        class Wrapper(Exception):
            def __init__(self, orig: Exception) -> None:
                super().__init__("[SQL: INSERT ...] secret params")
                self.orig = orig

        fields = describe_cause(Wrapper(ConnectionError("refused")))
        assert fields == {"error": "refused", "error_type": "ConnectionError"}


class TestRequestContext:
    """Deadline arithmetic of the request context."""

    def test_no_deadline(self) -> None:
        ctx = RequestContext()
        assert ctx.remaining() is None
        assert not ctx.expired()

    def test_with_timeout_sets_future_deadline(self) -> None:
        ctx = RequestContext.with_timeout(logging.getLogger("t"), 30)
        assert 29 < ctx.remaining() <= 30
        assert not ctx.expired()

    def test_expired_deadline(self) -> None:
        ctx = RequestContext(deadline=time.monotonic() - 1)
        assert ctx.remaining() == 0.0
        assert ctx.expired()

    def test_with_timeout_none_means_no_deadline(self) -> None:
        ctx = RequestContext.with_timeout(logging.getLogger("t"), None)
        assert ctx.deadline is None
