"""
Unit tests for the invoice use cases.

Runs each use case against the in-memory repository with deterministic ids
and checks both the response and what was persisted.
"""

# Standard library imports
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

# Third-party imports
import pytest

# Local imports
from invoicing.application.use_cases import (
    AddLineItemRequest,
    AddLineItemUseCase,
    CancelInvoiceRequest,
    CancelInvoiceUseCase,
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
    DeleteInvoiceRequest,
    DeleteInvoiceResponse,
    DeleteInvoiceUseCase,
    GetInvoiceRequest,
    GetInvoiceUseCase,
    InvoiceResponse,
    IssueInvoiceRequest,
    IssueInvoiceUseCase,
    LineItemInput,
    ListCustomerInvoicesRequest,
    ListCustomerInvoicesUseCase,
    ListInvoicesResponse,
    RecordPaymentRequest,
    RecordPaymentResponse,
    RecordPaymentUseCase,
    RemoveLineItemRequest,
    RemoveLineItemUseCase,
)
from invoicing.domain.entities import InvoiceStatus
from invoicing.domain.value_objects import Money

SAMPLE_LINES = [
    LineItemInput(product_id="PROD-001", quantity=2, unit_price="50.00 USD"),
    LineItemInput(product_id="PROD-002", quantity=1, unit_price="100.00 USD"),
]


async def create_sample(repository, id_generator, customer_id: str = "CUST-123") -> str:
    """Create the sample 200.00 USD invoice and return its id."""
    use_case = CreateInvoiceUseCase(repository, id_generator)
    response = await use_case.execute(
        CreateInvoiceRequest(customer_id=customer_id, line_items=list(SAMPLE_LINES))
    )
    assert response.success, response.error
    return response.invoice.invoice_id


class TestCreateInvoiceUseCase:
    """Test invoice creation."""

    @pytest.mark.asyncio
    async def test_create_invoice(self, repository, id_generator):
        """Test creating the sample invoice."""
        use_case = CreateInvoiceUseCase(repository, id_generator)
        response = await use_case.execute(
            CreateInvoiceRequest(customer_id="CUST-123", line_items=list(SAMPLE_LINES))
        )

        assert isinstance(response, InvoiceResponse)
        assert response.success
        assert response.summary.invoice_id == "INV-000001"
        assert response.summary.total == "200.00 USD"
        assert response.summary.status == "draft"
        assert [line.line_item_id for line in response.summary.line_items] == [
            "LI-000001",
            "LI-000002",
        ]

        stored = await repository.get_invoice_by_id("INV-000001")
        assert stored.total == Money.parse("200.00 USD")

    @pytest.mark.asyncio
    async def test_create_empty_invoice_uses_default_currency(self, repository, id_generator):
        """Test an invoice without lines is in the configured default currency."""
        use_case = CreateInvoiceUseCase(repository, id_generator, default_currency="EUR")
        response = await use_case.execute(CreateInvoiceRequest(customer_id="CUST-123"))

        assert response.success
        assert response.summary.total == "0.00 EUR"

    @pytest.mark.asyncio
    async def test_customer_required(self, repository, id_generator):
        """Test a blank customer fails validation."""
        response = await CreateInvoiceUseCase(repository, id_generator).execute(
            CreateInvoiceRequest(customer_id="  ")
        )

        assert not response.success
        assert response.error == "Customer ID is required"
        assert response.error_code == "InvalidRequest"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("line", "error_code"),
        [
            (LineItemInput("PROD-001", 1, "50.00USD"), "InvalidFormat"),
            (LineItemInput("PROD-001", 0, "50.00 USD"), "InvalidQuantity"),
            (LineItemInput("", 1, "50.00 USD"), "InvalidProductReference"),
            (LineItemInput("PROD-001", 1, "-5.00 USD"), "InvalidAmount"),
            (LineItemInput("PROD-001", 1, "5.00 usd"), "InvalidCurrency"),
            (LineItemInput("PROD-003", 1, "5.00 EUR"), "CurrencyConflict"),
        ],
    )
    async def test_invalid_lines_store_nothing(self, repository, id_generator, line, error_code):
        """Test a bad line rejects the whole invoice."""
        response = await CreateInvoiceUseCase(repository, id_generator).execute(
            CreateInvoiceRequest(customer_id="CUST-123", line_items=[*SAMPLE_LINES, line])
        )

        assert not response.success
        assert response.error_code == error_code
        assert await repository.count() == 0


class TestLineItemUseCases:
    """Test adding and removing line items."""

    @pytest.mark.asyncio
    async def test_add_line_item(self, repository, id_generator):
        """Test adding 3 x 25.00 USD gives 275.00 USD."""
        invoice_id = await create_sample(repository, id_generator)

        response = await AddLineItemUseCase(repository, id_generator).execute(
            AddLineItemRequest(
                invoice_id=invoice_id, product_id="PROD-003", quantity=3, unit_price="25.00 USD"
            )
        )

        assert response.success
        assert response.summary.total == "275.00 USD"
        assert len(response.summary.line_items) == 3

    @pytest.mark.asyncio
    async def test_add_line_item_currency_conflict(self, repository, id_generator):
        """Test a conflicting currency is rejected and nothing is persisted."""
        invoice_id = await create_sample(repository, id_generator)

        response = await AddLineItemUseCase(repository, id_generator).execute(
            AddLineItemRequest(
                invoice_id=invoice_id, product_id="PROD-004", quantity=1, unit_price="10.00 EUR"
            )
        )

        assert response.error_code == "CurrencyConflict"
        stored = await repository.get_invoice_by_id(invoice_id)
        assert stored.line_item_count == 2
        assert stored.total == Money("200.00")

    @pytest.mark.asyncio
    async def test_add_line_item_unknown_invoice(self, repository, id_generator):
        """Test a missing invoice is reported by name."""
        response = await AddLineItemUseCase(repository, id_generator).execute(
            AddLineItemRequest(
                invoice_id="INV-404", product_id="PROD-001", quantity=1, unit_price="1.00 USD"
            )
        )
        assert response.error_code == "InvoiceNotFoundError"

    @pytest.mark.asyncio
    async def test_remove_line_item(self, repository, id_generator):
        """Test removing a line recomputes the total."""
        invoice_id = await create_sample(repository, id_generator)

        response = await RemoveLineItemUseCase(repository).execute(
            RemoveLineItemRequest(invoice_id=invoice_id, line_item_id="LI-000001")
        )

        assert response.success
        assert response.summary.total == "100.00 USD"

    @pytest.mark.asyncio
    async def test_remove_unknown_line_item(self, repository, id_generator):
        """Test removing an unknown line item fails."""
        invoice_id = await create_sample(repository, id_generator)

        response = await RemoveLineItemUseCase(repository).execute(
            RemoveLineItemRequest(invoice_id=invoice_id, line_item_id="LI-404")
        )
        assert response.error_code == "LineItemNotFound"

    @pytest.mark.asyncio
    async def test_remove_requires_line_item_id(self, repository):
        """Test validation of the line item id."""
        response = await RemoveLineItemUseCase(repository).execute(
            RemoveLineItemRequest(invoice_id="INV-1", line_item_id="")
        )
        assert response.error == "Line item ID is required"


class TestLifecycleUseCases:
    """Test issue, payment and cancellation use cases."""

    @pytest.mark.asyncio
    async def test_issue(self, repository, id_generator):
        """Test issuing persists the new status."""
        invoice_id = await create_sample(repository, id_generator)

        response = await IssueInvoiceUseCase(repository).execute(
            IssueInvoiceRequest(invoice_id=invoice_id)
        )

        assert response.success
        stored = await repository.get_invoice_by_id(invoice_id)
        assert stored.status == InvoiceStatus.ISSUED

    @pytest.mark.asyncio
    async def test_issue_empty_invoice(self, repository, id_generator):
        """Test an empty invoice cannot be issued."""
        created = await CreateInvoiceUseCase(repository, id_generator).execute(
            CreateInvoiceRequest(customer_id="CUST-123")
        )

        response = await IssueInvoiceUseCase(repository).execute(
            IssueInvoiceRequest(invoice_id=created.invoice.invoice_id)
        )
        assert response.error_code == "EmptyInvoice"

    @pytest.mark.asyncio
    async def test_record_full_payment(self, repository, id_generator):
        """Test a full payment marks the invoice paid and returns the payment."""
        invoice_id = await create_sample(repository, id_generator)

        response = await RecordPaymentUseCase(repository, id_generator).execute(
            RecordPaymentRequest(invoice_id=invoice_id, amount="200.00 USD")
        )

        assert isinstance(response, RecordPaymentResponse)
        assert response.success
        assert response.payment.payment_id == "PAY-000001"
        assert response.summary.status == "paid"
        assert response.summary.balance_due == "0.00 USD"

    @pytest.mark.asyncio
    async def test_overpayment_is_not_persisted(self, repository, id_generator):
        """Test a rejected payment leaves the stored invoice unchanged."""
        invoice_id = await create_sample(repository, id_generator)
        use_case = RecordPaymentUseCase(repository, id_generator)
        await use_case.execute(RecordPaymentRequest(invoice_id=invoice_id, amount="200.00 USD"))

        response = await use_case.execute(
            RecordPaymentRequest(invoice_id=invoice_id, amount="1.00 USD")
        )

        assert isinstance(response, RecordPaymentResponse)
        assert response.error_code == "PaymentExceedsBalance"
        stored = await repository.get_invoice_by_id(invoice_id)
        assert stored.amount_paid == Money("200.00")

    @pytest.mark.asyncio
    async def test_future_dated_payment(self, repository, id_generator):
        """Test payments cannot be dated in the future."""
        invoice_id = await create_sample(repository, id_generator)

        response = await RecordPaymentUseCase(repository, id_generator).execute(
            RecordPaymentRequest(
                invoice_id=invoice_id,
                amount="10.00 USD",
                payment_date=datetime.now(UTC) + timedelta(days=2),
            )
        )
        assert response.error_code == "InvalidPaymentDate"

    @pytest.mark.asyncio
    async def test_payment_amount_required(self, repository):
        """Test validation of the payment amount."""
        response = await RecordPaymentUseCase(repository).execute(
            RecordPaymentRequest(invoice_id="INV-1", amount="")
        )
        assert response.error == "Payment amount is required"

    @pytest.mark.asyncio
    async def test_cancel_then_pay(self, repository, id_generator):
        """Test a cancelled invoice refuses payments."""
        invoice_id = await create_sample(repository, id_generator)

        cancelled = await CancelInvoiceUseCase(repository).execute(
            CancelInvoiceRequest(invoice_id=invoice_id, reason="duplicate")
        )
        assert cancelled.summary.status == "cancelled"
        assert cancelled.invoice.cancellation_reason == "duplicate"

        response = await RecordPaymentUseCase(repository, id_generator).execute(
            RecordPaymentRequest(invoice_id=invoice_id, amount="10.00 USD")
        )
        assert response.error_code == "InvoiceCancelled"


class TestQueryUseCases:
    """Test get, list and delete."""

    @pytest.mark.asyncio
    async def test_get_invoice(self, repository, id_generator):
        """Test fetching an invoice."""
        invoice_id = await create_sample(repository, id_generator)

        response = await GetInvoiceUseCase(repository).execute(
            GetInvoiceRequest(invoice_id=invoice_id)
        )

        assert response.success
        assert response.invoice.invoice_id == invoice_id
        assert response.summary.to_dict()["line_items"][0]["quantity"] == "2"

    @pytest.mark.asyncio
    async def test_get_missing_invoice(self, repository):
        """Test fetching an unknown invoice."""
        response = await GetInvoiceUseCase(repository).execute(
            GetInvoiceRequest(invoice_id="INV-404")
        )
        assert not response.success
        assert response.error_code == "InvoiceNotFoundError"

    @pytest.mark.asyncio
    async def test_list_customer_invoices(self, repository, id_generator):
        """Test listing returns only the customer's invoices."""
        first = await create_sample(repository, id_generator)
        second = await create_sample(repository, id_generator)
        await create_sample(repository, id_generator, customer_id="CUST-999")

        response = await ListCustomerInvoicesUseCase(repository).execute(
            ListCustomerInvoicesRequest(customer_id="CUST-123")
        )

        assert isinstance(response, ListInvoicesResponse)
        assert [invoice.invoice_id for invoice in response.invoices] == [first, second]
        assert len(response.summaries) == 2

    @pytest.mark.asyncio
    async def test_delete_invoice(self, repository, id_generator):
        """Test deleting, then deleting again."""
        invoice_id = await create_sample(repository, id_generator)
        use_case = DeleteInvoiceUseCase(repository)

        response = await use_case.execute(DeleteInvoiceRequest(invoice_id=invoice_id))
        assert response.success
        assert response.deleted

        again = await use_case.execute(DeleteInvoiceRequest(invoice_id=invoice_id))
        assert isinstance(again, DeleteInvoiceResponse)
        assert again.error_code == "InvoiceNotFoundError"

    @pytest.mark.asyncio
    async def test_unexpected_repository_failure(self):
        """Test unexpected repository errors are reported generically."""
        repository = AsyncMock()
        repository.get_invoice_by_id.side_effect = RuntimeError("connection reset")

        response = await GetInvoiceUseCase(repository).execute(
            GetInvoiceRequest(invoice_id="INV-1")
        )

        assert not response.success
        assert response.error_code == "UnexpectedError"
        assert "connection reset" in response.error
