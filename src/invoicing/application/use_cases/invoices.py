"""
Invoice Use Cases

Handles creation, mutation and queries of invoices. Each use case loads the
aggregate from the repository, calls one domain operation, and saves it back.
Prices and payments arrive as canonical money strings ("100.00 USD") and are
parsed here; the domain does all validation of the values themselves.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from invoicing.application.interfaces.exceptions import InvoiceNotFoundError
from invoicing.application.interfaces.repositories import IInvoiceRepository
from invoicing.domain.entities import DEFAULT_CURRENCY, Invoice, LineItem, Payment
from invoicing.domain.services.identifiers import IIdGenerator, default_id_generator
from invoicing.domain.value_objects import Money

from .base import UseCase, UseCaseResponse
from .base_request import BaseRequestDTO


# Read models
@dataclass(frozen=True)
class LineItemSummary:
    """Serialisable view of a line item."""

    line_item_id: str
    product_id: str
    quantity: Decimal
    unit_price: str
    line_total: str

    @classmethod
    def from_line_item(cls, item: LineItem) -> "LineItemSummary":
        return cls(
            line_item_id=item.line_item_id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price.format(),
            line_total=item.line_total().format(),
        )


@dataclass(frozen=True)
class InvoiceSummary:
    """Serialisable view of an invoice, money values in canonical text form."""

    invoice_id: str
    customer_id: str
    status: str
    currency: str
    total: str
    amount_paid: str
    balance_due: str
    line_items: tuple[LineItemSummary, ...] = ()

    @classmethod
    def from_invoice(cls, invoice: Invoice) -> "InvoiceSummary":
        return cls(
            invoice_id=invoice.invoice_id,
            customer_id=invoice.customer_id,
            status=invoice.status.value,
            currency=invoice.currency,
            total=invoice.total.format(),
            amount_paid=invoice.amount_paid.format(),
            balance_due=invoice.balance_due.format(),
            line_items=tuple(LineItemSummary.from_line_item(i) for i in invoice.line_items),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert summary to a JSON-friendly dictionary."""
        return {
            "invoice_id": self.invoice_id,
            "customer_id": self.customer_id,
            "status": self.status,
            "currency": self.currency,
            "total": self.total,
            "amount_paid": self.amount_paid,
            "balance_due": self.balance_due,
            "line_items": [
                {
                    "line_item_id": item.line_item_id,
                    "product_id": item.product_id,
                    "quantity": str(item.quantity),
                    "unit_price": item.unit_price,
                    "line_total": item.line_total,
                }
                for item in self.line_items
            ],
        }


# Request/Response DTOs
@dataclass
class LineItemInput:
    """One line of a create-invoice request."""

    product_id: str
    quantity: Decimal | int | float | str
    unit_price: str  # In format "100.00 USD"


@dataclass
class CreateInvoiceRequest(BaseRequestDTO):
    """Request to create a draft invoice."""

    customer_id: str
    line_items: list[LineItemInput] = field(default_factory=list)


@dataclass
class AddLineItemRequest(BaseRequestDTO):
    """Request to add a line item to a draft invoice."""

    invoice_id: str
    product_id: str
    quantity: Decimal | int | float | str
    unit_price: str


@dataclass
class RemoveLineItemRequest(BaseRequestDTO):
    """Request to remove a line item from a draft invoice."""

    invoice_id: str
    line_item_id: str


@dataclass
class IssueInvoiceRequest(BaseRequestDTO):
    """Request to issue a draft invoice."""

    invoice_id: str


@dataclass
class RecordPaymentRequest(BaseRequestDTO):
    """Request to record a payment against an invoice."""

    invoice_id: str
    amount: str
    payment_date: datetime | None = None


@dataclass
class CancelInvoiceRequest(BaseRequestDTO):
    """Request to cancel a draft or issued invoice."""

    invoice_id: str
    reason: str | None = None


@dataclass
class GetInvoiceRequest(BaseRequestDTO):
    """Request to fetch one invoice."""

    invoice_id: str


@dataclass
class ListCustomerInvoicesRequest(BaseRequestDTO):
    """Request to fetch every invoice of a customer."""

    customer_id: str


@dataclass
class DeleteInvoiceRequest(BaseRequestDTO):
    """Request to delete an invoice from the repository."""

    invoice_id: str


@dataclass
class InvoiceResponse(UseCaseResponse):
    """Response carrying one invoice."""

    invoice: Invoice | None = None
    summary: InvoiceSummary | None = None


@dataclass
class RecordPaymentResponse(InvoiceResponse):
    """Response from recording a payment."""

    payment: Payment | None = None


@dataclass
class ListInvoicesResponse(UseCaseResponse):
    """Response carrying several invoices."""

    invoices: list[Invoice] = field(default_factory=list)
    summaries: list[InvoiceSummary] = field(default_factory=list)


@dataclass
class DeleteInvoiceResponse(UseCaseResponse):
    """Response from deleting an invoice."""

    deleted: bool = False


def _missing(value: str | None, message: str) -> str | None:
    if not value or not str(value).strip():
        return message
    return None


# Use Case Implementations
class InvoiceUseCase(UseCase[Any, Any]):
    """Shared plumbing for use cases operating on invoices."""

    response_class = InvoiceResponse

    def __init__(
        self,
        repository: IInvoiceRepository,
        id_generator: IIdGenerator | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(name)
        self.repository = repository
        self.id_generator = id_generator or default_id_generator()

    async def _load_invoice(self, invoice_id: str) -> Invoice:
        invoice = await self.repository.get_invoice_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def _invoice_response(self, invoice: Invoice, request_id: Any) -> InvoiceResponse:
        return InvoiceResponse(
            success=True,
            invoice=invoice,
            summary=InvoiceSummary.from_invoice(invoice),
            request_id=request_id,
        )


class CreateInvoiceUseCase(InvoiceUseCase):
    """
    Creates a draft invoice for a customer.

    Each line's price string is parsed into Money and turned into a LineItem;
    the first line fixes the invoice currency.
    """

    def __init__(
        self,
        repository: IInvoiceRepository,
        id_generator: IIdGenerator | None = None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        super().__init__(repository, id_generator, "CreateInvoiceUseCase")
        self.default_currency = default_currency

    async def validate(self, request: CreateInvoiceRequest) -> str | None:
        return _missing(request.customer_id, "Customer ID is required")

    async def process(self, request: CreateInvoiceRequest) -> InvoiceResponse:
        line_items = [
            LineItem.create(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=Money.parse(line.unit_price),
                id_generator=self.id_generator,
            )
            for line in request.line_items
        ]

        invoice = Invoice.create(
            customer_id=request.customer_id,
            line_items=line_items,
            id_generator=self.id_generator,
            default_currency=self.default_currency,
        )

        saved = await self.repository.save_invoice(invoice)
        self.logger.info(
            f"Created invoice {saved.invoice_id} with total {saved.total}",
            extra={"invoice_id": saved.invoice_id, "customer_id": saved.customer_id},
        )
        return self._invoice_response(saved, request.request_id)


class AddLineItemUseCase(InvoiceUseCase):
    """Adds a line item to a draft invoice."""

    def __init__(self, repository: IInvoiceRepository, id_generator: IIdGenerator | None = None):
        super().__init__(repository, id_generator, "AddLineItemUseCase")

    async def validate(self, request: AddLineItemRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required")

    async def process(self, request: AddLineItemRequest) -> InvoiceResponse:
        invoice = await self._load_invoice(request.invoice_id)

        line_item = LineItem.create(
            product_id=request.product_id,
            quantity=request.quantity,
            unit_price=Money.parse(request.unit_price),
            id_generator=self.id_generator,
        )
        invoice.add_line_item(line_item)

        saved = await self.repository.save_invoice(invoice)
        return self._invoice_response(saved, request.request_id)


class RemoveLineItemUseCase(InvoiceUseCase):
    """Removes a line item from a draft invoice."""

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="RemoveLineItemUseCase")

    async def validate(self, request: RemoveLineItemRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required") or _missing(
            request.line_item_id, "Line item ID is required"
        )

    async def process(self, request: RemoveLineItemRequest) -> InvoiceResponse:
        invoice = await self._load_invoice(request.invoice_id)
        invoice.remove_line_item(request.line_item_id)

        saved = await self.repository.save_invoice(invoice)
        return self._invoice_response(saved, request.request_id)


class IssueInvoiceUseCase(InvoiceUseCase):
    """Issues a draft invoice."""

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="IssueInvoiceUseCase")

    async def validate(self, request: IssueInvoiceRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required")

    async def process(self, request: IssueInvoiceRequest) -> InvoiceResponse:
        invoice = await self._load_invoice(request.invoice_id)
        invoice.issue()

        saved = await self.repository.save_invoice(invoice)
        return self._invoice_response(saved, request.request_id)


class RecordPaymentUseCase(InvoiceUseCase):
    """
    Records a payment against an invoice.

    Builds a Payment record and applies it, so the same checks run whether a
    payment comes from this use case or from an imported payment record.
    """

    response_class = RecordPaymentResponse

    def __init__(self, repository: IInvoiceRepository, id_generator: IIdGenerator | None = None):
        super().__init__(repository, id_generator, "RecordPaymentUseCase")

    async def validate(self, request: RecordPaymentRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required") or _missing(
            request.amount, "Payment amount is required"
        )

    async def process(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        invoice = await self._load_invoice(request.invoice_id)

        payment = Payment.create(
            invoice_id=request.invoice_id,
            amount=Money.parse(request.amount),
            date=request.payment_date,
            id_generator=self.id_generator,
        )
        payment.apply_to_invoice(invoice)

        saved = await self.repository.save_invoice(invoice)
        self.logger.info(
            f"Recorded payment {payment.payment_id} of {payment.amount} on {saved.invoice_id}",
            extra={"invoice_id": saved.invoice_id, "status": saved.status.value},
        )
        return RecordPaymentResponse(
            success=True,
            invoice=saved,
            summary=InvoiceSummary.from_invoice(saved),
            payment=payment,
            request_id=request.request_id,
        )


class CancelInvoiceUseCase(InvoiceUseCase):
    """Cancels a draft or issued invoice."""

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="CancelInvoiceUseCase")

    async def validate(self, request: CancelInvoiceRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required")

    async def process(self, request: CancelInvoiceRequest) -> InvoiceResponse:
        invoice = await self._load_invoice(request.invoice_id)
        invoice.cancel(request.reason)

        saved = await self.repository.save_invoice(invoice)
        return self._invoice_response(saved, request.request_id)


class GetInvoiceUseCase(InvoiceUseCase):
    """Fetches one invoice."""

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="GetInvoiceUseCase")

    async def validate(self, request: GetInvoiceRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required")

    async def process(self, request: GetInvoiceRequest) -> InvoiceResponse:
        invoice = await self._load_invoice(request.invoice_id)
        return self._invoice_response(invoice, request.request_id)


class ListCustomerInvoicesUseCase(InvoiceUseCase):
    """Fetches every invoice belonging to a customer."""

    response_class = ListInvoicesResponse

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="ListCustomerInvoicesUseCase")

    async def validate(self, request: ListCustomerInvoicesRequest) -> str | None:
        return _missing(request.customer_id, "Customer ID is required")

    async def process(self, request: ListCustomerInvoicesRequest) -> ListInvoicesResponse:
        invoices = await self.repository.get_invoices_by_customer(request.customer_id)
        return ListInvoicesResponse(
            success=True,
            invoices=invoices,
            summaries=[InvoiceSummary.from_invoice(invoice) for invoice in invoices],
            request_id=request.request_id,
        )


class DeleteInvoiceUseCase(InvoiceUseCase):
    """Deletes an invoice from the repository."""

    response_class = DeleteInvoiceResponse

    def __init__(self, repository: IInvoiceRepository):
        super().__init__(repository, name="DeleteInvoiceUseCase")

    async def validate(self, request: DeleteInvoiceRequest) -> str | None:
        return _missing(request.invoice_id, "Invoice ID is required")

    async def process(self, request: DeleteInvoiceRequest) -> DeleteInvoiceResponse:
        deleted = await self.repository.delete_invoice(request.invoice_id)
        if not deleted:
            raise InvoiceNotFoundError(request.invoice_id)
        return DeleteInvoiceResponse(success=True, deleted=True, request_id=request.request_id)
