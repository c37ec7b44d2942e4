"""
Invoice Entity - Aggregate root owning line items, total and payments
"""

from __future__ import annotations

# Standard library imports
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum

from ..exceptions import (
    CurrencyConflict,
    CurrencyMismatch,
    DuplicateLineItem,
    EmptyInvoice,
    InvalidAmount,
    InvalidCustomerReference,
    InvalidStatusTransition,
    InvoiceCancelled,
    LineItemNotFound,
    NotDraft,
    PaymentExceedsBalance,
)
from ..services.identifiers import INVOICE_ID_PREFIX, IIdGenerator, default_id_generator
from ..value_objects import Money
from .line_item import LineItem
from .payment import Payment

DEFAULT_CURRENCY = "USD"


class InvoiceStatus(Enum):
    """Invoice status enumeration"""

    DRAFT = "draft"
    ISSUED = "issued"
    PAID = "paid"
    CANCELLED = "cancelled"


class Invoice:
    """
    Invoice aggregate root.

    Invariants held after every public call:
    - every line item is priced in the invoice currency, which is fixed by
      the first line item added (the default currency before that)
    - ``total`` equals the sum of the line totals
    - ``amount_paid <= total``
    - status only moves forward: DRAFT -> ISSUED -> PAID, with CANCELLED
      reachable from DRAFT or ISSUED
    - once issued, status is PAID exactly when ``amount_paid == total``;
      issuing a zero-total invoice settles it immediately

    Every mutator validates completely before changing state, so a rejected
    call leaves the invoice untouched. Callers sharing an instance must
    serialise mutations themselves; the aggregate does no locking.
    """

    def __init__(
        self,
        invoice_id: str,
        customer_id: str,
        currency: str = DEFAULT_CURRENCY,
        created_at: datetime | None = None,
    ) -> None:
        if not invoice_id:
            raise ValueError("Invoice ID cannot be empty")
        if not isinstance(customer_id, str) or not customer_id.strip():
            raise InvalidCustomerReference(customer_id)

        zero = Money.zero(currency)

        self._invoice_id = invoice_id
        self._customer_id = customer_id
        self._status = InvoiceStatus.DRAFT
        self._line_items: dict[str, LineItem] = {}
        self._currency = currency
        self._currency_established = False
        self._total = zero
        self._amount_paid = zero

        self._created_at = created_at or datetime.now(UTC)
        self._updated_at: datetime | None = None
        self._issued_at: datetime | None = None
        self._paid_at: datetime | None = None
        self._cancelled_at: datetime | None = None
        self._cancellation_reason: str | None = None
        self._version = 1

    @classmethod
    def create(
        cls,
        customer_id: str,
        line_items: Iterable[LineItem] = (),
        id_generator: IIdGenerator | None = None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> Invoice:
        """Factory method to create a draft invoice with optional line items"""
        generator = id_generator or default_id_generator()
        invoice = cls(
            invoice_id=generator.next_id(INVOICE_ID_PREFIX),
            customer_id=customer_id,
            currency=default_currency,
        )
        for item in line_items:
            invoice.add_line_item(item)
        return invoice

    # Read-only state

    @property
    def invoice_id(self) -> str:
        return self._invoice_id

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def status(self) -> InvoiceStatus:
        return self._status

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def line_items(self) -> tuple[LineItem, ...]:
        """Line items in insertion order. The tuple is a snapshot; mutate
        through ``add_line_item``/``remove_line_item`` only."""
        return tuple(self._line_items.values())

    @property
    def line_item_count(self) -> int:
        return len(self._line_items)

    @property
    def total(self) -> Money:
        return self._total

    @property
    def amount_paid(self) -> Money:
        return self._amount_paid

    @property
    def balance_due(self) -> Money:
        """Amount still owed (total minus amount paid)"""
        return self._total.subtract(self._amount_paid)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime | None:
        return self._updated_at

    @property
    def issued_at(self) -> datetime | None:
        return self._issued_at

    @property
    def paid_at(self) -> datetime | None:
        return self._paid_at

    @property
    def cancelled_at(self) -> datetime | None:
        return self._cancelled_at

    @property
    def cancellation_reason(self) -> str | None:
        return self._cancellation_reason

    @property
    def version(self) -> int:
        return self._version

    def increment_version(self) -> None:
        """Increment version for optimistic locking."""
        self._version += 1

    def get_line_item(self, line_item_id: str) -> LineItem:
        """Look up a line item by id"""
        try:
            return self._line_items[line_item_id]
        except KeyError:
            raise LineItemNotFound(self._invoice_id, line_item_id) from None

    # Line items

    def add_line_item(self, item: LineItem) -> None:
        """Add a line item to a draft invoice and recompute the total"""
        if not isinstance(item, LineItem):
            raise TypeError(f"Expected LineItem, got {type(item).__name__}")

        if self._status != InvoiceStatus.DRAFT:
            raise NotDraft(self._invoice_id, self._status, "add line items to")

        if self._currency_established and item.currency != self._currency:
            raise CurrencyConflict(self._invoice_id, self._currency, item.currency)

        if item.line_item_id in self._line_items:
            raise DuplicateLineItem(self._invoice_id, item.line_item_id)

        items = {**self._line_items, item.line_item_id: item}
        total = self._sum_line_totals(items.values(), item.currency)

        if not self._currency_established:
            # Draft invoices never carry payments, so re-zeroing is safe
            self._currency = item.currency
            self._amount_paid = Money.zero(item.currency)
            self._currency_established = True

        self._line_items = items
        self._total = total
        self._touch()

    def remove_line_item(self, line_item_id: str) -> None:
        """Remove a line item from a draft invoice and recompute the total.

        Removing the last item leaves a zero total in the established
        currency; status and amount paid are unchanged.
        """
        if self._status != InvoiceStatus.DRAFT:
            raise NotDraft(self._invoice_id, self._status, "remove line items from")

        if line_item_id not in self._line_items:
            raise LineItemNotFound(self._invoice_id, line_item_id)

        items = {key: item for key, item in self._line_items.items() if key != line_item_id}

        self._line_items = items
        self._total = self._sum_line_totals(items.values(), self._currency)
        self._touch()

    def calculate_total(self) -> Money:
        """Recompute the total from the current line items"""
        return self._sum_line_totals(self._line_items.values(), self._currency)

    @staticmethod
    def _sum_line_totals(items: Iterable[LineItem], currency: str) -> Money:
        total = Money.zero(currency)
        for item in items:
            total = total.add(item.line_total())
        return total

    # Lifecycle

    def record_payment(self, payment: Money | Payment) -> None:
        """Record funds received against this invoice.

        A partial payment on a draft invoice issues it; the payment that makes
        ``amount_paid`` equal ``total`` marks it paid.
        """
        if isinstance(payment, Payment):
            payment.apply_to_invoice(self)
            return

        if not isinstance(payment, Money):
            raise TypeError(f"Expected Money or Payment, got {type(payment).__name__}")

        if self._status == InvoiceStatus.CANCELLED:
            raise InvoiceCancelled(self._invoice_id)

        if payment.is_zero():
            raise InvalidAmount(payment, reason="Payment amount must be greater than 0")

        if payment.currency != self._currency:
            raise CurrencyMismatch(self._currency, payment.currency, "record payment in")

        amount_paid = self._amount_paid.add(payment)
        if amount_paid > self._total:
            raise PaymentExceedsBalance(self._invoice_id, payment, self.balance_due)

        now = datetime.now(UTC)
        self._amount_paid = amount_paid

        if amount_paid == self._total:
            if self._issued_at is None:
                self._issued_at = now
            self._status = InvoiceStatus.PAID
            self._paid_at = now
        elif self._status == InvoiceStatus.DRAFT:
            self._status = InvoiceStatus.ISSUED
            self._issued_at = now

        self._touch(now)

    def issue(self) -> None:
        """Move a draft invoice with at least one line item to issued.

        An invoice whose lines total zero has nothing left to collect, so it
        is issued and settled in one step.
        """
        if self._status != InvoiceStatus.DRAFT:
            raise NotDraft(self._invoice_id, self._status, "issue")

        if not self._line_items:
            raise EmptyInvoice(self._invoice_id)

        now = datetime.now(UTC)
        self._issued_at = now
        if self._total.is_zero():
            self._status = InvoiceStatus.PAID
            self._paid_at = now
        else:
            self._status = InvoiceStatus.ISSUED
        self._touch(now)

    def cancel(self, reason: str | None = None) -> None:
        """Cancel a draft or issued invoice"""
        if self._status == InvoiceStatus.CANCELLED:
            raise InvoiceCancelled(self._invoice_id, operation="cancel")

        if self._status == InvoiceStatus.PAID:
            raise InvalidStatusTransition(
                self._invoice_id, self._status, InvoiceStatus.CANCELLED
            )

        now = datetime.now(UTC)
        self._status = InvoiceStatus.CANCELLED
        self._cancelled_at = now
        self._cancellation_reason = reason
        self._touch(now)

    def is_fully_paid(self) -> bool:
        """Check if amount paid equals the total exactly"""
        return self._amount_paid == self._total

    def is_open(self) -> bool:
        """Check if invoice can still change (draft or issued)"""
        return self._status in (InvoiceStatus.DRAFT, InvoiceStatus.ISSUED)

    def is_terminal(self) -> bool:
        """Check if invoice is in a terminal state"""
        return self._status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED)

    def _touch(self, moment: datetime | None = None) -> None:
        self._updated_at = moment or datetime.now(UTC)

    def __repr__(self) -> str:
        return (
            f"Invoice(invoice_id={self._invoice_id!r}, customer_id={self._customer_id!r}, "
            f"status={self._status.value!r}, total={self._total.format()!r})"
        )

    def __str__(self) -> str:
        """String representation"""
        return (
            f"Invoice({self._invoice_id}: {self._customer_id} - {len(self._line_items)} items, "
            f"total {self._total}, paid {self._amount_paid} - {self._status.value})"
        )
