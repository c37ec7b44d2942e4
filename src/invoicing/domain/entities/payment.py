"""
Payment Entity - Funds received against exactly one invoice
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..exceptions import InvalidAmount, InvalidPaymentDate, InvoiceMismatch
from ..services.identifiers import PAYMENT_ID_PREFIX, IIdGenerator, default_id_generator
from ..value_objects import Money

if TYPE_CHECKING:
    from .invoice import Invoice


def _now_like(moment: datetime) -> datetime:
    """Current time with the same awareness as ``moment``."""
    if moment.tzinfo is None:
        return datetime.now()
    return datetime.now(UTC)


@dataclass(frozen=True)
class Payment:
    """
    Immutable record of a payment.

    A Payment is a transportable record; the invoice keeps sole authority over
    its own balance, so applying a payment always goes through
    ``Invoice.record_payment``.
    """

    payment_id: str
    invoice_id: str
    amount: Money
    date: datetime

    def __post_init__(self) -> None:
        """Validate payment after initialization"""
        if not self.payment_id:
            raise ValueError("Payment ID cannot be empty")

        if not self.invoice_id:
            raise ValueError("Payment must reference an invoice")

        if not isinstance(self.amount, Money):
            raise TypeError(f"Payment amount must be Money, got {type(self.amount).__name__}")

        if not self.amount.is_positive():
            raise InvalidAmount(self.amount, reason="Payment amount must be greater than 0")

        if self.date > _now_like(self.date):
            raise InvalidPaymentDate(self.date)

    @classmethod
    def create(
        cls,
        invoice_id: str,
        amount: Money,
        date: datetime | None = None,
        id_generator: IIdGenerator | None = None,
    ) -> Payment:
        """Factory method to create a payment dated now unless told otherwise"""
        generator = id_generator or default_id_generator()
        return cls(
            payment_id=generator.next_id(PAYMENT_ID_PREFIX),
            invoice_id=invoice_id,
            amount=amount,
            date=date or datetime.now(UTC),
        )

    def apply_to_invoice(self, invoice: Invoice) -> None:
        """Record this payment on the invoice it references.

        Raises:
            InvoiceMismatch: If the payment references a different invoice
        """
        if self.invoice_id != invoice.invoice_id:
            raise InvoiceMismatch(self.invoice_id, invoice.invoice_id)

        invoice.record_payment(self.amount)

    def __str__(self) -> str:
        """String representation"""
        return (
            f"Payment({self.payment_id}: {self.amount} -> {self.invoice_id} "
            f"on {self.date:%Y-%m-%d})"
        )
