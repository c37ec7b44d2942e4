"""
Domain-level exceptions for the invoicing system.

This module defines exceptions that are specific to domain logic and business rules.
These exceptions are raised within value objects, entities and domain services.
None of them are transient: retrying the same operation fails the same way.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


# ============================================================================
# Input validation errors
# ============================================================================


class InvoicingValidationError(DomainException):
    """Raised when a value supplied to the domain is malformed."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidAmount(InvoicingValidationError):
    """Raised when a monetary amount is negative, non-finite or not a number."""

    def __init__(self, value: Any, reason: str = "Money amount cannot be negative") -> None:
        super().__init__(f"{reason}: {value!r}", field="amount", value=value)


class InvalidCurrency(InvoicingValidationError):
    """Raised when a currency code is not three uppercase letters."""

    def __init__(self, currency: Any) -> None:
        super().__init__(
            f"Invalid currency code: {currency!r} (expected 3 uppercase letters)",
            field="currency",
            value=currency,
        )


class InvalidFormat(InvoicingValidationError):
    """Raised when a money string is not of the form '<decimal> <CCY>'."""

    def __init__(self, text: Any) -> None:
        super().__init__(
            f'Invalid money format: {text!r}. Expected format: "100.00 USD"',
            field="money",
            value=text,
        )


class InvalidQuantity(InvoicingValidationError):
    """Raised when a line item quantity is not strictly positive."""

    def __init__(self, quantity: Any) -> None:
        super().__init__(
            f"Line item quantity must be positive, got {quantity!r}",
            field="quantity",
            value=quantity,
        )


class InvalidProductReference(InvoicingValidationError):
    """Raised when a line item has no product reference."""

    def __init__(self, product_id: Any) -> None:
        super().__init__(
            "Line item product ID cannot be empty", field="product_id", value=product_id
        )


class InvalidCustomerReference(InvoicingValidationError):
    """Raised when an invoice has no customer reference."""

    def __init__(self, customer_id: Any) -> None:
        super().__init__("Customer ID is required", field="customer_id", value=customer_id)


class InvalidFactor(InvoicingValidationError):
    """Raised when money is multiplied by a negative or non-finite factor."""

    def __init__(self, factor: Any) -> None:
        super().__init__(
            f"Cannot multiply money by factor {factor!r}", field="factor", value=factor
        )


class InvalidPaymentDate(InvoicingValidationError):
    """Raised when a payment is dated in the future."""

    def __init__(self, date: Any) -> None:
        super().__init__(
            f"Payment date cannot be in the future: {date}", field="date", value=date
        )


# ============================================================================
# State and invariant violations
# ============================================================================


class InvariantViolation(DomainException):
    """Raised when an operation would break a money or invoice invariant."""


class CurrencyMismatch(InvariantViolation):
    """Raised when two money values of different currencies are combined."""

    def __init__(self, left: str, right: str, operation: str = "operate on") -> None:
        super().__init__(
            f"Cannot {operation} different currencies: {left} and {right}",
            details={"left": left, "right": right, "operation": operation},
        )
        self.left = left
        self.right = right


class CurrencyConflict(InvariantViolation):
    """Raised when a line item's currency differs from the invoice currency."""

    def __init__(self, invoice_id: str, invoice_currency: str, item_currency: str) -> None:
        super().__init__(
            f"Invoice {invoice_id} is in {invoice_currency}; "
            f"cannot add a line item priced in {item_currency}",
            details={
                "invoice_id": invoice_id,
                "invoice_currency": invoice_currency,
                "item_currency": item_currency,
            },
        )
        self.invoice_id = invoice_id
        self.invoice_currency = invoice_currency
        self.item_currency = item_currency


class NegativeResult(InvariantViolation):
    """Raised when a subtraction would produce a negative amount."""

    def __init__(self, minuend: Any, subtrahend: Any) -> None:
        super().__init__(
            f"Cannot subtract {subtrahend} from {minuend}: result would be negative",
            details={"minuend": str(minuend), "subtrahend": str(subtrahend)},
        )


class PaymentExceedsBalance(InvariantViolation):
    """Raised when a payment would take amount paid above the invoice total."""

    def __init__(self, invoice_id: str, payment: Any, balance_due: Any) -> None:
        super().__init__(
            f"Payment of {payment} exceeds balance due {balance_due} on invoice {invoice_id}",
            details={
                "invoice_id": invoice_id,
                "payment": str(payment),
                "balance_due": str(balance_due),
            },
        )
        self.invoice_id = invoice_id


class LineItemNotFound(InvariantViolation):
    """Raised when a line item id is not present on an invoice."""

    def __init__(self, invoice_id: str, line_item_id: str) -> None:
        super().__init__(
            f"Line item with ID {line_item_id} not found on invoice {invoice_id}",
            details={"invoice_id": invoice_id, "line_item_id": line_item_id},
        )
        self.line_item_id = line_item_id


class DuplicateLineItem(InvariantViolation):
    """Raised when a line item id is already present on an invoice."""

    def __init__(self, invoice_id: str, line_item_id: str) -> None:
        super().__init__(
            f"Line item with ID {line_item_id} already exists on invoice {invoice_id}",
            details={"invoice_id": invoice_id, "line_item_id": line_item_id},
        )
        self.line_item_id = line_item_id


class NotDraft(InvariantViolation):
    """Raised when an operation requires a draft invoice."""

    def __init__(self, invoice_id: str, status: Any, operation: str) -> None:
        status_value = getattr(status, "value", status)
        super().__init__(
            f"Cannot {operation} invoice {invoice_id} in {status_value} status; "
            "only draft invoices allow this",
            details={"invoice_id": invoice_id, "status": status_value, "operation": operation},
        )
        self.status = status


class EmptyInvoice(InvariantViolation):
    """Raised when issuing an invoice with no line items."""

    def __init__(self, invoice_id: str) -> None:
        super().__init__(
            f"Cannot issue invoice {invoice_id} with no line items",
            details={"invoice_id": invoice_id},
        )


class InvoiceCancelled(InvariantViolation):
    """Raised when an operation targets a cancelled invoice."""

    def __init__(self, invoice_id: str, operation: str = "record payment on") -> None:
        super().__init__(
            f"Cannot {operation} cancelled invoice {invoice_id}",
            details={"invoice_id": invoice_id, "operation": operation},
        )


class InvoiceMismatch(InvariantViolation):
    """Raised when a payment is applied to an invoice it does not reference."""

    def __init__(self, payment_invoice_id: str, invoice_id: str) -> None:
        super().__init__(
            f"Cannot apply payment for invoice {payment_invoice_id} to invoice {invoice_id}",
            details={"payment_invoice_id": payment_invoice_id, "invoice_id": invoice_id},
        )


class InvalidStatusTransition(InvariantViolation):
    """Raised when a status change is not allowed by the invoice lifecycle."""

    def __init__(self, invoice_id: str, current: Any, target: Any) -> None:
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            f"Invoice {invoice_id} cannot move from {current_value} to {target_value}",
            details={"invoice_id": invoice_id, "current": current_value, "target": target_value},
        )
