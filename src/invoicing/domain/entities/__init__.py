"""Domain entities with business logic."""

from .invoice import DEFAULT_CURRENCY, Invoice, InvoiceStatus
from .line_item import LineItem
from .payment import Payment

__all__ = ["DEFAULT_CURRENCY", "Invoice", "InvoiceStatus", "LineItem", "Payment"]
