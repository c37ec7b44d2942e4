"""Repository implementations for the invoicing system."""

from .invoice_repository import InMemoryInvoiceRepository

__all__ = ["InMemoryInvoiceRepository"]
