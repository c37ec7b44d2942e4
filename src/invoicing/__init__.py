"""Invoicing domain model: money, line items, invoices and payments."""

__version__ = "0.1.0"
