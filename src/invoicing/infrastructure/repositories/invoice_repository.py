"""
In-Memory Invoice Repository Implementation

Concrete implementation of IInvoiceRepository backed by a dictionary.
Stores deep copies so callers never share state with the store, and uses
optimistic versioning so two writers that loaded the same version cannot
both save.
"""

# Standard library imports
import asyncio
import copy
import logging

# Local imports
from invoicing.application.interfaces.exceptions import ConcurrencyError
from invoicing.application.interfaces.repositories import IInvoiceRepository
from invoicing.domain.entities.invoice import Invoice

logger = logging.getLogger(__name__)


class InMemoryInvoiceRepository(IInvoiceRepository):
    """
    In-memory implementation of IInvoiceRepository.

    Useful for tests, prototyping and single-process deployments.
    """

    def __init__(self) -> None:
        self._invoices: dict[str, Invoice] = {}
        self._lock = asyncio.Lock()

    async def save_invoice(self, invoice: Invoice) -> Invoice:
        """
        Save a new invoice or update an existing one.

        Args:
            invoice: The invoice to save; its version is bumped on success

        Returns:
            The saved invoice

        Raises:
            ConcurrencyError: If the stored invoice has a different version
        """
        async with self._lock:
            stored = self._invoices.get(invoice.invoice_id)
            if stored is not None and stored.version != invoice.version:
                logger.warning(
                    f"Rejected stale save of invoice {invoice.invoice_id}",
                    extra={
                        "invoice_id": invoice.invoice_id,
                        "expected_version": invoice.version,
                        "actual_version": stored.version,
                    },
                )
                raise ConcurrencyError(
                    "Invoice", invoice.invoice_id, invoice.version, stored.version
                )

            invoice.increment_version()
            self._invoices[invoice.invoice_id] = copy.deepcopy(invoice)

        logger.debug(
            f"Saved invoice {invoice.invoice_id} at version {invoice.version}",
            extra={"invoice_id": invoice.invoice_id},
        )
        return invoice

    async def get_invoice_by_id(self, invoice_id: str) -> Invoice | None:
        """Retrieve a copy of the most recently saved invoice state."""
        stored = self._invoices.get(invoice_id)
        if stored is None:
            return None
        return copy.deepcopy(stored)

    async def get_invoices_by_customer(self, customer_id: str) -> list[Invoice]:
        """Retrieve copies of a customer's invoices, oldest first."""
        invoices = [
            copy.deepcopy(invoice)
            for invoice in self._invoices.values()
            if invoice.customer_id == customer_id
        ]
        return sorted(invoices, key=lambda invoice: invoice.created_at)

    async def delete_invoice(self, invoice_id: str) -> bool:
        """Delete an invoice, returning whether one existed."""
        async with self._lock:
            deleted = self._invoices.pop(invoice_id, None) is not None

        if deleted:
            logger.info(f"Deleted invoice {invoice_id}", extra={"invoice_id": invoice_id})
        return deleted

    async def count(self) -> int:
        """Number of stored invoices."""
        return len(self._invoices)
