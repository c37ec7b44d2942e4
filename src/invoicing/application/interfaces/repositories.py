"""
Repository Interface Definitions

Defines the contracts that infrastructure repositories must implement.
Following the Repository pattern and clean architecture principles.
"""

# Standard library imports
from abc import abstractmethod
from typing import Protocol

# Local imports
from invoicing.domain.entities.invoice import Invoice


class IInvoiceRepository(Protocol):
    """
    Invoice repository interface.

    Defines operations for persisting and retrieving Invoice aggregates.
    The infrastructure layer must implement this interface.

    Implementations must give at-most-one-writer semantics per invoice id;
    the aggregate's invariants only hold under serialised mutation.
    """

    @abstractmethod
    async def save_invoice(self, invoice: Invoice) -> Invoice:
        """
        Save a new invoice or update an existing one (last write wins per id).

        Args:
            invoice: The invoice aggregate to save

        Returns:
            The saved invoice

        Raises:
            ConcurrencyError: If the invoice was modified since it was loaded
            RepositoryError: If save operation fails
        """
        ...

    @abstractmethod
    async def get_invoice_by_id(self, invoice_id: str) -> Invoice | None:
        """
        Retrieve the most recently saved state of an invoice.

        Args:
            invoice_id: The unique identifier of the invoice

        Returns:
            The invoice if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_invoices_by_customer(self, customer_id: str) -> list[Invoice]:
        """
        Retrieve all invoices for a customer.

        Args:
            customer_id: The customer reference

        Returns:
            List of invoices for the customer, empty if none found
        """
        ...

    @abstractmethod
    async def delete_invoice(self, invoice_id: str) -> bool:
        """
        Delete an invoice.

        Args:
            invoice_id: The unique identifier of the invoice

        Returns:
            True if an invoice was deleted, False if none existed
        """
        ...
