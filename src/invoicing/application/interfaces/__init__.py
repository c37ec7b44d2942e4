"""
Application Interfaces

Contracts the application layer needs from infrastructure.
"""

from .exceptions import (
    ConcurrencyError,
    EntityNotFoundError,
    InvoiceNotFoundError,
    RepositoryError,
)
from .repositories import IInvoiceRepository

__all__ = [
    "IInvoiceRepository",
    "RepositoryError",
    "EntityNotFoundError",
    "InvoiceNotFoundError",
    "ConcurrencyError",
]
