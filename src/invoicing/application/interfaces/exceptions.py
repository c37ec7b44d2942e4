"""
Repository Exception Definitions

Defines exceptions that repositories may raise.
Following clean architecture principles - these are application-level exceptions.
"""

# Standard library imports
from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class EntityNotFoundError(RepositoryError):
    """Raised when an entity is not found in the repository."""

    def __init__(self, entity_type: str, identifier: Any) -> None:
        super().__init__(f"{entity_type} with identifier '{identifier}' not found")
        self.entity_type = entity_type
        self.identifier = identifier


class InvoiceNotFoundError(EntityNotFoundError):
    """Raised when an invoice is not found."""

    def __init__(self, invoice_id: str) -> None:
        super().__init__("Invoice", invoice_id)
        self.invoice_id = invoice_id


class ConcurrencyError(RepositoryError):
    """Raised when a save is based on a version older than the stored one."""

    def __init__(
        self,
        entity_type: str,
        identifier: Any,
        expected_version: int | None = None,
        actual_version: int | None = None,
    ) -> None:
        message = f"{entity_type} with identifier '{identifier}' was modified by another process"
        if expected_version is not None and actual_version is not None:
            message += f" (saving version {expected_version}, stored version {actual_version})"
        super().__init__(message)
        self.entity_type = entity_type
        self.identifier = identifier
        self.expected_version = expected_version
        self.actual_version = actual_version
