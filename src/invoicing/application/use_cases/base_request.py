"""
Request DTO base for the invoice use cases.

Adds tracing fields, a JSON-friendly ``to_dict`` and the logging context
(invoice and customer ids) that the use case base attaches to its log records.
"""

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from .base import UseCaseRequest

TRACING_FIELDS = ("request_id", "correlation_id", "metadata")
LOGGED_FIELDS = ("invoice_id", "customer_id", "line_item_id")


def _plain(value: Any) -> Any:
    """Render request values as JSON-compatible data, keeping money exact."""
    if isinstance(value, Decimal | UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {key: _plain(item) for key, item in asdict(value).items()}
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


@dataclass(kw_only=True)
class BaseRequestDTO(UseCaseRequest):
    """
    Base class for invoice request DTOs.

    Tracing fields are keyword-only so subclasses can declare their own
    required fields positionally.
    """

    request_id: UUID = field(default_factory=uuid4)
    correlation_id: UUID | None = field(default=None)
    metadata: dict[str, Any] = field(default_factory=dict)

    def with_correlation_id(self, correlation_id: UUID) -> "BaseRequestDTO":
        """Set the correlation ID and return self for chaining."""
        self.correlation_id = correlation_id
        return self

    def with_metadata(self, key: str, value: Any) -> "BaseRequestDTO":
        """Add metadata and return self for chaining."""
        self.metadata[key] = value
        return self

    def log_context(self) -> dict[str, str]:
        """Invoice identifiers carried by this request, for log records."""
        return {
            name: str(getattr(self, name))
            for name in LOGGED_FIELDS
            if getattr(self, name, None)
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert request to a JSON-friendly dictionary."""
        payload = {
            f.name: _plain(getattr(self, f.name))
            for f in fields(self)
            if f.name not in TRACING_FIELDS
        }
        return {
            "request_id": str(self.request_id),
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "metadata": _plain(self.metadata),
            **payload,
        }
