"""Domain services for business logic that spans entities."""

from .identifiers import (
    INVOICE_ID_PREFIX,
    LINE_ITEM_ID_PREFIX,
    PAYMENT_ID_PREFIX,
    IIdGenerator,
    SequentialIdGenerator,
    UuidIdGenerator,
    default_id_generator,
)

__all__ = [
    "IIdGenerator",
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "default_id_generator",
    "INVOICE_ID_PREFIX",
    "LINE_ITEM_ID_PREFIX",
    "PAYMENT_ID_PREFIX",
]
