"""
Identifier generation - pluggable strategies for invoice, line item and payment ids.

Entities never generate ids from process-wide state. They receive an
``IIdGenerator`` so tests can use deterministic ids and deployments can pick
whatever strategy their storage needs.

Example:
    >>> generator = SequentialIdGenerator()
    >>> generator.next_id(INVOICE_ID_PREFIX)
    'INV-000001'
    >>> generator.next_id(LINE_ITEM_ID_PREFIX)
    'LI-000001'
"""

import itertools
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterator
from uuid import uuid4

INVOICE_ID_PREFIX = "INV"
LINE_ITEM_ID_PREFIX = "LI"
PAYMENT_ID_PREFIX = "PAY"


class IIdGenerator(ABC):
    """Interface for identifier generation strategies.

    Implementations must return ids that are unique per prefix for the
    lifetime of the generator.
    """

    @abstractmethod
    def next_id(self, prefix: str) -> str:
        """Return a new identifier beginning with ``prefix``."""
        pass


class UuidIdGenerator(IIdGenerator):
    """Random ids of the form ``INV-3F2504E04F8941D39A0C0305E82C3301``."""

    def next_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid4().hex.upper()}"


class SequentialIdGenerator(IIdGenerator):
    """Counter-based ids of the form ``INV-000001``.

    Each prefix has its own counter, and counters belong to the instance, so
    two generators never share state.
    """

    def __init__(self, start: int = 1, width: int = 6) -> None:
        if start < 0:
            raise ValueError("Sequence start cannot be negative")
        self._width = width
        self._counters: defaultdict[str, Iterator[int]] = defaultdict(
            lambda: itertools.count(start)
        )
        self._lock = threading.Lock()

    def next_id(self, prefix: str) -> str:
        with self._lock:
            value = next(self._counters[prefix])
        return f"{prefix}-{value:0{self._width}d}"


_default_generator = UuidIdGenerator()


def default_id_generator() -> IIdGenerator:
    """Get the generator used when an entity is built without one."""
    return _default_generator
