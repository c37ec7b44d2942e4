"""
LineItem Entity - A single priced line on an invoice
"""

from __future__ import annotations

# Standard library imports
from dataclasses import dataclass, field
from decimal import Decimal

from ..exceptions import InvalidProductReference, InvalidQuantity
from ..services.identifiers import LINE_ITEM_ID_PREFIX, IIdGenerator, default_id_generator
from ..value_objects import Money
from ..value_objects.utils import ensure_decimal


def _new_line_item_id() -> str:
    return default_id_generator().next_id(LINE_ITEM_ID_PREFIX)


@dataclass(frozen=True)
class LineItem:
    """
    Immutable invoice line: a product, a positive quantity and a unit price.

    Quantities may be fractional (hours, kilograms). The id is assigned at
    construction; uniqueness within an invoice is checked by the invoice.
    """

    product_id: str
    quantity: Decimal
    unit_price: Money
    line_item_id: str = field(default_factory=_new_line_item_id)

    def __post_init__(self) -> None:
        """Validate and normalise line item attributes"""
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise InvalidProductReference(self.product_id)

        try:
            quantity = ensure_decimal(self.quantity)
        except (TypeError, ValueError) as e:
            raise InvalidQuantity(self.quantity) from e

        if quantity <= 0:
            raise InvalidQuantity(self.quantity)

        if not isinstance(self.unit_price, Money):
            raise TypeError(f"Unit price must be Money, got {type(self.unit_price).__name__}")

        if not self.line_item_id:
            raise ValueError("Line item ID cannot be empty")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "quantity", quantity)

    @classmethod
    def create(
        cls,
        product_id: str,
        quantity: Decimal | float | int | str,
        unit_price: Money,
        id_generator: IIdGenerator | None = None,
    ) -> LineItem:
        """Factory method assigning the id from an injected generator"""
        generator = id_generator or default_id_generator()
        return cls(
            product_id=product_id,
            quantity=quantity,  # type: ignore[arg-type]
            unit_price=unit_price,
            line_item_id=generator.next_id(LINE_ITEM_ID_PREFIX),
        )

    @property
    def currency(self) -> str:
        """Currency of the unit price"""
        return self.unit_price.currency

    def line_total(self) -> Money:
        """Get unit price multiplied by quantity"""
        return self.unit_price.multiply(self.quantity)

    def __str__(self) -> str:
        """String representation"""
        return (
            f"LineItem({self.line_item_id}: {self.quantity} x {self.product_id} "
            f"@ {self.unit_price} = {self.line_total()})"
        )
