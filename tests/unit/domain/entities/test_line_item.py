"""
Unit tests for the LineItem entity.
"""

# Standard library imports
import dataclasses
from decimal import Decimal

# Third-party imports
import pytest

# Local imports
from invoicing.domain.entities import LineItem
from invoicing.domain.exceptions import InvalidProductReference, InvalidQuantity
from invoicing.domain.services.identifiers import SequentialIdGenerator
from invoicing.domain.value_objects import Money


class TestLineItemCreation:
    """Test line item construction and validation."""

    def test_create_valid_line_item(self):
        """Test a valid line item keeps its fields and normalises quantity."""
        item = LineItem("PROD-001", 2, Money("50.00"), line_item_id="LI-1")

        assert item.product_id == "PROD-001"
        assert item.quantity == Decimal("2")
        assert isinstance(item.quantity, Decimal)
        assert item.unit_price == Money("50.00")
        assert item.currency == "USD"
        assert item.line_item_id == "LI-1"

    def test_create_with_generator(self):
        """Test the factory takes its id from the injected generator."""
        generator = SequentialIdGenerator()
        first = LineItem.create("PROD-001", 1, Money("1.00"), id_generator=generator)
        second = LineItem.create("PROD-001", 1, Money("1.00"), id_generator=generator)

        assert first.line_item_id == "LI-000001"
        assert second.line_item_id == "LI-000002"

    def test_default_ids_are_unique(self):
        """Test line items built without an id get distinct ones."""
        first = LineItem("PROD-001", 1, Money("1.00"))
        second = LineItem("PROD-001", 1, Money("1.00"))
        assert first.line_item_id.startswith("LI-")
        assert first.line_item_id != second.line_item_id

    @pytest.mark.parametrize("quantity", [0, -1, Decimal("-0.5"), "0", "abc", float("nan"), None])
    def test_invalid_quantity(self, quantity):
        """Test non-positive or non-numeric quantities raise InvalidQuantity."""
        with pytest.raises(InvalidQuantity):
            LineItem("PROD-001", quantity, Money("1.00"))

    @pytest.mark.parametrize("product_id", ["", "   ", None])
    def test_invalid_product_reference(self, product_id):
        """Test a missing product reference raises InvalidProductReference."""
        with pytest.raises(InvalidProductReference):
            LineItem(product_id, 1, Money("1.00"))

    def test_unit_price_must_be_money(self):
        """Test plain numbers are refused as unit prices."""
        with pytest.raises(TypeError):
            LineItem("PROD-001", 1, Decimal("1.00"))  # type: ignore[arg-type]

    def test_empty_id_rejected(self):
        """Test an explicit empty id raises ValueError."""
        with pytest.raises(ValueError):
            LineItem("PROD-001", 1, Money("1.00"), line_item_id="")

    def test_is_immutable(self):
        """Test fields cannot be reassigned."""
        item = LineItem("PROD-001", 1, Money("1.00"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.quantity = Decimal("5")  # type: ignore[misc]


class TestLineItemTotal:
    """Test line total calculation."""

    @pytest.mark.parametrize(
        ("quantity", "price", "expected"),
        [
            (2, "50.00 USD", "100.00 USD"),
            (1, "100.00 USD", "100.00 USD"),
            (3, "25.00 USD", "75.00 USD"),
            (Decimal("1.5"), "80.00 EUR", "120.00 EUR"),
            ("0.333", "0.10 USD", "0.03 USD"),
        ],
    )
    def test_line_total(self, quantity, price, expected):
        """Test line total is unit price times quantity, rounded to cents."""
        item = LineItem("PROD-001", quantity, Money.parse(price))
        assert item.line_total() == Money.parse(expected)

    def test_str(self):
        """Test the display form mentions the product and the total."""
        item = LineItem("PROD-001", 2, Money("50.00"), line_item_id="LI-1")
        text = str(item)
        assert "PROD-001" in text
        assert "100.00 USD" in text
