"""Utility functions for value objects."""

# Standard library imports
from decimal import Decimal, InvalidOperation


def ensure_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert value to a finite Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Args:
        value: Value to convert to Decimal

    Returns:
        Decimal representation of the value

    Raises:
        TypeError: If value is not a number or numeric string
        ValueError: If value does not parse or is NaN/infinite
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
        raise TypeError(f"Expected a number, got {type(value).__name__}")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a decimal number: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Decimal value must be finite, got {value!r}")

    return result
