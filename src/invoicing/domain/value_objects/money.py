"""Money value object for representing monetary values with currency."""

# Standard library imports
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Self

from ..exceptions import (
    CurrencyMismatch,
    InvalidAmount,
    InvalidCurrency,
    InvalidFactor,
    InvalidFormat,
    NegativeResult,
)
from .base import ComparableValueObject
from .utils import ensure_decimal

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")
DECIMAL_TOKEN_PATTERN = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")

# Amounts are held in minor units (cents) so that equality is exact and the
# canonical text form round-trips.
MINOR_UNIT_PLACES = 2
MINOR_UNIT = Decimal(1).scaleb(-MINOR_UNIT_PLACES)


class Money(ComparableValueObject):
    """Immutable, non-negative amount of money in a single currency.

    Money deliberately cannot represent negative balances: subtracting a larger
    amount raises ``NegativeResult`` instead of producing a signed value.
    """

    __slots__ = ("_amount", "_currency")

    def __init__(self, amount: Decimal | float | int | str, currency: str = "USD") -> None:
        """Initialize Money with amount and currency.

        Args:
            amount: The monetary amount (converted to Decimal, rounded half-up
                to two decimal places)
            currency: Three uppercase letters, e.g. ``"USD"``

        Raises:
            InvalidAmount: If amount is negative, non-finite or not a number
            InvalidCurrency: If currency is not three uppercase letters
        """
        try:
            value = ensure_decimal(amount)
        except (TypeError, ValueError) as e:
            raise InvalidAmount(amount, reason="Money amount must be a finite number") from e

        if value < 0:
            raise InvalidAmount(amount)

        if not isinstance(currency, str) or not CURRENCY_CODE_PATTERN.match(currency):
            raise InvalidCurrency(currency)

        try:
            quantized = value.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise InvalidAmount(amount, reason="Money amount is too large") from e

        # abs() folds Decimal("-0.00") into "0.00"
        self._amount = abs(quantized)
        self._currency = currency

    @classmethod
    def parse(cls, text: str) -> Self:
        """Create Money from its canonical text form, e.g. ``"100.00 USD"``.

        Raises:
            InvalidFormat: If text is not exactly ``"<decimal> <CCY>"``
            InvalidAmount: If the decimal is negative
            InvalidCurrency: If the currency code is invalid
        """
        if not isinstance(text, str):
            raise InvalidFormat(text)

        tokens = text.split()
        if len(tokens) != 2 or not DECIMAL_TOKEN_PATTERN.match(tokens[0]):
            raise InvalidFormat(text)

        amount, currency = tokens
        return cls(Decimal(amount), currency)

    @classmethod
    def zero(cls, currency: str = "USD") -> Self:
        """Create a zero amount in the given currency."""
        return cls(Decimal("0"), currency)

    @classmethod
    def from_minor_units(cls, units: int, currency: str = "USD") -> Self:
        """Create Money from an integer count of minor units (cents)."""
        return cls(Decimal(units).scaleb(-MINOR_UNIT_PLACES), currency)

    @property
    def amount(self) -> Decimal:
        """Get the decimal amount."""
        return self._amount

    @property
    def currency(self) -> str:
        """Get the currency code."""
        return self._currency

    def to_minor_units(self) -> int:
        """Get the amount as an integer count of minor units."""
        return int(self._amount.scaleb(MINOR_UNIT_PLACES))

    def add(self, other: Self) -> Self:
        """Add two money values.

        Raises:
            CurrencyMismatch: If currencies don't match
        """
        self._ensure_same_currency(other, "add")
        return type(self)(self._amount + other._amount, self._currency)

    def subtract(self, other: Self) -> Self:
        """Subtract another money value.

        Raises:
            CurrencyMismatch: If currencies don't match
            NegativeResult: If other is larger than this amount
        """
        self._ensure_same_currency(other, "subtract")
        result = self._amount - other._amount
        if result < 0:
            raise NegativeResult(self, other)
        return type(self)(result, self._currency)

    def multiply(self, factor: Decimal | float | int | str) -> Self:
        """Multiply money by a non-negative factor, e.g. a quantity.

        Raises:
            InvalidFactor: If factor is negative or not a finite number
        """
        try:
            value = ensure_decimal(factor)
        except (TypeError, ValueError) as e:
            raise InvalidFactor(factor) from e

        if value < 0:
            raise InvalidFactor(factor)

        return type(self)(self._amount * value, self._currency)

    def equals(self, other: object) -> bool:
        """Check exact amount and currency equality."""
        return self == other

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self._amount == 0

    def is_positive(self) -> bool:
        """Check if amount is positive."""
        return self._amount > 0

    def format(self) -> str:
        """Format as ``"<amount with two decimals> <CCY>"``."""
        return f"{self._amount:.{MINOR_UNIT_PLACES}f} {self._currency}"

    def _ensure_same_currency(self, other: Any, operation: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self._currency != other._currency:
            raise CurrencyMismatch(self._currency, other._currency, operation)

    def _components(self) -> tuple[Decimal, str]:
        return (self._amount, self._currency)

    def _ordering_key(self) -> Decimal:
        return self._amount

    def _check_comparable(self, other: Self) -> None:
        self._ensure_same_currency(other, "compare")

    def __repr__(self) -> str:
        """Get string representation for debugging."""
        return f"Money({self._amount}, '{self._currency}')"

    def __str__(self) -> str:
        """Get string representation for display."""
        return self.format()

    def __add__(self, other: Self) -> Self:
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Self) -> Self:
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Decimal | float | int) -> Self:
        if isinstance(other, Money):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Decimal | float | int) -> Self:
        return self.__mul__(other)
