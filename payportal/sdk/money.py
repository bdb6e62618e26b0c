"""Monetary amounts as fixed-point integer minor units.

Every amount is held internally as an integer number of cents. Values enter
through to_cents() / to_decimal() and leave through from_cents(), which always
yields a Decimal with exactly two places.

Rounding is half-up to the nearest cent, applied once per monetary product
(e.g. 58.75 x 1.25 x 5 = 367.1875 -> 367.19). Arithmetic runs in a context
sized from the operands, so amounts of any magnitude convert exactly.
"""

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    getcontext,
    localcontext,
)
from typing import Any, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
CENTS_PER_UNIT = 100


class InvalidInputError(ValueError):
    """Raised when a pay input is negative or cannot be read as a number."""
    pass


def to_decimal(value: Number, field: str = "amount") -> Decimal:
    """Convert a user-supplied number to Decimal without float artifacts.

    Floats go through their shortest repr, so 58.75 becomes Decimal('58.75')
    rather than the binary expansion.

    Raises:
        InvalidInputError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidInputError(f"{field}: expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            raise InvalidInputError(f"{field}: not a number: {value!r}")
    else:
        raise InvalidInputError(f"{field}: expected a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInputError(f"{field}: must be finite, got {value!r}")
    return result


def float_to_decimal(value: Any) -> Any:
    """Pydantic before-validator helper: floats go through repr, so 5249.99 stays exact."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _exact_context(*values: Decimal) -> Context:
    """Decimal context wide enough to multiply and quantize values exactly.

    The default 28-digit context raises InvalidOperation when quantizing
    amounts from about 1e26 up, so precision is sized from the operands.
    """
    digits = 0
    for value in values:
        _, coefficient, exponent = value.as_tuple()
        digits += len(coefficient) + abs(exponent)
    return Context(
        prec=max(getcontext().prec, digits + 4),
        rounding=ROUND_HALF_UP,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
    )


def round_cents(amount_in_cents: Decimal) -> int:
    """Round a fractional cent amount half-up to whole cents."""
    with localcontext(_exact_context(amount_in_cents)):
        return int(amount_in_cents.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_cents(value: Number, field: str = "amount") -> int:
    """Convert a currency amount (e.g. 4700.5) to integer cents (470050)."""
    return multiply_to_cents(to_decimal(value, field))


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a Decimal with exactly 2 decimal places."""
    amount = Decimal(cents)
    with localcontext(_exact_context(amount)):
        return amount.scaleb(-2).quantize(CENT)


def multiply_to_cents(amount: Decimal, *factors: Decimal) -> int:
    """Multiply a currency amount by factors, rounding the product once.

    Example:
        multiply_to_cents(Decimal("58.75"), Decimal("1.25"), Decimal("5"))  # -> 36719
    """
    with localcontext(_exact_context(amount, *factors, Decimal(CENTS_PER_UNIT))):
        product = amount * CENTS_PER_UNIT
        for factor in factors:
            product *= factor
        return round_cents(product)
