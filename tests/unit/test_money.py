"""Tests for fixed-point money conversion."""

from decimal import Decimal

import pytest

from payportal.sdk.money import (
    InvalidInputError,
    float_to_decimal,
    from_cents,
    multiply_to_cents,
    to_cents,
    to_decimal,
)


class TestToDecimal:
    """Boundary conversion of user-supplied numbers."""

    def test_float_keeps_shortest_repr(self):
        assert to_decimal(58.75) == Decimal("58.75")
        assert to_decimal(0.1) == Decimal("0.1")

    def test_string_with_thousands_separator(self):
        assert to_decimal("10,000.50") == Decimal("10000.50")

    @pytest.mark.parametrize("value", ["abc", "", "NaN", float("inf"), True, None, [1]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(InvalidInputError):
            to_decimal(value)

    def test_error_names_the_field(self):
        with pytest.raises(InvalidInputError, match="hourly_rate"):
            to_decimal("x", "hourly_rate")


class TestCents:
    """Integer minor units in, 2-place Decimals out."""

    def test_to_cents_rounds_half_up(self):
        assert to_cents("0.005") == 1
        assert to_cents("0.004") == 0
        assert to_cents(4700) == 470000

    def test_from_cents_always_two_places(self):
        assert str(from_cents(470000)) == "4700.00"
        assert str(from_cents(36719)) == "367.19"
        assert str(from_cents(0)) == "0.00"

    def test_multiply_rounds_product_once(self):
        """58.75 x 1.25 x 5 = 367.1875 -> 367.19"""
        assert multiply_to_cents(Decimal("58.75"), Decimal("1.25"), Decimal("5")) == 36719

    def test_multiply_without_factors_converts_amount(self):
        assert multiply_to_cents(Decimal("1000")) == 100000

    @pytest.mark.parametrize("value,cents", [
        ("1e30", 10 ** 32),
        (Decimal("1E+40"), 10 ** 42),
        ("123456789012345678901234567890.125", 12345678901234567890123456789013),
    ])
    def test_beyond_default_precision(self, value, cents):
        assert to_cents(value) == cents

    def test_from_cents_beyond_default_precision(self):
        assert str(from_cents(10 ** 32 + 5)) == "1" + "0" * 30 + ".05"

    def test_multiply_beyond_default_precision(self):
        assert multiply_to_cents(Decimal("58.75"), Decimal("1E+30")) == 5875 * 10 ** 30


class TestFloatToDecimal:

    def test_float_uses_repr(self):
        assert float_to_decimal(5249.99) == Decimal("5249.99")

    def test_other_values_pass_through(self):
        assert float_to_decimal("5249.99") == "5249.99"
        assert float_to_decimal(7) == 7
