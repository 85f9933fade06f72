"""Tests for quantum conversion -- floor rounding with exact Decimal arithmetic."""

from decimal import Decimal

import pytest

from paradex_bot.exceptions import ParseError, ValidationError
from paradex_bot.signing.quantums import parse_decimal, to_quantums


class TestToQuantums:
    """to_quantums(amount, precision) -> integer string."""

    def test_exact_eight_decimals(self) -> None:
        assert to_quantums("1.23456789", 8) == "123456789"

    def test_extra_digit_is_dropped(self) -> None:
        assert to_quantums("1.234567891", 8) == "123456789"

    def test_extra_digit_never_rounds_up(self) -> None:
        assert to_quantums("1.234567899", 8) == "123456789"

    def test_zero(self) -> None:
        assert to_quantums("0", 8) == "0"

    def test_below_one_quantum_is_zero(self) -> None:
        assert to_quantums("0.000000009", 8) == "0"

    def test_negative_floors_toward_negative_infinity(self) -> None:
        assert to_quantums("-0.000000001", 8) == "-1"
        assert to_quantums("-1.234567891", 8) == "-123456790"

    def test_integer_amount(self) -> None:
        assert to_quantums("42", 8) == "4200000000"

    def test_zero_precision(self) -> None:
        assert to_quantums("7.9", 0) == "7"

    def test_decimal_input(self) -> None:
        assert to_quantums(Decimal("0.5"), 8) == "50000000"

    def test_scientific_notation_renders_plain(self) -> None:
        assert to_quantums("1e-3", 8) == "100000"
        assert to_quantums("1E+3", 8) == "100000000000"

    def test_eighteen_significant_digits_exact(self) -> None:
        assert to_quantums("1234567890.12345678", 8) == "123456789012345678"

    def test_thirty_significant_digits_exact(self) -> None:
        amount = "1234567890123456789012.12345678"
        assert to_quantums(amount, 8) == "123456789012345678901212345678"

    def test_high_precision(self) -> None:
        assert to_quantums("1.5", 18) == "1500000000000000000"

    def test_no_fraction_or_exponent_in_output(self) -> None:
        result = to_quantums("100", 8)
        assert "." not in result
        assert "E" not in result.upper()


class TestToQuantumsErrors:
    """Malformed input handling."""

    def test_malformed_string_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            to_quantums("abc", 8)

    def test_empty_string_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            to_quantums("", 8)

    def test_nan_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            to_quantums("NaN", 8)

    def test_infinity_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            to_quantums("Infinity", 8)

    def test_negative_precision_rejected(self) -> None:
        with pytest.raises(ValidationError):
            to_quantums("1", -1)

    def test_float_rejected(self) -> None:
        with pytest.raises(ValidationError):
            to_quantums(1.5, 8)  # type: ignore[arg-type]


class TestParseDecimal:
    def test_strips_whitespace(self) -> None:
        assert parse_decimal(" 1.25 ") == Decimal("1.25")

    def test_int_accepted(self) -> None:
        assert parse_decimal(3) == Decimal("3")
