"""Decimal to fixed-point quantum conversion.

Paradex signs sizes and prices as integers scaled by 10**precision. The
transmitted human-readable value and the signed quantum must agree, so
conversion uses Decimal arithmetic only and always rounds DOWN (floor).
"""

from decimal import ROUND_FLOOR, Decimal, InvalidOperation, localcontext

from paradex_bot.exceptions import ParseError, ValidationError


def parse_decimal(amount: str | Decimal | int) -> Decimal:
    """Parse a human-readable amount into a finite Decimal.

    Raises:
        ParseError: If the value is not a finite decimal number.
        ValidationError: If a float is passed (binary floats drift).
    """
    if isinstance(amount, float):
        raise ValidationError(f"Float amounts are not accepted: {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as exc:
            raise ParseError(f"Malformed numeric value: {amount!r}") from exc
    if not value.is_finite():
        raise ParseError(f"Numeric value must be finite: {amount!r}")
    return value


def to_quantums(amount: str | Decimal | int, precision: int) -> str:
    """Convert an amount to quantums, flooring toward negative infinity.

    Examples:
        to_quantums("1.23456789", 8)  -> "123456789"
        to_quantums("1.234567891", 8) -> "123456789"
        to_quantums("-0.000000001", 8) -> "-1"

    Args:
        amount: Decimal string or Decimal in human units.
        precision: Number of decimals the destination contract works with.

    Returns:
        Base-10 integer string with no fraction or exponent.
    """
    if precision < 0:
        raise ValidationError(f"Precision must be non-negative, got {precision}")

    value = parse_decimal(amount)
    digits = len(value.as_tuple().digits)

    # Enough precision to scale and floor without any intermediate rounding.
    with localcontext() as ctx:
        ctx.prec = max(28, digits + precision + abs(value.as_tuple().exponent) + 2)
        scaled = value.scaleb(precision)
        quantums = scaled.to_integral_value(rounding=ROUND_FLOOR)

    return str(int(quantums))
