from decimal import ROUND_HALF_UP, Decimal

TWO_DP = Decimal("0.01")


def as_decimal(value) -> Decimal:
    """Coerce a strategy result (int, float, str or Decimal) to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    # floats go through str() so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


def round_money(value) -> Decimal:
    """Round to 2 dp, halves away from zero."""
    return as_decimal(value).quantize(TWO_DP, rounding=ROUND_HALF_UP)
