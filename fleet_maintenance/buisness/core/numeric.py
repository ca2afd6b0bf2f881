"""
Fail-soft decimal handling

Missing or unparseable numeric values count as zero so aggregated totals stay
defined when records are only partially filled in.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_decimal(value, default=ZERO):
    """
    Parse a value into a Decimal, returning `default` for None, blanks and garbage.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, bool):
        return default
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return default
    return result if result.is_finite() else default


def to_money(value):
    """Round to cents, as stored by Numeric(10, 2) columns"""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
