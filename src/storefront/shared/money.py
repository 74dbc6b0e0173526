"""Fixed-point money helpers.

Aggregates persist amounts as floats; every calculation goes through
``Decimal`` and is rounded half-up to cents after each step.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce ``value`` to a Decimal rounded half-up to two places."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        # str() first so 6.99 stays 6.99 instead of its binary expansion
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(value, high))


def within_tolerance(a, b, tolerance: Decimal = CENT) -> bool:
    return abs(to_money(a) - to_money(b)) <= tolerance


def as_float(value: Decimal) -> float:
    return float(to_money(value))
