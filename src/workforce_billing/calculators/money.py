"""Fixed-precision money rounding."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

DEFAULT_SCALE = 2
MIN_SCALE = 0
MAX_SCALE = 6

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a caller-supplied value to Decimal.

    None, booleans, non-numeric strings, NaN and infinities all become zero,
    so a half-typed form field never poisons a calculation.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # repr() gives the shortest string that round-trips, which drops
        # binary drift such as 150.005 -> 150.00499999999999545...
        result = Decimal(repr(value))
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO

    if not result.is_finite():
        return ZERO
    return result


def clamp_scale(scale: Any) -> int:
    """Clamp a decimal scale into the supported [0, 6] range."""
    try:
        value = int(scale)
    except (TypeError, ValueError):
        return DEFAULT_SCALE
    return max(MIN_SCALE, min(MAX_SCALE, value))


def quantum(scale: int) -> Decimal:
    """Return the quantize exponent for a scale, e.g. 2 -> Decimal('0.01')."""
    return Decimal(1).scaleb(-clamp_scale(scale))


def round_money(amount: Any, scale: int = DEFAULT_SCALE) -> Decimal:
    """Round an amount half-away-from-zero at the given scale.

    Every computed amount passes through here before it is compared, stored
    or displayed. Idempotent: round_money(round_money(x)) == round_money(x).
    """
    value = to_decimal(amount)
    digits = clamp_scale(scale)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the scale
        ctx.prec = max(ctx.prec, value.adjusted() + digits + 2)
        return value.quantize(quantum(digits), rounding=ROUND_HALF_UP)


def sum_money(amounts: Any, scale: int = DEFAULT_SCALE) -> Decimal:
    """Sum amounts and round the result once."""
    total = ZERO
    for amount in amounts:
        total += to_decimal(amount)
    return round_money(total, scale)
