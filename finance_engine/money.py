"""
Decimal rounding helpers shared by the projector and the accountant.

All financial arithmetic stays in Decimal. Floats never enter the engine.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT_PLACES = 2
RATIO_PLACES = 4

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, str]


def to_decimal(value: Number) -> Decimal:
    """Convert ints and numeric strings to Decimal. Floats are rejected."""
    if isinstance(value, float):
        raise TypeError("Use Decimal or str for amounts, not float")
    if isinstance(value, Decimal):
        return value
    return Decimal(value)


def round_half_up(value: Decimal, places: int) -> Decimal:
    """Round to a fixed number of decimal places, half away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def divide_rounded(value: Decimal, divisor: int, places: int = CENT_PLACES) -> Decimal:
    """Divide and round half-up, the way every division in the engine rounds."""
    return round_half_up(value / Decimal(divisor), places)
