"""Two-decimal monetary arithmetic.

Every intermediate value of the delivery price is rounded with ``round2``
before it feeds the next step, so totals are reproducible to the cent.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Number) -> Decimal:
    """Convert *value* to ``Decimal`` without binary float artefacts.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    Raises ``ValueError`` for values that are not numbers.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


def round2(value: Number) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


# Money columns are DECIMAL(12, 2): at most 10 integer digits.
MONEY_INTEGER_DIGITS = 10
MONEY_LIMIT = Decimal(10) ** MONEY_INTEGER_DIGITS


def fits_money_column(value: Decimal) -> bool:
    """True when *value* is storable in a ``DECIMAL(12, 2)`` column."""
    return abs(value) < MONEY_LIMIT
