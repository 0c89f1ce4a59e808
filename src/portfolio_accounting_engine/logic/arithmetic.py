# src/portfolio_accounting_engine/logic/arithmetic.py
"""
Fixed-precision helpers for monetary values.

Intermediate results are kept at four decimal places so sub-cent precision
survives several chained operations; `round2` is applied only when a figure
leaves the engine.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..constants import ARITHMETIC_PLACES, REPORTING_PLACES, ZERO

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number | None) -> Decimal:
    """
    Coerces a number to Decimal. Floats go through `str` so that their
    shortest repr is used instead of the exact binary expansion.
    Missing or unparseable values become zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def _fixed(value: Decimal) -> Decimal:
    return value.quantize(ARITHMETIC_PLACES, rounding=ROUND_HALF_UP)


def fixed(value: Number) -> Decimal:
    """Brings a raw input (e.g. a trade quantity) onto the same four-place grid as every running total."""
    return _fixed(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    return _fixed(to_decimal(a) + to_decimal(b))


def sub(a: Number, b: Number) -> Decimal:
    return _fixed(to_decimal(a) - to_decimal(b))


def mul(a: Number, b: Number) -> Decimal:
    return _fixed(to_decimal(a) * to_decimal(b))


def div(a: Number, b: Number) -> Decimal:
    """Divides a by b; a zero denominator yields zero instead of raising."""
    denominator = to_decimal(b)
    if denominator == ZERO:
        return _fixed(ZERO)
    return _fixed(to_decimal(a) / denominator)


def round2(value: Number) -> Decimal:
    """Rounds to cents for display and portfolio totals."""
    return to_decimal(value).quantize(REPORTING_PLACES, rounding=ROUND_HALF_UP)
