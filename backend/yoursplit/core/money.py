"""
Currency helpers for exact minor-unit arithmetic.

Amounts cross the API boundary as decimals with two places and are turned
into integer cents before any sum, split or comparison happens.
"""
from decimal import Decimal, ROUND_HALF_UP
from collections.abc import Hashable
from typing import List, Sequence, Tuple, Union

MINOR_UNITS_PER_MAJOR = 100
CENTS = Decimal("0.01")
MAX_DIGITS = 15  # Same width as a NUMERIC(15, 2) money column

Amount = Union[Decimal, int, float, str]


def qround(d: Decimal) -> Decimal:
    """Round a decimal half-up to whole cents."""
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: Amount) -> Decimal:
    """Convert an amount to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_minor_units(value: Amount) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Anything finer than a cent is rounded half-up, so ``10.005`` becomes
    ``1001``.
    """
    scaled = to_decimal(value) * MINOR_UNITS_PER_MAJOR
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(units: int) -> Decimal:
    """Convert integer minor units back to a two-place Decimal."""
    return qround(Decimal(units) / MINOR_UNITS_PER_MAJOR)


def split_evenly(total: int, keys: Sequence[Hashable]) -> List[Tuple[Hashable, int]]:
    """
    Split ``total`` minor units as evenly as possible across ``keys``.

    Every key gets ``total // len(keys)``; the first ``total % len(keys)``
    keys get one extra unit each, so the shares always add up to ``total``
    exactly. Callers pass keys already in the order the remainder should go.

    Example:
        >>> split_evenly(10000, ["a", "b", "c"])
        [('a', 3334), ('b', 3333), ('c', 3333)]
    """
    if not keys:
        raise ValueError("At least one key required")

    base, remainder = divmod(total, len(keys))
    return [(key, base + 1 if i < remainder else base) for i, key in enumerate(keys)]
