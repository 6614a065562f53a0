"""
Descriptive statistics over ints, Decimals, floats and Fractions.

Values are compared in the wide decimal domain; results are Decimals and can
be turned back into fractions with ``rational.to_fraction``.
"""
from __future__ import annotations
from decimal import Decimal, localcontext
from typing import Any, Iterable, List

import numpy as np

from rational import WIDE_CONTEXT, to_decimal


def _decimals(values: Iterable[Any]) -> np.ndarray:
    items = [to_decimal(v) for v in values]
    array = np.empty(len(items), dtype=object)
    array[:] = items
    return array


def median(values: Iterable[Any]) -> Decimal:
    """Middle value; for an even count the mean of the two middle values."""
    numbers = np.sort(_decimals(values))
    count = len(numbers)
    if count == 0:
        raise ValueError("median() of an empty sequence")
    with localcontext(WIDE_CONTEXT):
        if count % 2 == 0:
            return numbers[count // 2 - 1] / 2 + numbers[count // 2] / 2
        return numbers[count // 2]


def mode(values: Iterable[Any]) -> List[Any]:
    """Most frequent values, in order of first appearance.

    Equality is by value, so ``Fraction(1, 2)`` and ``Fraction(2, 4)`` count
    as the same value; the first one seen is reported. An empty input gives
    an empty list.
    """
    items = list(values)
    if not items:
        return []
    # group on decimal keys so mixed number types compare with each other
    _, first_index, counts = np.unique(
        _decimals(items), return_index=True, return_counts=True
    )
    winners = np.sort(first_index[counts == counts.max()])
    return [items[i] for i in winners]


def mode_decimals(values: Iterable[Any]) -> List[Decimal]:
    return mode(to_decimal(v) for v in values)


def value_range(values: Iterable[Any]) -> Decimal:
    """Difference between the largest and the smallest value."""
    numbers = _decimals(values)
    if len(numbers) == 0:
        raise ValueError("value_range() of an empty sequence")
    with localcontext(WIDE_CONTEXT):
        return numbers.max() - numbers.min()
