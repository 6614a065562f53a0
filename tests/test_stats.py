"""Median, mode and range over ints, decimals and fractions."""
from decimal import Decimal

import pytest

from fraction import Fraction
from rational import to_fraction
from stats import median, mode, mode_decimals, value_range


def test_median_odd_and_even():
    assert median([3, 1, 2]) == 2
    assert median([4, 1, 3, 2]) == Decimal("2.5")
    assert median([0.3, 0.1]) == Decimal("0.2")


def test_median_of_fractions():
    assert median([Fraction(3, 4), Fraction(1, 4), Fraction(1, 2)]) == Decimal("0.5")
    assert to_fraction(median([1, 2])) == Fraction(3, 2)


def test_median_empty():
    with pytest.raises(ValueError):
        median([])


def test_mode():
    assert mode([1, 2, 2, 3, 3]) == [2, 3]
    assert mode([3, 1, 3, 1, 2]) == [3, 1]
    assert mode([5]) == [5]
    assert mode([]) == []


def test_mode_compares_by_value():
    first = Fraction(1, 2)
    result = mode([first, Fraction(2, 4), Fraction(1, 3)])
    assert result == [Fraction(1, 2)]
    assert result[0] is first


def test_mode_decimals():
    assert mode_decimals([1, 1.0, 2]) == [Decimal(1)]
    assert mode_decimals([Fraction(1, 4), 0.25, Decimal("0.5")]) == [Decimal("0.25")]


def test_value_range():
    assert value_range([3, -2, 7]) == 9
    assert value_range([Fraction(1, 4), Fraction(3, 4)]) == Decimal("0.5")
    with pytest.raises(ValueError):
        value_range([])


def test_mode_of_mixed_number_types():
    quarter = Fraction(1, 4)
    result = mode([quarter, 0.25, Fraction(1, 2)])
    assert result == [Fraction(1, 4)]
    assert result[0] is quarter
    assert mode([Fraction(1, 2), Decimal("0.5")]) == [Fraction(1, 2)]
    assert mode([Decimal("0.5"), Fraction(1, 3), Fraction(1, 2), 2, 2.0]) == [Decimal("0.5"), 2]
