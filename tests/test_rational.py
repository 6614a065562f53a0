"""Decimal/fraction conversion and the notation helpers."""
from decimal import Decimal

import pytest

from fraction import Fraction
from rational import (
    INT32_MAX,
    INT32_MIN,
    decimal_to_fraction_parts,
    decimal_to_scientific_string,
    fractional_digits,
    fractional_digits_value,
    has_decimal_notation,
    has_scientific_notation,
    scientific_to_decimal_string,
    to_decimal,
    to_fraction,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0.5"), (5, 10)),
        (Decimal("-1.25"), (-125, 100)),
        (Decimal("3"), (3, 1)),
        (Decimal("2.000"), (2, 1)),
        (Decimal("0.1234567891"), (123456789, 10**9)),
        (Decimal("0.0000000015"), (2, 10**9)),
        (Decimal("0.0000000005"), (0, 1)),
        (0.1, (1, 10)),
        ("0.25", (25, 100)),
        (7, (7, 1)),
    ],
)
def test_parts(value, expected):
    assert decimal_to_fraction_parts(value) == expected


def test_large_magnitudes_are_truncated():
    assert decimal_to_fraction_parts(Decimal("123456789.75")) == (123456789, 1)
    assert decimal_to_fraction_parts(Decimal("-123456789.75")) == (-123456789, 1)
    assert decimal_to_fraction_parts(Decimal(INT32_MAX) + Decimal("0.5")) == (INT32_MAX, 1)
    assert decimal_to_fraction_parts(Decimal("-2147483648.5")) == (INT32_MIN, 1)


def test_digits_that_do_not_fit_are_rounded_again():
    # 12345.678901234 has too many digits for an int32 numerator
    assert decimal_to_fraction_parts(Decimal("12345.6789012345")) == (123456789, 10000)


@pytest.mark.parametrize(
    "value", [Decimal(2**31), Decimal(-(2**31) - 1), Decimal("1e12"), 2**40]
)
def test_out_of_range_overflows(value):
    with pytest.raises(OverflowError):
        decimal_to_fraction_parts(value)


def test_int32_limits_are_accepted():
    assert decimal_to_fraction_parts(Decimal(INT32_MAX)) == (INT32_MAX, 1)
    assert decimal_to_fraction_parts(Decimal(INT32_MIN)) == (INT32_MIN, 1)


def test_to_decimal_rejects_bad_input():
    with pytest.raises(TypeError):
        to_decimal([1, 2])
    with pytest.raises(ValueError):
        to_decimal("abc")
    with pytest.raises(ValueError):
        to_decimal(float("inf"))


def test_to_decimal_accepts_fractions():
    assert to_decimal(Fraction(1, 4)) == Decimal("0.25")


def test_fractional_digits():
    assert fractional_digits(Decimal("3.1400")) == "1400"
    assert fractional_digits(Decimal("-0.05")) == "05"
    assert fractional_digits(5) is None
    assert fractional_digits_value(Decimal("2.050")) == 50
    assert fractional_digits_value(Decimal("2")) is None


def test_to_fraction_simplifies():
    f = to_fraction(Decimal("0.75"))
    assert (f.numerator, f.denominator) == (3, 4)
    assert to_fraction(-2) == Fraction(-2, 1)


@pytest.mark.parametrize(
    "value, expected",
    [(1e16, True), (1e15, False), (1.5e-05, True), (0.0001, False), ("1e16", True)],
)
def test_has_scientific_notation(value, expected):
    assert has_scientific_notation(value) is expected
    assert has_decimal_notation(value) is not expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1.5e-05, "0.000015"),
        (1e16, "10000000000000000"),
        (-2.5e-07, "-0.00000025"),
        (1.2345e20, "123450000000000000000"),
        ("1.5e-05", "0.000015"),
        (12.5, "12.5"),
    ],
)
def test_scientific_to_decimal_string(value, expected):
    assert scientific_to_decimal_string(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1234.5, "1.2345E+03"),
        (0, "0E+00"),
        (-0.5, "-5E-01"),
        (1000.0, "1E+03"),
        (0.00012, "1.2E-04"),
        (5, "5E+00"),
        (1e16, "1E+16"),
        ("-1234.5", "-1.2345E+03"),
    ],
)
def test_decimal_to_scientific_string(value, expected):
    assert decimal_to_scientific_string(value) == expected


def test_scientific_string_rejects_non_finite():
    with pytest.raises(ValueError):
        decimal_to_scientific_string(float("nan"))
