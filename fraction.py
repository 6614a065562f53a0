from __future__ import annotations
from decimal import Decimal, localcontext
from typing import Any, Callable, ClassVar, Optional, Tuple, Union
import logging
import operator
import re

import numpy as np

from primes import PrimeGenerator
from rational import (
    INT32_MAX,
    INT32_MIN,
    WIDE_CONTEXT,
    decimal_to_fraction_parts,
    to_fraction,
)

logger = logging.getLogger(__name__)

# Simplification is skipped when the denominator and the numerator both reach
# their limit, trial division over the primes is too slow past that point.
SIMPLIFY_DENOMINATOR_LIMIT = 100_000
SIMPLIFY_NUMERATOR_LIMIT = 10_110

INTEGER_DTYPES: Tuple[np.dtype, ...] = tuple(
    np.dtype(t)
    for t in (
        np.int8,
        np.int16,
        np.int32,
        np.int64,
        np.uint8,
        np.uint16,
        np.uint32,
        np.uint64,
    )
)

_INTEGER_RE = re.compile(r"\s*([+-]?\d+)\s*", re.ASCII)
_FRACTION_RE = re.compile(r"\s*([+-]?\d+)\s*/\s*([+-]?\d+)\s*", re.ASCII)

FractionLike = Union["Fraction", int]
DTypeLike = Union[str, type, np.dtype]


# =====================
# Integer widths
# =====================


def _integer_dtype(dtype: DTypeLike) -> np.dtype:
    dt = np.dtype(dtype)
    if dt not in INTEGER_DTYPES:
        raise TypeError(f"Unsupported integer width {dtype!r}")
    return dt


def _wrap(value: int, dtype: DTypeLike = "int32") -> int:
    """Reduce value into the range of dtype the way a narrowing cast does."""
    info = np.iinfo(_integer_dtype(dtype))
    span = info.max - info.min + 1
    return info.min + (value - info.min) % span


def _checked(value: int, dtype: DTypeLike = "int32") -> int:
    dt = _integer_dtype(dtype)
    info = np.iinfo(dt)
    if not info.min <= value <= info.max:
        raise OverflowError(f"{value} is out of range for {dt.name}")
    return value


def _as_int(value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(
            f"Fraction components must be integers, not {type(value).__name__}"
        ) from None


def _strip_common_primes(numerator: int, denominator: int) -> Tuple[int, int]:
    primes = PrimeGenerator()
    prime = primes.next()
    while prime <= numerator and prime <= denominator:
        if numerator % prime == 0 and denominator % prime == 0:
            numerator //= prime
            denominator //= prime
            # a smaller prime may divide both again
            primes.reset()
        prime = primes.next()
    return numerator, denominator


def _coerce(value: Any) -> Optional[Fraction]:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, np.integer)):
        return Fraction(int(value), 1)
    return None


def _require(value: Any) -> Fraction:
    fraction = _coerce(value)
    if fraction is None:
        raise TypeError(f"Expected Fraction or int, got {type(value).__name__}")
    return fraction


def _operand_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, Fraction):
        return value.to_decimal()
    if isinstance(value, (int, np.integer)):
        return Decimal(int(value))
    return None


class Fraction:
    """Rational number with 32-bit numerator and denominator.

    Construction goes through the decimal domain: the quotient is rounded to
    nine places and turned back into a numerator over a power of ten. If that
    denominator is larger than the one supplied, the supplied pair is kept.
    Common prime factors are then stripped, unless both the denominator and
    the numerator exceed the simplification limits, in which case the pair is
    stored as it is.

    The sign always lives on the numerator. Equality, ordering and hashing
    use the decimal quotient, so ``Fraction(1, 2) == Fraction(2, 4)``
    regardless of how either was stored.

    Arithmetic also runs in the decimal domain. The operators fall back to
    cross multiplication with 32-bit wrap-around when the result overflows;
    the ``checked_*`` methods raise ``OverflowError`` instead.
    """

    __slots__ = ("_numerator", "_denominator")

    ZERO: ClassVar[Fraction]
    EPSILON: ClassVar[Fraction]
    MAX_VALUE: ClassVar[Fraction]
    MIN_VALUE: ClassVar[Fraction]
    ONE_QUARTER: ClassVar[Fraction]
    ONE: ClassVar[Fraction]
    ONE_HALF: ClassVar[Fraction]
    ONE_THIRD: ClassVar[Fraction]

    def __init__(self, numerator: int = 0, denominator: int = 1) -> None:
        numerator = _checked(_as_int(numerator))
        denominator = _checked(_as_int(denominator))
        if denominator == 0:
            raise ZeroDivisionError(f"Fraction({numerator}, 0)")
        with localcontext(WIDE_CONTEXT):
            quotient = Decimal(numerator) / Decimal(denominator)
        num, den = decimal_to_fraction_parts(quotient)
        if denominator != INT32_MIN and den > abs(denominator):
            num, den = numerator, denominator
        if den != 1:
            negative = (num < 0) != (den < 0)
            num, den = abs(num), abs(den)
            if den < SIMPLIFY_DENOMINATOR_LIMIT or num < SIMPLIFY_NUMERATOR_LIMIT:
                num, den = _strip_common_primes(num, den)
            else:
                logger.debug("Leaving %d/%d unsimplified", num, den)
            if negative:
                num = -num
        self._numerator = num
        self._denominator = den

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator or 1

    # -----------------
    # Construction helpers
    # -----------------
    @classmethod
    def from_integer(cls, value: int, dtype: Optional[DTypeLike] = None) -> Fraction:
        """Build value/1, wrapping value into the int32 range.

        With a dtype, value must first fit that width (OverflowError otherwise).
        """
        value = _as_int(value)
        if dtype is not None:
            _checked(value, dtype)
        return cls(_wrap(value), 1)

    @classmethod
    def checked_from_integer(
        cls, value: int, dtype: Optional[DTypeLike] = None
    ) -> Fraction:
        """Build value/1, raising OverflowError outside dtype or outside int32."""
        value = _as_int(value)
        if dtype is not None:
            _checked(value, dtype)
        return cls(_checked(value), 1)

    @classmethod
    def parse(cls, text: str) -> Fraction:
        """Parse ``"<int>"`` or ``"<int> / <int>"``.

        Raises ValueError for any other shape, ZeroDivisionError for a zero
        denominator and OverflowError for components outside int32.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        m = _INTEGER_RE.fullmatch(text)
        if m:
            return cls(int(m.group(1)), 1)
        m = _FRACTION_RE.fullmatch(text)
        if m is None:
            raise ValueError(f"Invalid fraction literal {text!r}")
        return cls(int(m.group(1)), int(m.group(2)))

    @classmethod
    def try_parse(cls, text: Any) -> Optional[Fraction]:
        try:
            return cls.parse(text)
        except (ValueError, ZeroDivisionError, OverflowError, TypeError):
            return None

    # -----------------
    # Conversions
    # -----------------
    def to_decimal(self) -> Decimal:
        with localcontext(WIDE_CONTEXT):
            return Decimal(self.numerator) / Decimal(self.denominator)

    def to_integer(self, dtype: DTypeLike = "int32") -> np.integer:
        """Truncate toward zero and wrap into dtype."""
        dt = _integer_dtype(dtype)
        return dt.type(_wrap(int(self), dt))

    def checked_to_integer(self, dtype: DTypeLike = "int32") -> np.integer:
        """Truncate toward zero; OverflowError if the result does not fit dtype."""
        dt = _integer_dtype(dtype)
        return dt.type(_checked(int(self), dt))

    def __int__(self) -> int:
        return int(self.to_decimal())

    def __float__(self) -> float:
        return float(self.to_decimal())

    def __bool__(self) -> bool:
        return self.numerator != 0

    # -----------------
    # Arithmetic
    # -----------------
    def _in_decimal(
        self, other: Fraction, op: Callable[[Decimal, Decimal], Decimal]
    ) -> Fraction:
        with localcontext(WIDE_CONTEXT):
            result = op(self.to_decimal(), other.to_decimal())
        return to_fraction(result)

    def checked_add(self, other: FractionLike) -> Fraction:
        return self._in_decimal(_require(other), operator.add)

    def checked_sub(self, other: FractionLike) -> Fraction:
        return self._in_decimal(_require(other), operator.sub)

    def checked_mul(self, other: FractionLike) -> Fraction:
        return self._in_decimal(_require(other), operator.mul)

    def checked_truediv(self, other: FractionLike) -> Fraction:
        other = _require(other)
        if not other:
            raise ZeroDivisionError("Fraction division by zero")
        return self._in_decimal(other, operator.truediv)

    def _with_fallback(
        self,
        other: Any,
        checked: Callable[[Fraction, Fraction], Fraction],
        cross: Callable[[int, int, int, int], Tuple[int, int]],
    ) -> Any:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        try:
            return checked(self, other)
        except OverflowError:
            # the cross products themselves may wrap around
            logger.debug(
                "%s overflowed for %s and %s, cross multiplying",
                checked.__name__,
                self,
                other,
            )
            num, den = cross(
                self.numerator, self.denominator, other.numerator, other.denominator
            )
            return Fraction(_wrap(num), _wrap(den))

    def __add__(self, other: Any) -> Any:
        return self._with_fallback(
            other, Fraction.checked_add, lambda a, b, c, d: (a * d + b * c, b * d)
        )

    def __sub__(self, other: Any) -> Any:
        return self._with_fallback(
            other, Fraction.checked_sub, lambda a, b, c, d: (a * d - b * c, b * d)
        )

    def __mul__(self, other: Any) -> Any:
        return self._with_fallback(
            other, Fraction.checked_mul, lambda a, b, c, d: (a * c, b * d)
        )

    def __truediv__(self, other: Any) -> Any:
        return self._with_fallback(
            other, Fraction.checked_truediv, lambda a, b, c, d: (a * d, b * c)
        )

    def __mod__(self, other: Any) -> Any:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        if not other:
            raise ZeroDivisionError("Fraction modulo by zero")
        # Decimal remainders take the sign of the dividend
        return self._in_decimal(other, operator.mod)

    def __radd__(self, other: Any) -> Any:
        other = _coerce(other)
        return NotImplemented if other is None else other + self

    def __rsub__(self, other: Any) -> Any:
        other = _coerce(other)
        return NotImplemented if other is None else other - self

    def __rmul__(self, other: Any) -> Any:
        other = _coerce(other)
        return NotImplemented if other is None else other * self

    def __rtruediv__(self, other: Any) -> Any:
        other = _coerce(other)
        return NotImplemented if other is None else other / self

    def __rmod__(self, other: Any) -> Any:
        other = _coerce(other)
        return NotImplemented if other is None else other % self

    def __neg__(self) -> Fraction:
        # -INT32_MIN wraps back onto INT32_MIN
        return Fraction(_wrap(-self.numerator), self.denominator)

    def checked_neg(self) -> Fraction:
        return Fraction(-self.numerator, self.denominator)

    def __pos__(self) -> Fraction:
        return Fraction(+self.numerator, self.denominator)

    def __abs__(self) -> Fraction:
        return self.checked_neg() if self.is_negative() else self

    def increment(self) -> Fraction:
        return self + Fraction.ONE

    def decrement(self) -> Fraction:
        return self - Fraction.ONE

    def checked_increment(self) -> Fraction:
        return self.checked_add(Fraction.ONE)

    def checked_decrement(self) -> Fraction:
        return self.checked_sub(Fraction.ONE)

    def reciprocal(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    # -----------------
    # Comparison
    # -----------------
    def compare_to(self, other: FractionLike) -> int:
        a, b = self.to_decimal(), _require(other).to_decimal()
        return (a > b) - (a < b)

    def __eq__(self, other: object) -> bool:
        value = _operand_decimal(other)
        if value is None:
            return NotImplemented
        return self.to_decimal() == value

    def __lt__(self, other: Any) -> bool:
        value = _operand_decimal(other)
        if value is None:
            return NotImplemented
        return self.to_decimal() < value

    def __le__(self, other: Any) -> bool:
        value = _operand_decimal(other)
        if value is None:
            return NotImplemented
        return self.to_decimal() <= value

    def __gt__(self, other: Any) -> bool:
        value = _operand_decimal(other)
        if value is None:
            return NotImplemented
        return self.to_decimal() > value

    def __ge__(self, other: Any) -> bool:
        value = _operand_decimal(other)
        if value is None:
            return NotImplemented
        return self.to_decimal() >= value

    def __hash__(self) -> int:
        return hash(self.to_decimal())

    # -----------------
    # Predicates
    # -----------------
    def is_integer(self) -> bool:
        return self.denominator == 1

    def is_negative(self) -> bool:
        return self.numerator < 0

    def is_positive(self) -> bool:
        """True for zero as well."""
        return not self.is_negative()

    def is_even_integer(self) -> bool:
        return self.is_integer() and self.numerator % 2 == 0

    def is_odd_integer(self) -> bool:
        """False for non-integers, which are neither odd nor even."""
        return self.is_integer() and self.numerator % 2 == 1

    # -----------------
    # Stringification
    # -----------------
    def to_string(self) -> str:
        return f"{self.numerator} / {self.denominator}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Fraction({self.numerator}, {self.denominator})"


Fraction.ZERO = Fraction(0, 1)
Fraction.EPSILON = Fraction(1, 1_000_000_000)
Fraction.MAX_VALUE = Fraction(INT32_MAX, 1)
Fraction.MIN_VALUE = Fraction(INT32_MIN, 1)
Fraction.ONE_QUARTER = Fraction(1, 4)
Fraction.ONE = Fraction(1, 1)
Fraction.ONE_HALF = Fraction(1, 2)
Fraction.ONE_THIRD = Fraction(1, 3)
