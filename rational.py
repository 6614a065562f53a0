from __future__ import annotations
from decimal import (
	Context,
	Decimal,
	DivisionByZero,
	InvalidOperation,
	Overflow,
	ROUND_DOWN,
	ROUND_HALF_EVEN,
	localcontext,
)
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union
import math
import numbers

if TYPE_CHECKING:
	from fraction import Fraction

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1

# beyond this magnitude values keep no fractional precision
SAFE_DECIMAL_LIMIT = 100_000_000
DECIMAL_PLACES = 9

# 28 significant digits, banker's rounding
WIDE_CONTEXT = Context(
	prec=28,
	rounding=ROUND_HALF_EVEN,
	traps=[InvalidOperation, DivisionByZero, Overflow],
)

DecimalLike = Union[int, float, str, Decimal]

_LOWER_BOUND = Decimal(INT32_MIN) - 1
_UPPER_BOUND = Decimal(INT32_MAX) + 1


def to_decimal(value: Any) -> Decimal:
	"""Coerce an int, float, numeric string, Decimal or anything with a
	``to_decimal()`` method into the wide decimal domain."""
	if isinstance(value, Decimal):
		dec = value
	elif isinstance(value, numbers.Integral):
		dec = Decimal(int(value))
	elif isinstance(value, float):
		# shortest round-trip text, not the binary expansion
		dec = Decimal(repr(value))
	elif isinstance(value, str):
		try:
			dec = Decimal(value.strip())
		except InvalidOperation:
			raise ValueError(f"Invalid decimal literal {value!r}") from None
	elif hasattr(value, "to_decimal"):
		dec = value.to_decimal()
	else:
		raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")
	if not dec.is_finite():
		raise ValueError(f"Non-finite value {value!r}")
	return dec


def _is_integral(value: Decimal) -> bool:
	return value == value.to_integral_value()


def _round(value: Decimal, places: int) -> Decimal:
	value = value.quantize(Decimal(1).scaleb(-places))
	if _is_integral(value):
		return value
	# 0.500000000 -> 0.5
	return value.normalize()


def fractional_digits(value: DecimalLike) -> Optional[str]:
	"""Digits after the decimal point, or None for integral values."""
	value = to_decimal(value)
	if _is_integral(value):
		return None
	return format(abs(value), "f").partition(".")[2]


def fractional_digits_value(value: DecimalLike) -> Optional[Decimal]:
	"""Digits after the decimal point read as a number (leading zeros dropped)."""
	digits = fractional_digits(value)
	return None if digits is None else Decimal(digits)


def decimal_to_fraction_parts(value: DecimalLike) -> Tuple[int, int]:
	"""Derive an int32 numerator and a power-of-ten denominator for value.

	Magnitudes above SAFE_DECIMAL_LIMIT are truncated to integers, anything
	else is rounded to DECIMAL_PLACES. When the digits would not fit an int32
	numerator the value is rounded again to fewer places.
	Raises OverflowError outside the int32 range (with a margin of one).
	"""
	value = to_decimal(value)
	if value <= _LOWER_BOUND or value >= _UPPER_BOUND:
		raise OverflowError("Value was either too large or too small for a Fraction.")
	with localcontext(WIDE_CONTEXT):
		if abs(value) > SAFE_DECIMAL_LIMIT:
			value = value.to_integral_value(rounding=ROUND_DOWN)
		else:
			value = _round(value, DECIMAL_PLACES)
		if _is_integral(value):
			return int(value), 1
		negative = value.is_signed()
		value = abs(value)
		digits = fractional_digits(value)
		if int(value.scaleb(len(digits))) > INT32_MAX:
			integer_digits = len(str(int(value)))
			value = _round(value, DECIMAL_PLACES - integer_digits)
			digits = fractional_digits(value)
			if digits is None:
				return (-int(value) if negative else int(value)), 1
		denominator = 10 ** len(digits)
		numerator = int(value) * denominator + int(digits)
	return (-numerator if negative else numerator), denominator


def to_fraction(value: DecimalLike) -> Fraction:
	"""Convert a decimal into an equal or approximate Fraction."""
	# Local import to avoid circular dependency at module load time
	from fraction import Fraction
	return Fraction(*decimal_to_fraction_parts(value))


# =====================
# Decimal / scientific notation
# =====================

FloatLike = Union[float, int, str]


def _as_float(value: FloatLike) -> float:
	if isinstance(value, str):
		return float(value.strip())
	return float(value)


def has_scientific_notation(value: FloatLike) -> bool:
	return "e" in repr(_as_float(value))


def has_decimal_notation(value: FloatLike) -> bool:
	return not has_scientific_notation(value)


def scientific_to_decimal_string(value: FloatLike) -> str:
	"""Rewrite the exponential text form of a float in fixed notation.

	>>> scientific_to_decimal_string(1.5e-05)
	'0.000015'
	"""
	real = _as_float(value)
	if not has_scientific_notation(real):
		return repr(real)
	negative = real < 0
	mantissa, _, exponent_text = repr(abs(real)).partition("e")
	exponent = int(exponent_text)
	digits = mantissa.replace(".", "")
	if exponent >= 0:
		text = digits.ljust(exponent + 1, "0")
	else:
		text = "0." + digits.rjust(len(digits) - exponent - 1, "0")
	return "-" + text if negative else text


def decimal_to_scientific_string(value: FloatLike) -> str:
	"""Render a float as ``<d>[.<digits>]E<sign><exponent>``.

	>>> decimal_to_scientific_string(1234.5)
	'1.2345E+03'
	"""
	real = _as_float(value)
	if not math.isfinite(real):
		raise ValueError(f"Non-finite value {value!r}")
	if real == 0:
		return "0E+00"
	negative = real < 0
	number = Decimal(repr(abs(real))).normalize()
	text = "".join(str(d) for d in number.as_tuple().digits)
	exponent = number.adjusted()
	mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
	text = f"{mantissa}E{'+' if exponent >= 0 else '-'}{abs(exponent):02d}"
	return "-" + text if negative else text
