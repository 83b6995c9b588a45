"""Abstract operations from ECMA-262 section 7.1 (type conversion)."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Final

from pulse_json.values import Boxed, JSObject, Symbol, Undefined

MAX_SAFE_INTEGER: Final = 2**53 - 1
# Integers below this magnitude are printed exactly instead of as doubles
_EXACT_INT_LIMIT: Final = 2**64

# WhiteSpace and LineTerminator code points trimmed by StringToNumber
_JS_WHITESPACE: Final = (
	"\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
	"\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_DECIMAL_LITERAL = re.compile(
	r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII
)
_RADIX_LITERAL = re.compile(r"0([xXoObB])([0-9a-fA-F]+)", re.ASCII)
_RADIX: Final = {"x": 16, "o": 8, "b": 2}


def number_to_string(value: int | float) -> str:
	"""``Number::toString(value, 10)``."""
	if isinstance(value, int):
		if abs(value) < _EXACT_INT_LIMIT:
			return str(value)
		value = _int_to_double(value)
	if math.isnan(value):
		return "NaN"
	if value == 0:
		return "0"
	if math.isinf(value):
		return "Infinity" if value > 0 else "-Infinity"
	if value < 0:
		return "-" + number_to_string(-value)

	digits, n = _shortest_decimal(value)
	k = len(digits)
	if k <= n <= 21:
		return digits + "0" * (n - k)
	if 0 < n <= 21:
		return f"{digits[:n]}.{digits[n:]}"
	if -6 < n <= 0:
		return "0." + "0" * -n + digits
	exponent = n - 1
	sign = "+" if exponent >= 0 else "-"
	mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
	return f"{mantissa}e{sign}{abs(exponent)}"


def _shortest_decimal(value: float) -> tuple[str, int]:
	"""Return ``(digits, n)`` with ``value == 0.digits * 10**n``.

	``repr`` already yields the shortest digit string that round-trips.
	"""
	_, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
	assert isinstance(exponent, int)
	digits = "".join(str(d) for d in digit_tuple)
	stripped = digits.rstrip("0")
	exponent += len(digits) - len(stripped)
	return stripped, exponent + len(stripped)


def _int_to_double(value: int) -> float:
	try:
		return float(value)
	except OverflowError:
		return math.inf if value > 0 else -math.inf


def string_to_number(text: str) -> int | float:
	text = text.strip(_JS_WHITESPACE)
	if not text:
		return 0
	if text in ("Infinity", "+Infinity"):
		return math.inf
	if text == "-Infinity":
		return -math.inf
	match = _RADIX_LITERAL.fullmatch(text)
	if match is not None:
		try:
			return int(match.group(2), _RADIX[match.group(1).lower()])
		except ValueError:
			return math.nan
	if _DECIMAL_LITERAL.fullmatch(text) is None:
		return math.nan
	return float(text)


def to_number(value: Any) -> int | float:
	if isinstance(value, Undefined):
		return math.nan
	if value is None:
		return 0
	if isinstance(value, bool):
		return int(value)
	if isinstance(value, (int, float)):
		return value
	if isinstance(value, str):
		return string_to_number(value)
	if isinstance(value, Boxed):
		return to_number(value.value)
	if isinstance(value, Symbol):
		raise TypeError("Cannot convert a Symbol value to a number")
	return string_to_number(to_string(value))


def to_string(value: Any) -> str:
	return _to_string(value, set())


def _to_string(value: Any, seen: set[int]) -> str:
	if isinstance(value, str):
		return value
	if isinstance(value, Undefined):
		return "undefined"
	if value is None:
		return "null"
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, (int, float)):
		return number_to_string(value)
	if isinstance(value, Boxed):
		return _to_string(value.value, seen)
	if isinstance(value, Symbol):
		raise TypeError("Cannot convert a Symbol value to a string")
	if isinstance(value, (list, tuple)):
		# Array.prototype.join: nested cycles render as empty strings
		if id(value) in seen:
			return ""
		seen.add(id(value))
		try:
			parts: list[str] = []
			for item in value:
				if item is None or isinstance(item, Undefined):
					parts.append("")
				else:
					parts.append(_to_string(item, seen))
			return ",".join(parts)
		finally:
			seen.discard(id(value))
	if isinstance(value, (JSObject, Mapping)):
		return "[object Object]"
	if callable(value):
		name = getattr(value, "__name__", "")
		return f"function {name}() {{ [native code] }}"
	return "[object Object]"


def to_integer(value: Any) -> int | float:
	"""``ToIntegerOrInfinity``. Infinities are returned as floats."""
	number = to_number(value)
	if isinstance(number, int):
		return number
	if math.isnan(number):
		return 0
	if math.isinf(number):
		return number
	return math.trunc(number)


def to_length(value: Any) -> int:
	length = to_integer(value)
	if length <= 0:
		return 0
	return int(min(length, MAX_SAFE_INTEGER))


__all__ = [
	"MAX_SAFE_INTEGER",
	"number_to_string",
	"string_to_number",
	"to_integer",
	"to_length",
	"to_number",
	"to_string",
]
