"""JSON text to Python values, via the standard library scanner.

The scanner is configured to produce the values ``JSON.parse`` would:

- numbers are doubles; integers that a double holds exactly stay ``int`` and
  ``-0`` becomes ``-0.0``;
- object keys are ordered like JS own properties (array indices first) and a
  repeated key keeps its first position with the last value;
- ``NaN``, ``Infinity`` and ``-Infinity`` are rejected.
"""

from __future__ import annotations

import json
import re
from typing import Any, Final

from pulse_json.values import order_keys

_MAX_EXACT_INT: Final = 2**53
# Beyond this many digits the value is past double range precision anyway
_MAX_INT_DIGITS: Final = 300

# Skips string literals so a constant inside a string is not reported
_CONSTANT_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)', re.DOTALL)


class ParseError(Exception):
	"""Raised by ``parse_text``; ``position`` is a character offset."""

	message: str
	position: int | None

	def __init__(self, message: str, position: int | None) -> None:
		super().__init__(message)
		self.message = message
		self.position = position


class _RejectedConstant(Exception):
	pass


def _parse_int(text: str) -> int | float:
	if text == "-0":
		return -0.0
	if len(text) > _MAX_INT_DIGITS:
		return float(text)
	value = int(text)
	if -_MAX_EXACT_INT <= value <= _MAX_EXACT_INT:
		return value
	return float(text)


def _reject_constant(name: str) -> Any:
	raise _RejectedConstant(name)


def _build_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
	obj: dict[str, Any] = {}
	for key, value in pairs:
		obj[key] = value
	keys = order_keys(obj)
	if keys != list(obj):
		return {key: obj[key] for key in keys}
	return obj


_DECODER: Final = json.JSONDecoder(
	object_pairs_hook=_build_object,
	parse_int=_parse_int,
	parse_float=float,
	parse_constant=_reject_constant,
	strict=True,
)


def _constant_position(text: str) -> int | None:
	for match in _CONSTANT_TOKEN.finditer(text):
		if match.group(1) is not None:
			return match.start(1)
	return None


def parse_text(text: str) -> Any:
	"""Parse a complete JSON text. Raises ``ParseError`` on malformed input."""
	try:
		return _DECODER.decode(text)
	except json.JSONDecodeError as exc:
		raise ParseError(exc.msg, exc.pos) from None
	except _RejectedConstant as exc:
		raise ParseError(
			f"Unexpected token {exc.args[0]}", _constant_position(text)
		) from None


__all__ = ["ParseError", "parse_text"]
