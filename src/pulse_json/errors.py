from __future__ import annotations

import logging
from typing import ClassVar, Literal

from typing_extensions import override

logger = logging.getLogger(__name__)

ErrorCode = Literal[
	"syntax",
	"circular",
	"out_of_bound_string",
	"stack_overflow",
	"internal",
]

JsErrorName = Literal["Error", "SyntaxError", "TypeError", "RangeError"]


class JSONError(Exception):
	"""Base class for every failure raised by ``stringify`` and ``parse``.

	``js_name`` is the name of the JavaScript error the engine would throw,
	``code`` a stable identifier for callers that want to branch on it.
	"""

	code: ClassVar[ErrorCode | None] = None
	js_name: ClassVar[JsErrorName] = "Error"

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message


class JSONSyntaxError(JSONError, ValueError):
	"""Malformed JSON text, or ``parse`` called without text."""

	code = "syntax"
	js_name = "SyntaxError"

	position: int | None

	def __init__(self, message: str, position: int | None = None) -> None:
		super().__init__(message)
		self.position = position

	@override
	def __str__(self) -> str:
		if self.position is None:
			return self.message
		return f"{self.message} (at position {self.position})"


class CircularStructureError(JSONError, TypeError):
	code = "circular"
	js_name = "TypeError"

	def __init__(self, message: str = "Converting circular structure to JSON") -> None:
		super().__init__(message)


class OutOfBoundStringError(JSONError, ValueError):
	"""An array reports a length the output string could never hold."""

	code = "out_of_bound_string"
	js_name = "RangeError"

	length: int

	def __init__(self, length: int, limit: int) -> None:
		super().__init__(
			f"String length out of bounds: array length {length} exceeds limit {limit}"
		)
		self.length = length


class StackOverflowError(JSONError, RecursionError):
	code = "stack_overflow"

	depth: int

	def __init__(self, depth: int) -> None:
		super().__init__(f"Out of stack space: nesting deeper than {depth} levels")
		self.depth = depth


class InternalInvariantError(JSONError, RuntimeError):
	"""Engine bookkeeping went wrong. Never caused by user input."""

	code = "internal"

	def __init__(self, message: str) -> None:
		super().__init__(message)
		logger.error("Internal invariant violated: %s", message)


__all__ = [
	"CircularStructureError",
	"ErrorCode",
	"InternalInvariantError",
	"JSONError",
	"JSONSyntaxError",
	"JsErrorName",
	"OutOfBoundStringError",
	"StackOverflowError",
]
