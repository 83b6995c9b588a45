"""``JSON.stringify``.

A ``StringifySession`` is created per call. It owns the resolved replacer and
gap, the current indentation depth and the ancestor stack used to detect
cycles. ``toJSON`` hooks and replacer functions may reenter the session while
it runs; every object/array entry is therefore checked against the ancestors
again, and every exit path restores the indentation and pops the ancestor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Final

from pulse_json.conversions import number_to_string
from pulse_json.env import env
from pulse_json.errors import (
	CircularStructureError,
	InternalInvariantError,
	OutOfBoundStringError,
	StackOverflowError,
)
from pulse_json.gap import GapConfig, resolve_gap
from pulse_json.host import DEFAULT_HOST, Host
from pulse_json.quote import quote
from pulse_json.replacer import (
	KeyList,
	ReplacerConfig,
	ReplacerFunction,
	resolve_replacer,
)
from pulse_json.values import TypeKind, Undefined, undefined

logger = logging.getLogger(__name__)

_HOOKABLE: Final = frozenset(
	{
		TypeKind.ARRAY,
		TypeKind.OBJECT,
		TypeKind.CALLABLE,
		TypeKind.BOXED_NUMBER,
		TypeKind.BOXED_STRING,
		TypeKind.BOXED_BOOLEAN,
	}
)
_NON_FINITE: Final = frozenset({"NaN", "Infinity", "-Infinity"})


class AncestorStack:
	"""Identities of the objects and arrays currently being serialized."""

	__slots__: tuple[str, ...] = ("_ids", "_values")
	_ids: set[int]
	_values: list[Any]

	def __init__(self) -> None:
		self._ids = set()
		self._values = []

	def __contains__(self, identity: int) -> bool:
		return identity in self._ids

	def __len__(self) -> int:
		return len(self._values)

	@contextmanager
	def scope(self, value: Any, identity: int) -> Iterator[None]:
		if identity in self._ids:
			raise CircularStructureError()
		self._ids.add(identity)
		# Holding the value keeps its identity from being reused while on the stack
		self._values.append(value)
		try:
			yield
		finally:
			self._values.pop()
			self._ids.discard(identity)


class StringifySession:
	__slots__: tuple[str, ...] = (
		"replacer",
		"gap",
		"host",
		"max_depth",
		"max_string_length",
		"indent",
		"ancestors",
	)

	replacer: ReplacerConfig
	gap: GapConfig
	host: Host
	max_depth: int
	max_string_length: int
	indent: int
	ancestors: AncestorStack

	def __init__(
		self,
		replacer: ReplacerConfig,
		gap: GapConfig,
		*,
		host: Host = DEFAULT_HOST,
		max_depth: int,
		max_string_length: int,
	) -> None:
		self.replacer = replacer
		self.gap = gap
		self.host = host
		self.max_depth = max_depth
		self.max_string_length = max_string_length
		self.indent = 0
		self.ancestors = AncestorStack()

	def run(self, value: Any) -> str | Undefined:
		wrapper = self.host.create_object()
		self.host.set_property(wrapper, "", value)
		result = self.serialize("", value, wrapper)
		if len(self.ancestors) or self.indent:
			raise InternalInvariantError(
				f"stringify finished with {len(self.ancestors)} ancestors and indent {self.indent}"
			)
		return undefined if result is None else result

	def serialize(self, key: str, value: Any, holder: Any) -> str | None:
		"""``SerializeJSONProperty``. Returns None when the value is skipped."""
		host = self.host
		kind = host.type_kind(value)

		if kind in _HOOKABLE:
			to_json = host.lookup_to_json(value)
			if to_json is not None:
				value = host.invoke(to_json, value, (key,))
				kind = host.type_kind(value)

		if isinstance(self.replacer, ReplacerFunction):
			value = host.invoke(self.replacer.fn, holder, (key, value))
			kind = host.type_kind(value)

		if kind.is_boxed:
			value = host.unbox(value)
			kind = host.type_kind(value)

		if kind is TypeKind.NULL:
			return "null"
		if kind is TypeKind.BOOLEAN:
			return "true" if value else "false"
		if kind is TypeKind.NUMBER:
			text = number_to_string(value)
			return "null" if text in _NON_FINITE else text
		if kind is TypeKind.STRING:
			return quote(value)
		if kind is not TypeKind.ARRAY and kind is not TypeKind.OBJECT:
			# undefined, symbols and functions
			return None

		if len(self.ancestors) >= self.max_depth:
			raise StackOverflowError(self.max_depth)
		with self.ancestors.scope(value, host.identity(value)):
			if kind is TypeKind.ARRAY:
				return self.serialize_array(value)
			return self.serialize_object(value)

	def serialize_object(self, value: Any) -> str:
		host = self.host
		if isinstance(self.replacer, KeyList):
			keys: list[str] | tuple[str, ...] = self.replacer.names
		else:
			keys = host.own_enumerable_keys(value)

		step_back = self.indent
		self.indent += 1
		try:
			members: list[str] = []
			separator = self.gap.property_separator
			for key in keys:
				text = self.serialize(key, host.get_property(value, key), value)
				if text is not None:
					members.append(quote(key) + separator + text)
			if not members:
				return "{}"
			out: list[str] = []
			self._emit_members("{", members, "}", step_back, out)
			return "".join(out)
		finally:
			self.indent = step_back

	def serialize_array(self, value: Any) -> str:
		host = self.host
		length = host.array_length(value)
		if length >= self.max_string_length:
			raise OutOfBoundStringError(length, self.max_string_length)

		step_back = self.indent
		self.indent += 1
		try:
			if length == 0:
				return "[]"
			native = isinstance(value, (list, tuple))
			members: list[str] = []
			for index in range(length):
				if native:
					item = host.get_index(value, index)
				else:
					item = host.get_property(value, str(index))
				text = self.serialize(str(index), item, value)
				members.append("null" if text is None else text)
			out: list[str] = []
			self._emit_members("[", members, "]", step_back, out)
			return "".join(out)
		finally:
			self.indent = step_back

	def _emit_members(
		self, open_: str, members: list[str], close: str, step_back: int, out: list[str]
	) -> None:
		out.append(open_)
		if not self.gap.pretty:
			out.append(",".join(members))
			out.append(close)
			return
		out.append("\n")
		out.append(self.gap.indent(self.indent))
		out.append(self.gap.member_separator(self.indent).join(members))
		out.append("\n")
		out.append(self.gap.indent(step_back))
		out.append(close)


def stringify(
	value: Any = undefined,
	replacer: Any = None,
	space: Any = None,
	*,
	host: Host = DEFAULT_HOST,
) -> str | Undefined:
	"""Serialize ``value`` to JSON text following ``JSON.stringify``.

	Returns ``undefined`` when the root value itself is not serializable
	(``undefined``, a function, a symbol, or whatever a replacer or ``toJSON``
	turned it into).

	Raises:
		CircularStructureError: the value graph contains a cycle.
		OutOfBoundStringError: an array reports an impossibly large length.
		StackOverflowError: nesting exceeds ``PULSE_JSON_MAX_DEPTH``.
	"""
	session = StringifySession(
		resolve_replacer(replacer, host),
		resolve_gap(space, host),
		host=host,
		max_depth=env.max_depth,
		max_string_length=env.max_string_length,
	)
	logger.debug(
		"stringify: replacer=%s gap=%r",
		type(session.replacer).__name__,
		session.gap.indent_unit,
	)
	return session.run(value)


__all__ = ["AncestorStack", "StringifySession", "stringify"]
