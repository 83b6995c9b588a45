"""``JSON.parse`` and the reviver walk."""

from __future__ import annotations

import logging
from typing import Any, Final

from typing_extensions import override

from pulse_json.env import env
from pulse_json.errors import JSONSyntaxError, StackOverflowError
from pulse_json.host import DEFAULT_HOST, Host
from pulse_json.tokenizer import ParseError, parse_text
from pulse_json.values import TypeKind, Undefined

logger = logging.getLogger(__name__)


class _Missing:
	__slots__: tuple[str, ...] = ()

	@override
	def __repr__(self) -> str:
		return "<missing>"


_MISSING: Final = _Missing()


def _check_depth(root: Any, max_depth: int) -> None:
	"""Reject parsed trees nested deeper than ``stringify`` accepts."""
	pending: list[tuple[Any, int]] = [(root, 1)]
	while pending:
		value, depth = pending.pop()
		if isinstance(value, dict):
			children: Any = value.values()
		elif isinstance(value, list):
			children = value
		else:
			continue
		if depth > max_depth:
			raise StackOverflowError(max_depth)
		pending.extend((child, depth + 1) for child in children)


class ReviveWalk:
	"""``InternalizeJSONProperty``, applied bottom-up from a wrapper holder."""

	__slots__: tuple[str, ...] = ("reviver", "host", "max_depth", "_depth")

	reviver: Any
	host: Host
	max_depth: int
	_depth: int

	def __init__(self, reviver: Any, *, host: Host, max_depth: int) -> None:
		self.reviver = reviver
		self.host = host
		self.max_depth = max_depth
		self._depth = 0

	def run(self, root: Any) -> Any:
		wrapper = self.host.create_object()
		self.host.set_property(wrapper, "", root)
		return self.walk(wrapper, "")

	def walk(self, holder: Any, key: str) -> Any:
		host = self.host
		value = host.get_property(holder, key)
		kind = host.type_kind(value)
		if kind is TypeKind.ARRAY or kind is TypeKind.OBJECT:
			if self._depth >= self.max_depth:
				raise StackOverflowError(self.max_depth)
			self._depth += 1
			try:
				if kind is TypeKind.ARRAY:
					keys = [str(i) for i in range(host.array_length(value))]
				else:
					keys = host.own_enumerable_keys(value)
				for name in keys:
					revived = self.walk(value, name)
					if isinstance(revived, Undefined):
						host.delete_property(value, name)
					else:
						host.set_property(value, name, revived)
			finally:
				self._depth -= 1
		return host.invoke(self.reviver, holder, (key, value))


def parse(text: Any = _MISSING, reviver: Any = None, *, host: Host = DEFAULT_HOST) -> Any:
	"""Parse JSON text the way ``JSON.parse`` does.

	Non-string ``text`` is converted with ``ToString`` first. ``reviver`` is
	ignored unless it is callable; when it is, every parsed value is passed
	through it bottom-up and ``undefined`` results delete the member.

	Raises:
		JSONSyntaxError: ``text`` is missing or is not valid JSON.
		StackOverflowError: nesting exceeds ``PULSE_JSON_MAX_DEPTH``.
	"""
	if text is _MISSING:
		raise JSONSyntaxError("Syntax error: no JSON text to parse")
	if not isinstance(text, str):
		text = host.to_string(text)
	max_depth = env.max_depth

	try:
		result = parse_text(text)
	except ParseError as exc:
		raise JSONSyntaxError(exc.message, exc.position) from None
	except RecursionError:
		raise StackOverflowError(max_depth) from None
	_check_depth(result, max_depth)

	if reviver is None or not host.is_callable(reviver):
		return result
	logger.debug("parse: reviving %s", type(result).__name__)
	walk = ReviveWalk(reviver, host=host, max_depth=max_depth)
	return walk.run(result)


__all__ = ["ReviveWalk", "parse"]
