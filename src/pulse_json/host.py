"""Host object model: the capability interface the JSON engine runs against.

The engine never inspects values directly. Everything it needs (type tags,
property access, key enumeration, calling user callbacks, coercions) goes
through a ``Host``. The default host maps Python values onto the JS model:

- ``None`` / ``bool`` / ``int`` / ``float`` / ``str`` are primitives.
- ``list`` and ``tuple`` are arrays; ``JSArrayLike`` is an exotic array.
- ``JSObject`` and any ``Mapping`` are ordinary objects.
- dataclass instances expose their fields, other objects their public
  instance attributes.
- anything callable that is not one of the above is a function.

Subclass ``Host`` to serialize a different object model.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import fields, is_dataclass
from typing import Any, Final

from pulse_json import conversions
from pulse_json.values import (
	Boxed,
	JSArrayLike,
	JSFunction,
	JSObject,
	Symbol,
	TypeKind,
	Undefined,
	is_array_index,
	order_keys,
	to_property_key,
	undefined,
)


def date_to_iso_string(value: dt.date) -> str:
	"""``Date.prototype.toISOString``. Naive datetimes are taken as UTC."""
	if isinstance(value, dt.datetime):
		if value.tzinfo is not None:
			value = value.astimezone(dt.timezone.utc)
		millis = value.microsecond // 1000
		return f"{value.year:04d}-{value:%m-%dT%H:%M:%S}.{millis:03d}Z"
	return f"{value.year:04d}-{value:%m-%d}T00:00:00.000Z"


def _date_to_json(this: dt.date, _key: str) -> str:
	return date_to_iso_string(this)


DATE_TO_JSON: Final = JSFunction(_date_to_json)


def _canonical_int(key: str) -> int | None:
	"""The int whose decimal string is exactly ``key``, if there is one."""
	try:
		number = int(key)
	except ValueError:
		return None
	return number if str(number) == key else None


def _mapping_key(value: Mapping[Any, Any], key: str) -> str | int | None:
	"""The mapping's own key for property ``key``: ``key`` itself or its int."""
	if key in value:
		return key
	number = _canonical_int(key)
	if number is not None and number in value:
		return number
	return None


def _mapping_property_keys(value: Mapping[Any, Any]) -> list[str]:
	keys: list[str] = []
	seen: set[str] = set()
	for original in list(value.keys()):
		key = to_property_key(original)
		if key in seen:
			raise TypeError(f"mapping keys {key!r} and {int(key)} name the same property")
		seen.add(key)
		keys.append(key)
	return order_keys(keys)


def _dataclass_fields(value: Any) -> list[str] | None:
	if is_dataclass(value) and not isinstance(value, type):
		return [f.name for f in fields(value)]
	return None


class Host:
	"""Default capability interface over Python values."""

	__slots__: tuple[str, ...] = ()

	# ------------------------------------------------------------------
	# Type queries
	# ------------------------------------------------------------------

	def type_kind(self, value: Any) -> TypeKind:
		if value is None:
			return TypeKind.NULL
		if isinstance(value, Undefined):
			return TypeKind.UNDEFINED
		if isinstance(value, bool):
			return TypeKind.BOOLEAN
		if isinstance(value, (int, float)):
			return TypeKind.NUMBER
		if isinstance(value, str):
			return TypeKind.STRING
		if isinstance(value, Symbol):
			return TypeKind.SYMBOL
		if isinstance(value, Boxed):
			return value.kind
		if isinstance(value, (list, tuple, JSArrayLike)):
			return TypeKind.ARRAY
		if isinstance(value, (JSObject, Mapping)):
			return TypeKind.OBJECT
		if callable(value):
			return TypeKind.CALLABLE
		return TypeKind.OBJECT

	def is_array(self, value: Any) -> bool:
		return self.type_kind(value) is TypeKind.ARRAY

	def is_callable(self, value: Any) -> bool:
		return self.type_kind(value) is TypeKind.CALLABLE

	def identity(self, value: Any) -> int:
		return id(value)

	# ------------------------------------------------------------------
	# Property access
	# ------------------------------------------------------------------

	def own_enumerable_keys(self, value: Any) -> list[str]:
		"""Snapshot of own enumerable string keys, in JS key order."""
		if isinstance(value, JSObject):
			return value.own_keys()
		if isinstance(value, Mapping):
			return _mapping_property_keys(value)
		if isinstance(value, (list, tuple)):
			return [str(i) for i in range(len(value))]
		if isinstance(value, (str, Boxed)) or value is None:
			return []
		names = _dataclass_fields(value)
		if names is not None:
			return names
		attrs = getattr(value, "__dict__", None)
		if attrs is None:
			return []
		return [k for k in list(attrs) if not k.startswith("_")]

	def get_property(self, value: Any, key: str) -> Any:
		if isinstance(value, JSObject):
			return value.lookup(key)
		if isinstance(value, Mapping):
			target = _mapping_key(value, key)
			return undefined if target is None else value[target]
		if isinstance(value, (list, tuple)):
			if key == "length":
				return len(value)
			if is_array_index(key):
				return self.get_index(value, int(key))
			return undefined
		if isinstance(value, str):
			if key == "length":
				return len(value)
			if is_array_index(key) and int(key) < len(value):
				return value[int(key)]
			return undefined
		if value is None or isinstance(value, (Undefined, bool, int, float, Boxed)):
			return undefined
		if key.startswith("_") and key not in (_dataclass_fields(value) or ()):
			return undefined
		return getattr(value, key, undefined)

	def get_index(self, value: Sequence[Any], index: int) -> Any:
		"""Direct element read for native arrays."""
		if 0 <= index < len(value):
			return value[index]
		return undefined

	def set_property(self, value: Any, key: str, new_value: Any) -> bool:
		"""``CreateDataProperty``. Returns False when the value is immutable."""
		if isinstance(value, JSObject):
			value[key] = new_value
			return True
		if isinstance(value, MutableMapping):
			target = _mapping_key(value, key)
			value[key if target is None else target] = new_value
			return True
		if isinstance(value, list):
			if not is_array_index(key):
				return False
			index = int(key)
			if index >= len(value):
				value.extend([undefined] * (index - len(value) + 1))
			value[index] = new_value
			return True
		if key.startswith("_") or not hasattr(value, "__dict__"):
			return False
		setattr(value, key, new_value)
		return True

	def delete_property(self, value: Any, key: str) -> bool:
		if isinstance(value, JSObject):
			if not value.has_own(key):
				return True
			del value[key]
			return True
		if isinstance(value, MutableMapping):
			target = _mapping_key(value, key)
			if target is not None:
				del value[target]
			return True
		if isinstance(value, list):
			# Python lists cannot have holes; undefined stands in for one.
			if is_array_index(key) and int(key) < len(value):
				value[int(key)] = undefined
			return True
		attrs = getattr(value, "__dict__", None)
		if attrs is None or key.startswith("_"):
			return False
		attrs.pop(key, None)
		return True

	def array_length(self, value: Any) -> int:
		if isinstance(value, (list, tuple)):
			return len(value)
		return self.to_length(self.get_property(value, "length"))

	def create_object(self) -> dict[str, Any]:
		return {}

	# ------------------------------------------------------------------
	# Callables
	# ------------------------------------------------------------------

	def invoke(self, fn: Any, this: Any, args: Sequence[Any]) -> Any:
		if isinstance(fn, JSFunction):
			return fn.call(this, *args)
		return fn(*args)

	def lookup_to_json(self, value: Any) -> Callable[..., Any] | None:
		"""Return the callable ``toJSON`` the value exposes, if any."""
		if isinstance(value, dt.date):
			return DATE_TO_JSON
		if isinstance(value, JSObject):
			candidate = value.lookup("toJSON")
		elif isinstance(value, Mapping):
			candidate = value["toJSON"] if "toJSON" in value else None
		elif isinstance(value, (list, tuple, str, Boxed)) or value is None:
			return None
		else:
			candidate = getattr(value, "toJSON", None)
		if candidate is None or not self.is_callable(candidate):
			return None
		return candidate

	# ------------------------------------------------------------------
	# Coercions
	# ------------------------------------------------------------------

	def unbox(self, value: Any) -> Any:
		"""Primitive held by a Number/String/Boolean wrapper object."""
		if isinstance(value, Boxed):
			return value.value
		return value

	def to_string(self, value: Any) -> str:
		return conversions.to_string(value)

	def to_number(self, value: Any) -> int | float:
		return conversions.to_number(value)

	def to_integer(self, value: Any) -> int | float:
		return conversions.to_integer(value)

	def to_length(self, value: Any) -> int:
		return conversions.to_length(value)


DEFAULT_HOST: Final = Host()

__all__ = ["DATE_TO_JSON", "DEFAULT_HOST", "Host", "date_to_iso_string"]
