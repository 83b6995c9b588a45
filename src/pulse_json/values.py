"""JavaScript value types that have no direct Python counterpart.

Plain Python values cover most of the JSON value space (``None`` is ``null``,
``bool``/``int``/``float``/``str``, ``list`` and ``dict``). This module adds
the rest of the JS model the serializer has to understand:

- ``undefined``: the JS ``undefined`` singleton.
- ``Symbol``: opaque symbol values (never serialized).
- ``Boxed``: ``new Number(..)`` / ``new String(..)`` / ``new Boolean(..)``.
- ``JSFunction``: a callable that receives the JS ``this`` value.
- ``JSObject``: an ordinary object with a prototype chain, getters and
  non-enumerable properties.
- ``JSArrayLike``: an exotic object that reports itself as an array but whose
  length and elements are read through ordinary property access.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Final, final

from typing_extensions import override

# Largest valid array index is 2**32 - 2
MAX_ARRAY_INDEX: Final = 2**32 - 2


class TypeKind(Enum):
	UNDEFINED = "undefined"
	NULL = "null"
	BOOLEAN = "boolean"
	NUMBER = "number"
	STRING = "string"
	SYMBOL = "symbol"
	BOXED_NUMBER = "boxed_number"
	BOXED_STRING = "boxed_string"
	BOXED_BOOLEAN = "boxed_boolean"
	CALLABLE = "callable"
	ARRAY = "array"
	OBJECT = "object"

	@property
	def is_boxed(self) -> bool:
		return self in (
			TypeKind.BOXED_NUMBER,
			TypeKind.BOXED_STRING,
			TypeKind.BOXED_BOOLEAN,
		)


@final
class Undefined:
	"""JS ``undefined``. Always use the ``undefined`` singleton.

	``None`` maps to JS ``null``; ``undefined`` is falsy and compares equal only
	to itself.
	"""

	__slots__: tuple[str, ...] = ()
	_instance: ClassVar[Undefined | None] = None

	def __new__(cls) -> Undefined:
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	@override
	def __repr__(self) -> str:
		return "undefined"

	def __bool__(self) -> bool:
		return False

	def __reduce__(self) -> str:
		return "undefined"


undefined: Final = Undefined()


@dataclass(frozen=True, slots=True, eq=False)
class Symbol:
	description: str | None = None

	@override
	def __repr__(self) -> str:
		if self.description is None:
			return "Symbol()"
		return f"Symbol({self.description})"


@dataclass(frozen=True, slots=True)
class Boxed:
	"""A primitive wrapper object (``new Number(1)``, ``new String("a")``...)."""

	value: bool | int | float | str

	def __post_init__(self) -> None:
		if not isinstance(self.value, (bool, int, float, str)):
			raise TypeError(
				f"Boxed only wraps bool, int, float or str, got {type(self.value).__name__}"
			)

	@property
	def kind(self) -> TypeKind:
		if isinstance(self.value, bool):
			return TypeKind.BOXED_BOOLEAN
		if isinstance(self.value, str):
			return TypeKind.BOXED_STRING
		return TypeKind.BOXED_NUMBER


@dataclass(frozen=True, slots=True, eq=False)
class JSFunction:
	"""Wraps ``fn(this, *args)`` so the engine can pass the JS ``this`` value.

	Plain Python callables are invoked without ``this``; wrap them in
	``JSFunction`` when a replacer, reviver or ``toJSON`` needs the holder.
	"""

	fn: Callable[..., Any]

	def __call__(self, *args: Any) -> Any:
		return self.fn(undefined, *args)

	def call(self, this: Any, *args: Any) -> Any:
		return self.fn(this, *args)


def is_array_index(key: str) -> bool:
	"""True for canonical decimal strings in ``0 .. 2**32 - 2``."""
	if not key or not key.isascii() or not key.isdigit():
		return False
	if len(key) > 1 and key[0] == "0":
		return False
	return int(key) <= MAX_ARRAY_INDEX


def order_keys(keys: Iterable[str]) -> list[str]:
	"""Order property keys like ``OrdinaryOwnPropertyKeys``.

	Array-index keys come first in ascending numeric order, followed by the
	remaining keys in insertion order.
	"""
	indices: list[str] = []
	names: list[str] = []
	for key in keys:
		if is_array_index(key):
			indices.append(key)
		else:
			names.append(key)
	if not indices:
		return names
	indices.sort(key=int)
	return indices + names


def to_property_key(key: object) -> str:
	if isinstance(key, str):
		return key
	if isinstance(key, int) and not isinstance(key, bool):
		return str(key)
	raise TypeError(f"keys must be str or int, not {type(key).__name__}")


@dataclass(slots=True)
class Property:
	"""A property slot. ``getter`` receives the object the lookup started on."""

	value: Any = undefined
	getter: Callable[[Any], Any] | None = None
	enumerable: bool = True

	def read(self, receiver: Any) -> Any:
		if self.getter is not None:
			return self.getter(receiver)
		return self.value


class JSObject(MutableMapping[str, Any]):
	"""An ordinary JS object.

	The mapping interface exposes own enumerable properties, iterated in JS
	key order. ``lookup`` implements ``[[Get]]`` and walks the prototype chain.
	"""

	__slots__: tuple[str, ...] = ("_props", "proto")
	_props: dict[str, Property]
	proto: JSObject | None

	def __init__(
		self,
		props: Mapping[Any, Any] | Iterable[tuple[Any, Any]] | None = None,
		*,
		proto: JSObject | None = None,
		**kwargs: Any,
	) -> None:
		self._props = {}
		self.proto = proto
		if props is not None:
			self.update(props)
		if kwargs:
			self.update(kwargs)

	def define(
		self,
		key: str | int,
		value: Any = undefined,
		*,
		getter: Callable[[Any], Any] | None = None,
		enumerable: bool = True,
	) -> None:
		self._props[to_property_key(key)] = Property(value, getter, enumerable)

	def has_own(self, key: str) -> bool:
		return key in self._props

	def own_keys(self, *, include_non_enumerable: bool = False) -> list[str]:
		keys = (
			k for k, p in self._props.items() if include_non_enumerable or p.enumerable
		)
		return order_keys(keys)

	def lookup(self, key: str, receiver: Any = None) -> Any:
		"""``[[Get]]``: own property first, then the prototype chain."""
		if receiver is None:
			receiver = self
		obj: JSObject | None = self
		while obj is not None:
			prop = obj._props.get(key)
			if prop is not None:
				return prop.read(receiver)
			obj = obj.proto
		return undefined

	@override
	def __getitem__(self, key: str) -> Any:
		prop = self._props.get(key)
		if prop is None:
			raise KeyError(key)
		return prop.read(self)

	@override
	def __setitem__(self, key: str | int, value: Any) -> None:
		name = to_property_key(key)
		prop = self._props.get(name)
		if prop is None:
			self._props[name] = Property(value)
		else:
			prop.value = value
			prop.getter = None

	@override
	def __delitem__(self, key: str) -> None:
		del self._props[key]

	@override
	def __iter__(self) -> Iterator[str]:
		return iter(self.own_keys())

	@override
	def __len__(self) -> int:
		return sum(1 for p in self._props.values() if p.enumerable)

	@override
	def __repr__(self) -> str:
		return f"{type(self).__name__}({dict(self.items())!r})"


class JSArrayLike(JSObject):
	"""An object the engine treats as an array (think ``Proxy`` over an array).

	Its length is whatever the ``length`` property reports, so it can claim
	more elements than it stores.
	"""

	__slots__: tuple[str, ...] = ()

	def __init__(
		self,
		items: Iterable[Any] = (),
		*,
		length: int | None = None,
		proto: JSObject | None = None,
	) -> None:
		super().__init__(proto=proto)
		count = 0
		for index, item in enumerate(items):
			self[str(index)] = item
			count = index + 1
		self.define("length", count if length is None else length, enumerable=False)


__all__ = [
	"MAX_ARRAY_INDEX",
	"Boxed",
	"JSArrayLike",
	"JSFunction",
	"JSObject",
	"Property",
	"Symbol",
	"TypeKind",
	"Undefined",
	"is_array_index",
	"order_keys",
	"to_property_key",
	"undefined",
]
