"""Resolution of the ``replacer`` argument of ``stringify``."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Final

from pulse_json.host import Host
from pulse_json.values import TypeKind

# Replacer array entries that name a property; booleans are deliberately absent
_KEY_KINDS: Final = frozenset(
	{TypeKind.STRING, TypeKind.NUMBER, TypeKind.BOXED_NUMBER, TypeKind.BOXED_STRING}
)


@dataclass(frozen=True, slots=True)
class KeyList:
	"""Allow-list of property names, unique and in first-occurrence order."""

	names: tuple[str, ...]

	def __iter__(self) -> Iterator[str]:
		return iter(self.names)

	def __len__(self) -> int:
		return len(self.names)


@dataclass(frozen=True, slots=True)
class ReplacerFunction:
	fn: Any


ReplacerConfig = KeyList | ReplacerFunction | None


def resolve_replacer(replacer: Any, host: Host) -> ReplacerConfig:
	if host.is_callable(replacer):
		return ReplacerFunction(replacer)
	if host.is_array(replacer):
		return KeyList(_collect_names(replacer, host))
	return None


def _collect_names(replacer: Any, host: Host) -> tuple[str, ...]:
	if isinstance(replacer, (list, tuple)):
		items: Iterator[Any] = iter(list(replacer))
	else:
		length = host.array_length(replacer)
		items = (host.get_property(replacer, str(i)) for i in range(length))

	names: list[str] = []
	for item in items:
		if host.type_kind(item) not in _KEY_KINDS:
			continue
		names.append(item if isinstance(item, str) else host.to_string(item))

	# dict keeps first-occurrence order while dropping repeats
	return tuple(dict.fromkeys(names))


__all__ = [
	"KeyList",
	"ReplacerConfig",
	"ReplacerFunction",
	"resolve_replacer",
]
