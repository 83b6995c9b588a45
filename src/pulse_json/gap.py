from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Final

from pulse_json.host import Host
from pulse_json.values import TypeKind

# ES5 limit on the indentation unit
MAX_GAP: Final = 10


@dataclass(frozen=True, slots=True)
class GapConfig:
	"""Resolved ``space`` argument plus the separators derived from it.

	Indent strings are memoized per depth; the config itself never changes
	after resolution.
	"""

	indent_unit: str = ""
	_indents: dict[int, str] = field(
		default_factory=dict, init=False, repr=False, compare=False
	)

	@property
	def pretty(self) -> bool:
		return self.indent_unit != ""

	@property
	def property_separator(self) -> str:
		return ": " if self.pretty else ":"

	def indent(self, depth: int) -> str:
		cached = self._indents.get(depth)
		if cached is None:
			cached = self.indent_unit * depth
			self._indents[depth] = cached
		return cached

	def member_separator(self, depth: int) -> str:
		if not self.pretty:
			return ","
		return ",\n" + self.indent(depth)


def resolve_gap(space: Any, host: Host) -> GapConfig:
	kind = host.type_kind(space)
	if kind is TypeKind.BOXED_NUMBER:
		space = host.to_number(space)
		kind = TypeKind.NUMBER
	elif kind is TypeKind.BOXED_STRING:
		space = host.to_string(space)
		kind = TypeKind.STRING

	if kind is TypeKind.NUMBER:
		if isinstance(space, float) and not math.isfinite(space):
			return GapConfig()
		count = max(0, min(MAX_GAP, int(host.to_integer(space))))
		return GapConfig(" " * count)
	if kind is TypeKind.STRING:
		return GapConfig(space[:MAX_GAP])
	return GapConfig()


__all__ = ["MAX_GAP", "GapConfig", "resolve_gap"]
