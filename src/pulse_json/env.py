"""Environment-driven settings for the JSON engine.

Values are read on every access so tests and long-running processes can
change them through ``os.environ`` (or the setters below) without reloading.
"""

from __future__ import annotations

import os

ENV_PULSE_JSON_MAX_DEPTH = "PULSE_JSON_MAX_DEPTH"
ENV_PULSE_JSON_MAX_STRING_LENGTH = "PULSE_JSON_MAX_STRING_LENGTH"

DEFAULT_MAX_DEPTH = 256
# Largest string the engine will try to build, in characters.
DEFAULT_MAX_STRING_LENGTH = 2**31 - 2


def _read_positive_int(name: str, default: int) -> int:
	raw = os.environ.get(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		value = int(raw)
	except ValueError:
		raise ValueError(f"{name} must be an integer, got {raw!r}") from None
	if value <= 0:
		raise ValueError(f"{name} must be positive, got {value}")
	return value


class PulseJsonEnv:
	__slots__: tuple[str, ...] = ()

	@property
	def max_depth(self) -> int:
		return _read_positive_int(ENV_PULSE_JSON_MAX_DEPTH, DEFAULT_MAX_DEPTH)

	@max_depth.setter
	def max_depth(self, value: int) -> None:
		os.environ[ENV_PULSE_JSON_MAX_DEPTH] = str(value)

	@property
	def max_string_length(self) -> int:
		return _read_positive_int(
			ENV_PULSE_JSON_MAX_STRING_LENGTH, DEFAULT_MAX_STRING_LENGTH
		)

	@max_string_length.setter
	def max_string_length(self, value: int) -> None:
		os.environ[ENV_PULSE_JSON_MAX_STRING_LENGTH] = str(value)


env = PulseJsonEnv()

__all__ = [
	"DEFAULT_MAX_DEPTH",
	"DEFAULT_MAX_STRING_LENGTH",
	"ENV_PULSE_JSON_MAX_DEPTH",
	"ENV_PULSE_JSON_MAX_STRING_LENGTH",
	"PulseJsonEnv",
	"env",
]
