from __future__ import annotations

import re
from typing import Final

_SHORT_ESCAPES: Final = {
	'"': '\\"',
	"\\": "\\\\",
	"\b": "\\b",
	"\f": "\\f",
	"\n": "\\n",
	"\r": "\\r",
	"\t": "\\t",
}

# Anything that cannot be copied verbatim: quote, backslash, C0 controls and
# surrogates (paired surrogates are matched too and written back unchanged).
_NEEDS_ESCAPE = re.compile(
	'[\\ud800-\\udbff][\\udc00-\\udfff]|["\\\\\\x00-\\x1f\\ud800-\\udfff]'
)


def _escape(match: re.Match[str]) -> str:
	text = match.group()
	if len(text) == 2:
		return text
	short = _SHORT_ESCAPES.get(text)
	if short is not None:
		return short
	return f"\\u{ord(text):04x}"


def quote(value: str) -> str:
	"""``QuoteJSONString``: wrap in double quotes, escaping where required."""
	if _NEEDS_ESCAPE.search(value) is None:
		return f'"{value}"'
	return '"' + _NEEDS_ESCAPE.sub(_escape, value) + '"'


__all__ = ["quote"]
