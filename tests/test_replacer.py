import math

from pulse_json import Boxed, JSArrayLike, JSFunction
from pulse_json.host import DEFAULT_HOST
from pulse_json.replacer import KeyList, ReplacerFunction, resolve_replacer


def test_ignored_replacers():
	assert resolve_replacer(None, DEFAULT_HOST) is None
	assert resolve_replacer("abc", DEFAULT_HOST) is None
	assert resolve_replacer({"a": 1}, DEFAULT_HOST) is None


def test_callables_become_functions():
	def fn(key: str, value: object) -> object:
		return value

	resolved = resolve_replacer(fn, DEFAULT_HOST)
	assert isinstance(resolved, ReplacerFunction)
	assert resolved.fn is fn

	js_fn = JSFunction(lambda this, key, value: value)
	resolved = resolve_replacer(js_fn, DEFAULT_HOST)
	assert isinstance(resolved, ReplacerFunction)
	assert resolved.fn is js_fn


def test_key_list_filters_and_dedupes():
	replacer = ["a", 1, 1.5, True, None, {"x": 1}, Boxed(2), Boxed("b"), Boxed(False), "a"]
	resolved = resolve_replacer(replacer, DEFAULT_HOST)
	assert resolved == KeyList(("a", "1", "1.5", "2", "b"))
	assert len(resolved) == 5
	assert list(resolved) == ["a", "1", "1.5", "2", "b"]


def test_numbers_use_js_formatting():
	resolved = resolve_replacer([1e21, math.inf, math.nan, -0.0], DEFAULT_HOST)
	assert resolved == KeyList(("1e+21", "Infinity", "NaN", "0"))


def test_array_like_replacer():
	resolved = resolve_replacer(JSArrayLike(["x", 3]), DEFAULT_HOST)
	assert resolved == KeyList(("x", "3"))


def test_tuple_replacer():
	assert resolve_replacer(("b", "a"), DEFAULT_HOST) == KeyList(("b", "a"))
