import math
from typing import Any

import pytest
from pulse_json import (
	Boxed,
	JSFunction,
	JSONSyntaxError,
	StackOverflowError,
	parse,
	stringify,
	undefined,
)
from pulse_json.env import ENV_PULSE_JSON_MAX_DEPTH
from pulse_json.tokenizer import ParseError, parse_text


class TestValues:
	def test_structures(self):
		assert parse('{"a":1,"b":[true,null,"x"]}') == {
			"a": 1,
			"b": [True, None, "x"],
		}

	def test_integers_stay_int(self):
		result = parse("12")
		assert result == 12
		assert type(result) is int

	def test_fractions_and_exponents(self):
		assert parse("1.5") == 1.5
		assert parse("1e3") == 1000.0
		assert parse("1e400") == math.inf

	def test_negative_zero(self):
		result = parse("-0")
		assert type(result) is float
		assert math.copysign(1, result) == -1

	def test_integers_beyond_double_precision_round(self):
		result = parse("9007199254740993")
		assert type(result) is float
		assert result == 9007199254740992.0

	def test_keys_in_js_order(self):
		assert list(parse('{"b":1,"2":2,"1":3}')) == ["1", "2", "b"]

	def test_duplicate_keys_keep_last_value(self):
		result = parse('{"a":1,"b":2,"a":3}')
		assert result == {"a": 3, "b": 2}
		assert list(result) == ["a", "b"]

	def test_escapes(self):
		assert parse('"\\u0041\\n\\/"') == "A\n/"
		assert parse('"\\ud800"') == "\ud800"
		assert stringify(parse('"\\ud800"')) == '"\\ud800"'

	def test_surrounding_whitespace(self):
		assert parse(" \n[1]\t\r") == [1]


class TestTextArgument:
	def test_missing_text(self):
		with pytest.raises(JSONSyntaxError) as exc_info:
			parse()
		assert isinstance(exc_info.value, ValueError)
		assert exc_info.value.js_name == "SyntaxError"
		assert exc_info.value.position is None

	def test_non_string_text_converted(self):
		assert parse(1) == 1
		assert parse(None) is None
		assert parse(True) is True
		assert parse(Boxed("[1]")) == [1]

	def test_undefined_text_is_invalid(self):
		with pytest.raises(JSONSyntaxError):
			parse(undefined)


class TestSyntaxErrors:
	@pytest.mark.parametrize(
		"text",
		["", "{", "[1,]", "{'a':1}", "1 2", "\u00a0[1]", '"a\nb"', "01", "+1", "[1"],
	)
	def test_rejected(self, text: str):
		with pytest.raises(JSONSyntaxError):
			parse(text)

	def test_reports_position(self):
		with pytest.raises(JSONSyntaxError) as exc_info:
			parse('{"a" 1}')
		assert exc_info.value.position == 5
		assert "(at position 5)" in str(exc_info.value)

	def test_non_finite_constants(self):
		with pytest.raises(JSONSyntaxError) as exc_info:
			parse("NaN")
		assert exc_info.value.message == "Unexpected token NaN"
		assert exc_info.value.position == 0

	def test_constant_position_skips_strings(self):
		with pytest.raises(JSONSyntaxError) as exc_info:
			parse('["NaN", Infinity]')
		assert exc_info.value.message == "Unexpected token Infinity"
		assert exc_info.value.position == 8

	def test_depth_limit_matches_stringify(self):
		text = "[" * 256 + "]" * 256
		assert stringify(parse(text)) == text
		with pytest.raises(StackOverflowError):
			parse("[" * 257 + "]" * 257)
		with pytest.raises(StackOverflowError):
			parse('{"a":' * 300 + "1" + "}" * 300)

	def test_depth_limit_from_environment(self, monkeypatch: pytest.MonkeyPatch):
		monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, "3")
		assert parse('[{"a":[1]}]') == [{"a": [1]}]
		with pytest.raises(StackOverflowError):
			parse('[{"a":[[1]]}]')

	def test_deep_nesting_reported_as_stack_overflow(self):
		with pytest.raises(StackOverflowError):
			parse("[" * 100_000 + "]" * 100_000)


def test_tokenizer_error_type():
	with pytest.raises(ParseError) as exc_info:
		parse_text("[1,")
	assert exc_info.value.position == 3


class TestReviver:
	def test_transforms_values(self):
		def double(key: str, value: Any) -> Any:
			return value * 2 if type(value) is int else value

		assert parse('{"a":1,"b":2}', double) == {"a": 2, "b": 4}

	def test_bottom_up_order(self):
		keys: list[str] = []

		def record(key: str, value: Any) -> Any:
			keys.append(key)
			return value

		parse('{"a":[1,2],"b":{"c":3}}', record)
		assert keys == ["0", "1", "a", "c", "b", ""]

	def test_undefined_deletes_object_member(self):
		def drop_a(key: str, value: Any) -> Any:
			return undefined if key == "a" else value

		assert parse('{"a":1,"b":2}', drop_a) == {"b": 2}

	def test_undefined_leaves_array_hole(self):
		def drop_two(key: str, value: Any) -> Any:
			return undefined if value == 2 else value

		result = parse("[1,2,3]", drop_two)
		assert result == [1, undefined, 3]
		assert stringify(result) == "[1,null,3]"

	def test_root_replacement(self):
		assert parse("1", lambda k, v: "root" if k == "" else v) == "root"
		assert parse("[1]", lambda k, v: undefined) is undefined

	def test_receives_holder_as_this(self):
		holders: list[Any] = []

		def reviver(this: Any, key: str, value: Any) -> Any:
			holders.append(this)
			return value

		result = parse('{"a":1}', JSFunction(reviver))
		assert holders[0] is result
		assert holders[1] == {"": result}

	def test_members_added_during_walk_are_not_revived(self):
		keys: list[str] = []

		def reviver(this: Any, key: str, value: Any) -> Any:
			keys.append(key)
			if key == "a":
				this["z"] = 5
			return value

		result = parse('{"a":1,"b":2}', JSFunction(reviver))
		assert keys == ["a", "b", ""]
		assert result == {"a": 1, "b": 2, "z": 5}

	def test_non_callable_reviver_ignored(self):
		assert parse("[1]", "nope") == [1]
		assert parse("[1]", {"a": 1}) == [1]

	def test_depth_limit(self, monkeypatch: pytest.MonkeyPatch):
		monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, "2")
		assert parse("[[1]]", lambda k, v: v) == [[1]]
		with pytest.raises(StackOverflowError):
			parse("[[[1]]]", lambda k, v: v)

	def test_callback_errors_propagate(self):
		def reviver(key: str, value: Any) -> Any:
			raise LookupError("nope")

		with pytest.raises(LookupError, match="nope"):
			parse("[1]", reviver)
