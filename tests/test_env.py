import os

import pytest
from pulse_json.env import (
	DEFAULT_MAX_DEPTH,
	DEFAULT_MAX_STRING_LENGTH,
	ENV_PULSE_JSON_MAX_DEPTH,
	ENV_PULSE_JSON_MAX_STRING_LENGTH,
	env,
)


def test_defaults():
	assert env.max_depth == DEFAULT_MAX_DEPTH == 256
	assert env.max_string_length == DEFAULT_MAX_STRING_LENGTH == 2**31 - 2


def test_reads_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, "12")
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_STRING_LENGTH, " 99 ")
	assert env.max_depth == 12
	assert env.max_string_length == 99


def test_blank_value_uses_default(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, "")
	assert env.max_depth == DEFAULT_MAX_DEPTH


@pytest.mark.parametrize("raw", ["abc", "1.5", "0", "-3"])
def test_invalid_values(monkeypatch: pytest.MonkeyPatch, raw: str):
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, raw)
	with pytest.raises(ValueError, match=ENV_PULSE_JSON_MAX_DEPTH):
		_ = env.max_depth


def test_setters_write_environment(monkeypatch: pytest.MonkeyPatch):
	# Registered first so monkeypatch restores the original state afterwards
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_DEPTH, "1")
	monkeypatch.setenv(ENV_PULSE_JSON_MAX_STRING_LENGTH, "1")
	env.max_depth = 40
	env.max_string_length = 1000
	assert os.environ[ENV_PULSE_JSON_MAX_DEPTH] == "40"
	assert env.max_depth == 40
	assert env.max_string_length == 1000
