import pytest
from pulse_json.env import ENV_PULSE_JSON_MAX_DEPTH, ENV_PULSE_JSON_MAX_STRING_LENGTH


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_PULSE_JSON_MAX_DEPTH, raising=False)
	monkeypatch.delenv(ENV_PULSE_JSON_MAX_STRING_LENGTH, raising=False)
	yield
