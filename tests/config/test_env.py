from __future__ import annotations

import pytest

from albumlink.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_float,
    env_str,
    require_env_vars,
)


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("BLANK_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "BLANK_VAR", "MISSING_A"])

    assert "BLANK_VAR, MISSING_A, MISSING_B" in str(exc.value)


def test_missing_configuration_is_a_configuration_error() -> None:
    assert issubclass(MissingConfigurationError, ConfigurationError)


def test_env_float_defaults_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SOME_TTL", raising=False)
    assert env_float("SOME_TTL", 5.0) == 5.0

    monkeypatch.setenv("SOME_TTL", "42.5")
    assert env_float("SOME_TTL", 5.0) == 42.5


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_env_float_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("SOME_TTL", raw)

    with pytest.raises(ConfigurationError):
        env_float("SOME_TTL", 5.0)


def test_env_str_falls_back_on_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_NAME", "  ")
    assert env_str("SOME_NAME", "fallback") == "fallback"

    monkeypatch.setenv("SOME_NAME", " given ")
    assert env_str("SOME_NAME", "fallback") == "given"
