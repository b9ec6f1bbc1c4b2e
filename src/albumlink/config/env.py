"""Typed access to environment variables."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def _read(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Read every variable in ``names``; blank values count as missing."""

    values = {name: _read(name) for name in names}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def env_float(name: str, default: float) -> float:
    """Positive number from ``name``, or ``default`` when it is unset."""

    raw = _read(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def env_str(name: str, default: str) -> str:
    """Stripped value of ``name``, or ``default`` when it is unset or blank."""

    return _read(name) or default
