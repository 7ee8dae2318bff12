"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationValueError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def optional_env_var(name: str) -> str | None:
    """Return the stripped value of ``name``; blank counts as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    values = {name: optional_env_var(name) for name in names}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return {name: value for name, value in values.items() if value is not None}


def positive_int_env_var(name: str) -> int | None:
    raw = optional_env_var(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidConfigurationValueError(name, raw, "expected an integer") from exc
    if value < 1:
        raise InvalidConfigurationValueError(name, raw, "expected a positive integer")
    return value


def list_env_var(name: str) -> tuple[str, ...] | None:
    """Comma separated values of ``name``; ``None`` when unset."""

    raw = optional_env_var(name)
    if raw is None:
        return None
    return tuple(part.strip() for part in raw.split(",") if part.strip())
