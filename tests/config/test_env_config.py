from __future__ import annotations

import pytest  # noqa: TC002

from devicebridge.config import (
    InvalidConfigurationValueError,
    MissingConfigurationError,
    require_env_vars,
)
from devicebridge.config.env import list_env_var, optional_env_var, positive_int_env_var


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_names_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_positive_int_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKERS", "4")
    assert positive_int_env_var("WORKERS") == 4  # noqa: PLR2004

    monkeypatch.setenv("WORKERS", "0")
    with pytest.raises(InvalidConfigurationValueError, match="positive"):
        positive_int_env_var("WORKERS")

    monkeypatch.setenv("WORKERS", "many")
    with pytest.raises(InvalidConfigurationValueError, match="integer"):
        positive_int_env_var("WORKERS")


def test_list_env_var_splits_on_commas(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NAMES", "identical, mergedClean,,")

    assert list_env_var("NAMES") == ("identical", "mergedClean")
    assert list_env_var("UNSET_NAMES") is None
