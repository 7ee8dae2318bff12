from __future__ import annotations

import pytest  # noqa: TC002

from devicebridge.config import InvalidConfigurationValueError, get_reconcile_config
from devicebridge.config.reconcile import DEFAULT_AUTO_ACCEPT
from devicebridge.domain.reconciliation import MatchClassification


def test_defaults_without_environment() -> None:
    config = get_reconcile_config()

    assert config.max_workers is None
    assert config.auto_accept == DEFAULT_AUTO_ACCEPT


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEVICEBRIDGE_MAX_WORKERS", "3")
    monkeypatch.setenv("DEVICEBRIDGE_AUTO_ACCEPT", "identical")

    config = get_reconcile_config()

    assert config.max_workers == 3  # noqa: PLR2004
    assert config.auto_accept == {MatchClassification.IDENTICAL}


def test_conflicts_cannot_be_auto_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEVICEBRIDGE_AUTO_ACCEPT", "identical,conflict")

    with pytest.raises(InvalidConfigurationValueError, match="conflicts need review"):
        get_reconcile_config()


def test_unknown_classification_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEVICEBRIDGE_AUTO_ACCEPT", "maybe")

    with pytest.raises(InvalidConfigurationValueError, match="unknown classification"):
        get_reconcile_config()
