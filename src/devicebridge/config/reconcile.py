"""Reconciliation run settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from devicebridge.domain.reconciliation import MatchClassification

from .env import list_env_var, positive_int_env_var
from .errors import InvalidConfigurationValueError

MAX_WORKERS_ENV: Final[str] = "DEVICEBRIDGE_MAX_WORKERS"
AUTO_ACCEPT_ENV: Final[str] = "DEVICEBRIDGE_AUTO_ACCEPT"
DEFAULT_AUTO_ACCEPT: Final[frozenset[MatchClassification]] = frozenset(
    {MatchClassification.IDENTICAL, MatchClassification.MERGED_CLEAN}
)


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    max_workers: int | None = None
    # Classifications written back to the catalog without review.
    auto_accept: frozenset[MatchClassification] = field(default_factory=lambda: DEFAULT_AUTO_ACCEPT)


def _auto_accept() -> frozenset[MatchClassification]:
    names = list_env_var(AUTO_ACCEPT_ENV)
    if names is None:
        return DEFAULT_AUTO_ACCEPT
    raw = ",".join(names)
    try:
        accepted = frozenset(MatchClassification(name) for name in names)
    except ValueError as exc:
        reason = "unknown classification"
        raise InvalidConfigurationValueError(AUTO_ACCEPT_ENV, raw, reason) from exc
    if MatchClassification.CONFLICT in accepted:
        raise InvalidConfigurationValueError(AUTO_ACCEPT_ENV, raw, "conflicts need review")
    return accepted


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        max_workers=positive_int_env_var(MAX_WORKERS_ENV),
        auto_accept=_auto_accept(),
    )
