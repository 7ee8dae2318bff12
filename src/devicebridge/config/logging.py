"""Shared logging helpers for devicebridge."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once for CLI output.

    Reconciliation summaries are logged at INFO, per-record resolution detail at
    DEBUG and degraded source fields at WARNING. Pass ``force=True`` to
    reconfigure during tests or when the CLI raises the verbosity.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=force)
