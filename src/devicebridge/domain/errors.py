"""Errors raised by the domain layer.

Reconciliation itself is total: malformed source data degrades to sentinel
values and disagreements are reported as conflicts. Only losing the catalog is
fatal.
"""

from __future__ import annotations


class DeviceBridgeError(RuntimeError):
    """Base class for domain errors."""


class CatalogUnavailableError(DeviceBridgeError):
    """Raised when the catalog cannot be read or validated; aborts the run."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        super().__init__(message)
        self.location = location


class SourceFormatError(DeviceBridgeError):
    """Raised when a source document cannot be parsed at all.

    Malformed individual entries are skipped with a warning instead.
    """

    def __init__(self, message: str, *, source_name: str) -> None:
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name
