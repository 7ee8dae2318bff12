"""Ports for turning raw source text into bridge records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from devicebridge.domain.reconciliation import DeviceBridge


@runtime_checkable
class BridgeLoader(Protocol):
    """Parse one source's raw text into bridge records.

    Splitting happens here: a raw entry describing several SKUs yields one
    record per SKU.
    """

    source_name: str

    def load(self, text: str) -> list[DeviceBridge]: ...


__all__ = ["BridgeLoader"]
