"""Bridge contract between source-specific records and the canonical model.

A bridge wraps one record as published by an external source. It projects the
record into the canonical shape (``to_canonical``), re-expresses any canonical
record in the source's vocabulary (``from_canonical``), and tells the resolver
how to find its ground truth (``lookup_key``).

Bridges never consult the catalog and never raise for malformed data:
unparseable fields degrade to the sentinel values of the canonical model and
surface later as diffs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice

    from .contracts import FieldName, LookupKey


@runtime_checkable
class DeviceBridge(Protocol):
    """One source record participating in reconciliation."""

    source_name: ClassVar[str]
    # Fields known to differ legitimately across sources; excluded from classification.
    diff_ignore_keys: ClassVar[frozenset[FieldName]]

    def to_canonical(self) -> CanonicalDevice: ...

    def from_canonical(self, reference: CanonicalDevice) -> Self: ...

    def lookup_key(self) -> LookupKey: ...

    def native_text(self) -> str: ...
