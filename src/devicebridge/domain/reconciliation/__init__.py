"""Reconciliation core for aligning external device sources with the catalog.

Layered flow per bridge record:
1) project the source record into the canonical shape
2) resolve the ground-truth record from an immutable lookup index
3) merge ground truth and projection field by field
4) compare base, merged and incoming and classify the outcome

The engine runs the flow for a batch of bridges on a bounded worker pool.
"""

from __future__ import annotations

from .bridge import DeviceBridge
from .contracts import (
    FIELD_SOURCE_HIGHLIGHTS,
    Agreement,
    FieldName,
    FieldSource,
    HighlightColor,
    LookupKey,
    MatchClassification,
    MatchStrategy,
)
from .diff import DeviceDiff, FieldComparison, classify, compare_devices
from .engine import ReconciliationEngine, ReconciliationResult, order_by_catalog, reconcile_bridge
from .merge import DEFAULT_MERGE_POLICY, MergePolicy, merge_devices
from .resolve import LookupIndex, Resolution, Resolver, infer_idiom, synthesize_device

__all__ = [
    "DEFAULT_MERGE_POLICY",
    "FIELD_SOURCE_HIGHLIGHTS",
    "Agreement",
    "DeviceBridge",
    "DeviceDiff",
    "FieldComparison",
    "FieldName",
    "FieldSource",
    "HighlightColor",
    "LookupIndex",
    "LookupKey",
    "MatchClassification",
    "MatchStrategy",
    "MergePolicy",
    "ReconciliationEngine",
    "ReconciliationResult",
    "Resolution",
    "Resolver",
    "classify",
    "compare_devices",
    "infer_idiom",
    "merge_devices",
    "order_by_catalog",
    "reconcile_bridge",
    "synthesize_device",
]
