"""Serializable review report for reconciliation results.

The report holds plain values only, so it can be written to disk and read by
review tooling without access to the catalog or the bridge records.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from devicebridge.domain.reconciliation import (
    Agreement,
    FieldName,
    FieldSource,
    HighlightColor,
    MatchClassification,
    MatchStrategy,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devicebridge.domain.reconciliation import FieldComparison, ReconciliationResult

log = logging.getLogger(__name__)


class ReviewField(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: FieldName
    base: str
    merged: str
    incoming: str
    agreement: Agreement
    source: FieldSource
    changed: bool
    ignored: bool = False
    highlight: HighlightColor | None = None

    @classmethod
    def from_comparison(cls, comparison: FieldComparison) -> ReviewField:
        return cls(
            field=comparison.field,
            base=comparison.base,
            merged=comparison.merged,
            incoming=comparison.incoming,
            agreement=comparison.agreement,
            source=comparison.source,
            changed=comparison.changed,
            ignored=comparison.ignored,
            highlight=comparison.highlight,
        )


class ReviewItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    identifiers: tuple[str, ...]
    classification: MatchClassification
    strategy: MatchStrategy
    matched_key: str | None = None
    fields: tuple[ReviewField, ...] = ()
    # Fields whose disagreement makes this item a conflict.
    evidence: tuple[FieldName, ...] = ()
    source_text: str
    base_text: str
    merged_text: str


class ReviewReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_name: str
    counts: dict[MatchClassification, int] = Field(default_factory=dict)
    items: tuple[ReviewItem, ...] = ()

    def items_with(self, classification: MatchClassification) -> tuple[ReviewItem, ...]:
        return tuple(item for item in self.items if item.classification is classification)


def review_item(result: ReconciliationResult) -> ReviewItem:
    return ReviewItem(
        name=result.merged.official_name,
        identifiers=result.merged.identifiers,
        classification=result.classification,
        strategy=result.resolution.strategy,
        matched_key=result.resolution.matched_key,
        fields=tuple(ReviewField.from_comparison(comparison) for comparison in result.diff.fields),
        evidence=tuple(comparison.field for comparison in result.diff.evidence),
        source_text=result.source_text,
        base_text=result.base_text,
        merged_text=result.merged_text,
    )


def build_report(
    results: Iterable[ReconciliationResult],
    *,
    source_name: str,
    include_identical: bool = False,
) -> ReviewReport:
    """Build a report; identical results are counted but listed only on request."""

    collected = list(results)
    counts = Counter(result.classification for result in collected)
    items = tuple(
        review_item(result)
        for result in collected
        if include_identical or result.classification is not MatchClassification.IDENTICAL
    )
    return ReviewReport(
        source_name=source_name,
        counts={classification: counts[classification] for classification in MatchClassification},
        items=items,
    )


def write_report(report: ReviewReport, path: Path | str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(report.model_dump_json(indent=2) + "\n", encoding="utf-8")
    log.info("Wrote review report with %s items to %s", len(report.items), target)
    return target


__all__ = [
    "ReviewField",
    "ReviewItem",
    "ReviewReport",
    "build_report",
    "review_item",
    "write_report",
]
