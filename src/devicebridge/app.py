"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devicebridge.adapters.catalog import JsonCatalogStore
from devicebridge.adapters.device_json import DeviceJsonLoader
from devicebridge.adapters.http_resilience import fetch_text
from devicebridge.adapters.listing import ListingLoader
from devicebridge.adapters.mac_json import MacJsonLoader
from devicebridge.adapters.report import ReviewReport, build_report, write_report
from devicebridge.adapters.support_pages import SupportPagesLoader
from devicebridge.config import (
    ReconcileConfig,
    SourceConfig,
    SourceName,
    get_reconcile_config,
    get_source_config,
    get_storage_config,
)
from devicebridge.domain.reconciliation import (
    MatchClassification,
    ReconciliationEngine,
    order_by_catalog,
)
from devicebridge.domain.snapshot import render_catalog

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from devicebridge.domain.ports import BridgeLoader, Catalog
    from devicebridge.domain.reconciliation import ReconciliationResult

LoaderFactory = Callable[[], "BridgeLoader"]

LOADERS: Final[MappingProxyType[SourceName, LoaderFactory]] = MappingProxyType(
    {
        SourceName.LISTING: ListingLoader,
        SourceName.DEVICE_JSON: DeviceJsonLoader,
        SourceName.MAC_JSON: MacJsonLoader,
        SourceName.SUPPORT_PAGES: SupportPagesLoader,
    }
)


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileSummary:
    source_name: str
    results: tuple[ReconciliationResult, ...]
    report: ReviewReport
    applied: int = 0
    report_path: Path | None = None

    @property
    def conflicts(self) -> int:
        return self.report.counts.get(MatchClassification.CONFLICT, 0)


def build_loader(source: SourceName | str) -> BridgeLoader:
    return LOADERS[SourceName(source)]()


def read_source_text(
    config: SourceConfig,
    *,
    input_path: Path | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Read the raw source from ``input_path`` or fetch it from the configured URL."""

    if input_path is not None:
        log.info("Reading %s from %s", config.name, input_path)
        return input_path.read_text(encoding="utf-8")
    url = config.require_url()
    return asyncio.run(fetch_text(config.resilience, url, transport=transport))


def apply_results(
    catalog: Catalog,
    results: Iterable[ReconciliationResult],
    *,
    auto_accept: frozenset[MatchClassification],
) -> int:
    """Upsert merged records whose classification is auto-accepted.

    Each merge replaces the record it was resolved against; synthesized records
    have no catalog position and are matched on identifier instead. Returns the
    number of records written; unchanged records are skipped.
    """

    applied = 0
    for result in results:
        if result.classification not in auto_accept or result.merged == result.base:
            continue
        replacing = None if result.resolution.is_synthesized else result.base
        catalog.upsert(result.merged, replacing=replacing)
        applied += 1
    return applied


def reconcile_source(
    source: SourceName | str,
    *,
    input_path: Path | None = None,
    catalog_path: Path | None = None,
    report_path: Path | None = None,
    apply: bool = False,
    config: ReconcileConfig | None = None,
    source_config: SourceConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ReconcileSummary:
    """Reconcile one source against the catalog; optionally write back accepted merges."""

    effective_config = config or get_reconcile_config()
    effective_source = source_config or get_source_config(source)
    # Applying may bootstrap a catalog that does not exist yet.
    store = JsonCatalogStore(
        catalog_path or get_storage_config().catalog_path(), allow_missing=apply
    )
    catalog = store.load()
    loader = build_loader(effective_source.name)
    log.info(
        "Starting reconciliation: source=%s, catalog=%s records, apply=%s",
        effective_source.name,
        len(catalog),
        apply,
    )

    text = read_source_text(effective_source, input_path=input_path, transport=transport)
    bridges = loader.load(text)
    engine = ReconciliationEngine.from_devices(
        catalog.all(), max_workers=effective_config.max_workers
    )
    results = order_by_catalog(engine.reconcile(bridges), catalog.all())

    report = build_report(results, source_name=loader.source_name)
    written_report = write_report(report, report_path) if report_path is not None else None

    applied = 0
    if apply:
        applied = apply_results(catalog, results, auto_accept=effective_config.auto_accept)
        store.save(catalog.all())

    summary = ReconcileSummary(
        source_name=loader.source_name,
        results=tuple(results),
        report=report,
        applied=applied,
        report_path=written_report,
    )
    log.info(
        "Finished reconciliation: records=%s, conflicts=%s, applied=%s",
        len(results),
        summary.conflicts,
        applied,
    )
    return summary


def snapshot_catalog(
    *,
    catalog_path: Path | None = None,
    output_path: Path | None = None,
) -> str:
    """Render the catalog snapshot; also write it to ``output_path`` when given."""

    catalog = JsonCatalogStore(catalog_path or get_storage_config().catalog_path()).load()
    text = render_catalog(catalog.all())
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        log.info("Wrote snapshot of %s records to %s", len(catalog), output_path)
    return text


__all__ = [
    "LOADERS",
    "ReconcileSummary",
    "apply_results",
    "build_loader",
    "read_source_text",
    "reconcile_source",
    "snapshot_catalog",
]
