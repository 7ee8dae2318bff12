"""Orchestrator for the reconciliation subsystem.

Reconciling one bridge is a pure function of the bridge and the immutable
``LookupIndex``. The engine fans bridges out over a bounded thread pool and
collects results in input order; ``order_by_catalog`` restores the catalog's
own ordering for reports and snapshots.
"""

from __future__ import annotations

import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from devicebridge.domain.model import UNKNOWN_IDENTIFIER

from .diff import compare_devices
from .merge import DEFAULT_MERGE_POLICY, MergePolicy, merge_devices
from .resolve import LookupIndex, Resolver

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from concurrent.futures import Future

    from devicebridge.domain.model import CanonicalDevice

    from .bridge import DeviceBridge
    from .contracts import MatchClassification
    from .diff import DeviceDiff
    from .resolve import Resolution

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Everything computed for one bridge; safe to discard after reporting."""

    bridge: DeviceBridge
    resolution: Resolution
    incoming: CanonicalDevice
    merged: CanonicalDevice
    diff: DeviceDiff
    # The bridge re-expressed from ground truth and from the merge result.
    base_text: str
    merged_text: str

    @property
    def base(self) -> CanonicalDevice:
        return self.resolution.device

    @property
    def classification(self) -> MatchClassification:
        return self.diff.classification

    @property
    def source_text(self) -> str:
        return self.bridge.native_text()


def reconcile_bridge(
    bridge: DeviceBridge,
    *,
    resolver: Resolver,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> ReconciliationResult:
    """Resolve, merge and classify one bridge record."""

    resolution = resolver.resolve(bridge.lookup_key())
    incoming = bridge.to_canonical()
    merged = merge_devices(resolution.device, incoming, policy=policy)
    diff = compare_devices(
        resolution.device, merged, incoming, ignore=type(bridge).diff_ignore_keys
    )
    return ReconciliationResult(
        bridge=bridge,
        resolution=resolution,
        incoming=incoming,
        merged=merged,
        diff=diff,
        base_text=bridge.from_canonical(resolution.device).native_text(),
        merged_text=bridge.from_canonical(merged).native_text(),
    )


@dataclass(slots=True)
class ReconciliationEngine:
    """Run reconciliation for a batch of bridges against one catalog snapshot."""

    resolver: Resolver
    policy: MergePolicy = field(default_factory=MergePolicy)
    max_workers: int | None = None

    @classmethod
    def from_devices(
        cls,
        devices: Iterable[CanonicalDevice],
        *,
        policy: MergePolicy | None = None,
        max_workers: int | None = None,
    ) -> ReconciliationEngine:
        return cls(
            resolver=Resolver(LookupIndex.build(devices)),
            policy=policy or DEFAULT_MERGE_POLICY,
            max_workers=max_workers,
        )

    @property
    def worker_count(self) -> int:
        return self.max_workers or os.cpu_count() or 1

    def reconcile(self, bridges: Iterable[DeviceBridge]) -> list[ReconciliationResult]:
        """Reconcile ``bridges``; results follow input order.

        Pending work is cancelled if collection is interrupted.
        """

        pending = list(bridges)
        if not pending:
            return []
        executor = ThreadPoolExecutor(
            max_workers=min(self.worker_count, len(pending)),
            thread_name_prefix="reconcile",
        )
        futures: list[Future[ReconciliationResult]] = []
        try:
            futures.extend(
                executor.submit(
                    reconcile_bridge, bridge, resolver=self.resolver, policy=self.policy
                )
                for bridge in pending
            )
            results = [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown()
        counts = Counter(result.classification for result in results)
        summary = ", ".join(f"{name}={count}" for name, count in sorted(counts.items()))
        log.info("Reconciled %s records: %s", len(results), summary)
        return results


def order_by_catalog(
    results: Sequence[ReconciliationResult],
    catalog_devices: Iterable[CanonicalDevice],
) -> list[ReconciliationResult]:
    """Sort ``results`` by catalog position of their merged identifiers.

    Records unknown to the catalog go last; ties keep input order.
    """

    catalog = tuple(catalog_devices)
    positions: dict[str, int] = {}
    for position, device in enumerate(catalog):
        for identifier in device.identifiers:
            if identifier != UNKNOWN_IDENTIFIER:
                positions.setdefault(identifier, position)
    unknown = len(catalog)

    def catalog_position(result: ReconciliationResult) -> int:
        found = [positions[i] for i in result.merged.identifiers if i in positions]
        return min(found, default=unknown)

    return sorted(results, key=catalog_position)
