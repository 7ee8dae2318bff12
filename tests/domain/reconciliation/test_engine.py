from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from devicebridge.domain.model import UNKNOWN_IDENTIFIER, Processor
from devicebridge.domain.reconciliation import (
    MatchClassification,
    MatchStrategy,
    ReconciliationEngine,
    order_by_catalog,
    reconcile_bridge,
)
from devicebridge.domain.reconciliation.engine import ReconciliationResult
from tests.helpers.devices import StubBridge, make_device, stub_bridges

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice


def test_reconcile_bridge_carries_texts_and_classification(
    catalog_devices: list[CanonicalDevice],
) -> None:
    engine = ReconciliationEngine.from_devices(catalog_devices)
    bridge = StubBridge(catalog_devices[0].replace(processor=Processor.A16))

    result = reconcile_bridge(bridge, resolver=engine.resolver)

    assert result.base is catalog_devices[0]
    assert result.resolution.strategy is MatchStrategy.IDENTIFIER
    assert result.classification is MatchClassification.CONFLICT
    assert result.merged.processor is Processor.A17_PRO
    assert "a17pro" in result.base_text
    assert "a16" in result.source_text
    assert result.merged_text == result.base_text


def test_engine_results_follow_input_order(catalog_devices: list[CanonicalDevice]) -> None:
    engine = ReconciliationEngine.from_devices(catalog_devices, max_workers=3)
    incoming = [
        make_device(identifiers=("iPhone99,1",), official_name="iPhone Future"),
        *reversed(catalog_devices),
    ]

    results = engine.reconcile(stub_bridges(incoming))

    assert [result.incoming for result in results] == incoming
    assert results[0].resolution.is_synthesized
    assert [result.classification for result in results[1:]] == [
        MatchClassification.IDENTICAL
    ] * len(catalog_devices)


def test_engine_handles_empty_input() -> None:
    assert ReconciliationEngine.from_devices([]).reconcile([]) == []


def test_engine_worker_count_defaults_to_cpu_count() -> None:
    assert ReconciliationEngine.from_devices([]).worker_count >= 1
    assert ReconciliationEngine.from_devices([], max_workers=2).worker_count == 2


def test_engine_propagates_worker_errors(catalog_devices: list[CanonicalDevice]) -> None:
    class _BrokenBridge(StubBridge):
        def to_canonical(self) -> CanonicalDevice:
            raise RuntimeError("boom")

    engine = ReconciliationEngine.from_devices(catalog_devices, max_workers=2)
    bridges = [StubBridge(catalog_devices[0]), _BrokenBridge(catalog_devices[1])]

    with pytest.raises(RuntimeError, match="boom"):
        engine.reconcile(bridges)


def test_order_by_catalog_puts_unknown_records_last(
    catalog_devices: list[CanonicalDevice],
) -> None:
    engine = ReconciliationEngine.from_devices(catalog_devices)
    unknown_first = make_device(identifiers=(UNKNOWN_IDENTIFIER,), official_name="Mystery")
    unknown_second = make_device(identifiers=("iPhone99,1",), official_name="Future")
    incoming = [unknown_first, catalog_devices[3], unknown_second, catalog_devices[0]]

    ordered = order_by_catalog(engine.reconcile(stub_bridges(incoming)), catalog_devices)

    assert [result.incoming for result in ordered] == [
        catalog_devices[0],
        catalog_devices[3],
        unknown_first,
        unknown_second,
    ]


def test_results_are_plain_values(catalog_devices: list[CanonicalDevice]) -> None:
    engine = ReconciliationEngine.from_devices(catalog_devices)

    (result,) = engine.reconcile([StubBridge(catalog_devices[1])])

    assert isinstance(result, ReconciliationResult)
    for comparison in result.diff.fields:
        assert isinstance(comparison.base, str)
        assert isinstance(comparison.merged, str)
        assert isinstance(comparison.incoming, str)
