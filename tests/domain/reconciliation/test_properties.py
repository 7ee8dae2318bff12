"""Invariants that hold for every pair of records, checked over a small corpus."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest

from devicebridge.domain.model import (
    EXCLUSIVE_KINDS,
    UNKNOWN_IDENTIFIER,
    UNKNOWN_NAME,
    UNKNOWN_SUPPORT_REFERENCE,
    Biometrics,
    Camera,
    Capability,
    CapabilityKind,
    Color,
    ComputerForm,
    Idiom,
    IntroductionDate,
    OSVersionRange,
    Processor,
    StylusGeneration,
    Version,
    capabilities_of_kind,
)
from devicebridge.domain.reconciliation import (
    FieldName,
    LookupIndex,
    LookupKey,
    MatchClassification,
    ReconciliationEngine,
    Resolver,
    compare_devices,
    merge_devices,
    order_by_catalog,
)
from devicebridge.domain.snapshot import render_catalog
from tests.helpers.devices import StubBridge, make_device, stub_bridges

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice

_USB_C = Capability.flag(CapabilityKind.USB_C)
_ACTION_BUTTON = Capability.flag(CapabilityKind.ACTION_BUTTON)
_WIDE = Capability.cameras({Camera.WIDE})
_WIDE_TELE = Capability.cameras({Camera.WIDE, Camera.TELEPHOTO})

CORPUS: tuple[CanonicalDevice, ...] = (
    make_device(),
    make_device(
        official_name="iPhone 15 Pro",
        identifiers=("iPhone16,1",),
        introduction=IntroductionDate(2023, 9),
        support_reference="SP901",
        capabilities=frozenset({_USB_C, Capability.biometrics(Biometrics.FACE_ID)}),
        model_numbers=("A2848",),
        processor=Processor.A17_PRO,
    ),
    make_device(
        official_name="iphone 15 pro",
        identifiers=("iPhone16,1", "iPhone16,2"),
        introduction=IntroductionDate(2023, 9, 22),
        os_versions=OSVersionRange(launch=Version(17), end_of_support=Version(26)),
        capabilities=frozenset({_ACTION_BUTTON, Capability.biometrics(Biometrics.TOUCH_ID)}),
        model_numbers=("A2848", "A3101"),
        colors=(Color.BLACK,),
        processor=Processor.A16,
    ),
    make_device(
        idiom=Idiom.UNSPECIFIED,
        official_name=UNKNOWN_NAME,
        identifiers=(UNKNOWN_IDENTIFIER,),
    ),
    make_device(
        idiom=Idiom.COMPUTER,
        official_name="MacBook Air (M2, 2022)",
        identifiers=("Mac14,2",),
        introduction=IntroductionDate(2022),
        capabilities=frozenset({Capability.computer_form(ComputerForm.MACBOOK_GEN2)}),
        model_numbers=("MLY33LL/A",),
        colors=(Color.MIDNIGHT, Color.STARLIGHT),
        processor=Processor.M2,
    ),
    make_device(
        idiom=Idiom.WATCH,
        official_name="Apple Watch Series 9",
        identifiers=("Watch7,1", "Watch7,2"),
        model_numbers=("A2978",),
        image="https://example.com/watch.png",
    ),
    make_device(
        official_name="iPhone 15 Pro",
        identifiers=("iPhone16,1",),
        capabilities=frozenset({_WIDE}),
    ),
    make_device(
        official_name="iPhone 15 Pro",
        identifiers=("iPhone16,1",),
        capabilities=frozenset({_WIDE_TELE, Capability.biometrics(Biometrics.FACE_ID)}),
    ),
    make_device(
        idiom=Idiom.TABLET,
        official_name="iPad Air (M2)",
        identifiers=("iPad14,8",),
        capabilities=frozenset({Capability.pencils({StylusGeneration.PRO})}),
    ),
    make_device(
        idiom=Idiom.TABLET,
        official_name="iPad Air (M2)",
        identifiers=("iPad14,8",),
        capabilities=frozenset(
            {Capability.pencils({StylusGeneration.PRO, StylusGeneration.USB_C})}
        ),
    ),
    make_device(
        idiom=Idiom.COMPUTER,
        official_name="Mac mini (M2, 2023)",
        identifiers=("Mac14,2",),
        capabilities=frozenset({Capability.computer_form(ComputerForm.MAC_MINI)}),
        processor=Processor.M2,
    ),
)

PAIRS = list(itertools.product(CORPUS, repeat=2))


def _pair_id(pair: tuple[CanonicalDevice, CanonicalDevice]) -> str:
    base, incoming = pair
    return f"{CORPUS.index(base)}<-{CORPUS.index(incoming)}"


@pytest.mark.parametrize("pair", PAIRS, ids=_pair_id)
def test_merge_is_idempotent(pair: tuple[CanonicalDevice, CanonicalDevice]) -> None:
    merged = merge_devices(*pair)

    assert merge_devices(merged, merged) == merged


@pytest.mark.parametrize("pair", PAIRS, ids=_pair_id)
def test_flags_accumulate(pair: tuple[CanonicalDevice, CanonicalDevice]) -> None:
    base, incoming = pair

    merged = merge_devices(base, incoming)

    flags = {
        capability
        for capability in base.effective_capabilities | incoming.capabilities
        if capability.kind not in EXCLUSIVE_KINDS
    }
    assert merged.effective_capabilities >= flags


@pytest.mark.parametrize("pair", PAIRS, ids=_pair_id)
def test_single_value_kinds_keep_one_value(pair: tuple[CanonicalDevice, CanonicalDevice]) -> None:
    base, incoming = pair

    merged = merge_devices(base, incoming)

    for kind in EXCLUSIVE_KINDS:
        offered = {
            *capabilities_of_kind(base.effective_capabilities, kind),
            *capabilities_of_kind(incoming.effective_capabilities, kind),
        }
        kept = capabilities_of_kind(merged.effective_capabilities, kind)
        assert len(kept) == min(len(offered), 1)
        assert set(kept) <= offered


@pytest.mark.parametrize("pair", PAIRS, ids=_pair_id)
def test_accepted_merges_converge(pair: tuple[CanonicalDevice, CanonicalDevice]) -> None:
    base, incoming = pair
    merged = merge_devices(base, incoming)
    if compare_devices(base, merged, incoming).classification is MatchClassification.CONFLICT:
        pytest.skip("conflicts are not written back")

    rerun = merge_devices(merged, incoming)

    assert rerun == merged
    assert compare_devices(merged, rerun, incoming).classification is (
        MatchClassification.IDENTICAL
    )


@pytest.mark.parametrize("pair", PAIRS, ids=_pair_id)
def test_classification_is_sound(pair: tuple[CanonicalDevice, CanonicalDevice]) -> None:
    base, incoming = pair

    diff = compare_devices(base, merge_devices(base, incoming), incoming)

    if diff.classification is MatchClassification.IDENTICAL:
        assert not diff.changed_fields
        assert not diff.evidence
    elif diff.classification is MatchClassification.CONFLICT:
        assert diff.evidence
    else:
        assert not diff.evidence


@pytest.mark.parametrize(
    "key",
    [
        LookupKey(name_hint=""),
        LookupKey(name_hint="iPhone 15", identifier="iPhone15,4"),
        LookupKey(name_hint="Nothing", identifier="Nope1,1", model_number="Z0000"),
        LookupKey(name_hint="Watch", model_number="A2978"),
        LookupKey(name_hint="Phone", support_reference="SP901"),
        LookupKey(
            name_hint="Blank",
            identifier=UNKNOWN_IDENTIFIER,
            support_reference=UNKNOWN_SUPPORT_REFERENCE,
        ),
    ],
)
def test_resolver_always_returns_one_record(key: LookupKey) -> None:
    resolver = Resolver(LookupIndex.build(CORPUS))

    resolution = resolver.resolve(key)

    assert resolution.device is not None
    if resolution.is_synthesized:
        assert resolution.candidates == ()
    else:
        assert resolution.device in resolution.candidates


def test_runs_are_stable(catalog_devices: list[CanonicalDevice]) -> None:
    incoming = [*CORPUS, *reversed(catalog_devices)]

    def run() -> tuple[list[CanonicalDevice], str]:
        engine = ReconciliationEngine.from_devices(catalog_devices, max_workers=4)
        results = order_by_catalog(engine.reconcile(stub_bridges(incoming)), catalog_devices)
        merged = [result.merged for result in results]
        return merged, render_catalog(merged)

    first, second = run(), run()

    assert first == second


def test_loosely_equal_name_with_new_capability_merges_cleanly() -> None:
    base = make_device(
        identifiers=("X1",), capabilities=frozenset({_USB_C}), official_name="Widget"
    )
    incoming = make_device(
        identifiers=("X1",), capabilities=frozenset({_ACTION_BUTTON}), official_name="widget"
    )
    bridge = StubBridge(incoming)

    (result,) = ReconciliationEngine.from_devices([base]).reconcile([bridge])

    assert result.classification is MatchClassification.MERGED_CLEAN
    assert result.merged.identifiers == ("X1",)
    assert result.merged.official_name == "Widget"
    assert result.merged.capabilities == frozenset({_USB_C, _ACTION_BUTTON})

    (rerun,) = ReconciliationEngine.from_devices([result.merged]).reconcile([bridge])

    assert rerun.classification is MatchClassification.IDENTICAL
    assert rerun.merged == result.merged


def test_differing_processor_is_a_conflict_that_keeps_ground_truth() -> None:
    base = make_device(identifiers=("X1",), processor=Processor.A16)
    incoming = base.replace(processor=Processor.A17_PRO)

    (result,) = ReconciliationEngine.from_devices([base]).reconcile([StubBridge(incoming)])

    assert result.classification is MatchClassification.CONFLICT
    assert result.merged.processor is Processor.A16
    assert [comparison.field for comparison in result.diff.evidence] == [FieldName.PROCESSOR]


def test_written_back_camera_upgrade_is_identical_on_rerun() -> None:
    base = make_device(identifiers=("X1",), capabilities=frozenset({_WIDE}))
    bridge = StubBridge(base.replace(capabilities=frozenset({_WIDE_TELE})))

    (first,) = ReconciliationEngine.from_devices([base]).reconcile([bridge])

    assert first.classification is MatchClassification.MERGED_CLEAN
    assert first.merged.capabilities == {_WIDE_TELE}

    (rerun,) = ReconciliationEngine.from_devices([first.merged]).reconcile([bridge])

    assert rerun.classification is MatchClassification.IDENTICAL
    assert rerun.merged == first.merged
