from __future__ import annotations

import pytest

from devicebridge.domain.model import (
    UNKNOWN_IDENTIFIER,
    UNKNOWN_NAME,
    UNKNOWN_SUPPORT_REFERENCE,
    CanonicalDevice,
    Capability,
    CapabilityKind,
    Idiom,
)
from devicebridge.domain.reconciliation import (
    LookupIndex,
    LookupKey,
    MatchStrategy,
    Resolver,
    infer_idiom,
    synthesize_device,
)
from tests.helpers.devices import make_device


def _resolver(*devices: CanonicalDevice) -> Resolver:
    return Resolver(LookupIndex.build(devices))


def test_identifier_match_wins_over_model_number() -> None:
    by_identifier = make_device(identifiers=("iPhone16,1",), official_name="iPhone 15 Pro")
    by_model = make_device(identifiers=("iPhone16,2",), model_numbers=("A2848",))
    resolver = _resolver(by_model, by_identifier)

    resolution = resolver.resolve(
        LookupKey(name_hint="iPhone 15 Pro", identifier="iPhone16,1", model_number="A2848")
    )

    assert resolution.strategy is MatchStrategy.IDENTIFIER
    assert resolution.device is by_identifier
    assert resolution.matched_key == "iPhone16,1"


def test_identifier_step_prefers_superset_then_catalog_order() -> None:
    narrow = make_device(identifiers=("Watch6,1",), official_name="narrow")
    wide = make_device(identifiers=("Watch6,1", "Watch6,2"), official_name="wide")
    resolver = _resolver(narrow, wide)

    resolution = resolver.resolve(LookupKey(name_hint="watch", identifier="Watch6,1"))

    assert resolution.device is wide
    assert resolution.candidates == (narrow, wide)

    first = make_device(identifiers=("Watch6,1",), official_name="first")
    second = make_device(identifiers=("Watch6,1",), official_name="second")
    tied = _resolver(first, second).resolve(LookupKey(name_hint="watch", identifier="Watch6,1"))
    assert tied.device is first


def test_model_number_step_prefers_richest_record() -> None:
    plain = make_device(identifiers=("iPad1,1",), model_numbers=("A1219",))
    rich = make_device(
        identifiers=("iPad1,1",),
        model_numbers=("A1219", "A1337"),
        capabilities=frozenset(
            {
                Capability.flag(CapabilityKind.HEADPHONE_JACK),
                Capability.flag(CapabilityKind.THIRTY_PIN),
            }
        ),
    )
    resolver = _resolver(plain, rich)

    resolution = resolver.resolve(
        LookupKey(name_hint="iPad", identifier="iPad9,9", model_number="A1219")
    )

    assert resolution.strategy is MatchStrategy.MODEL_NUMBER
    assert resolution.device is rich


def test_support_reference_step() -> None:
    device = make_device(support_reference="SP901")
    resolver = _resolver(device)

    resolution = resolver.resolve(LookupKey(name_hint="iPhone", support_reference="SP901"))

    assert resolution.strategy is MatchStrategy.SUPPORT_REFERENCE
    assert resolution.device is device


def test_unknown_support_reference_is_never_a_key() -> None:
    resolver = _resolver(make_device())

    resolution = resolver.resolve(
        LookupKey(name_hint="iPhone", support_reference=UNKNOWN_SUPPORT_REFERENCE)
    )

    assert resolution.is_synthesized


def test_synthesized_record_carries_only_the_key() -> None:
    resolution = _resolver().resolve(
        LookupKey(name_hint="Apple Watch Ultra 2", identifier="Watch7,5", model_number="A2986")
    )

    device = resolution.device
    assert resolution.strategy is MatchStrategy.SYNTHESIZED
    assert device.official_name == UNKNOWN_NAME
    assert device.idiom is Idiom.WATCH
    assert device.identifiers == ("Watch7,5",)
    assert device.model_numbers == ()


def test_synthesize_without_identifier_uses_sentinel() -> None:
    device = synthesize_device(LookupKey(name_hint="Widget"))

    assert device.identifiers == (UNKNOWN_IDENTIFIER,)
    assert device.idiom is Idiom.UNSPECIFIED
    assert device.model_numbers == ()


def test_unknown_identifier_is_not_indexed() -> None:
    index = LookupIndex.build([make_device(identifiers=(UNKNOWN_IDENTIFIER,))])

    assert UNKNOWN_IDENTIFIER not in index.by_identifier
    assert len(index) == 1


@pytest.mark.parametrize(
    ("name_hint", "identifier", "expected"),
    [
        ("Apple Watch Series 9", None, Idiom.WATCH),
        ("iMac Pro", None, Idiom.COMPUTER),
        (None, "AppleTV5,3", Idiom.TV),
        ("Widget", "AudioAccessory1,1", Idiom.SPEAKER),
        ("Widget", None, Idiom.UNSPECIFIED),
    ],
)
def test_infer_idiom(name_hint: str | None, identifier: str | None, expected: Idiom) -> None:
    assert infer_idiom(name_hint, identifier) is expected
