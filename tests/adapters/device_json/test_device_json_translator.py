"""Translator checks for the device catalog JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from devicebridge.adapters.device_json import Chip, DeviceJsonEntry, catalog_name, parse_chip
from devicebridge.domain.model import (
    UNKNOWN_NAME,
    Biometrics,
    Capability,
    CapabilityKind,
    Idiom,
    IntroductionDate,
    Processor,
    Version,
)

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice


def _entry(**overrides: object) -> DeviceJsonEntry:
    payload: dict[str, object] = {
        "name": "iPhone",
        "gen_name": "iPhone 15 Pro",
        "year": 2023,
        "family": "iPhone",
        "chip": {"id": "a17-pro", "name": "A17 Pro"},
        "software": [{"device_version": {"min": "17.0"}, "id": "ios", "name": "iOS"}],
        "traits": ["display.dynamic-island", "button.action", "id.face"],
        "a_numbers": ["A2848", "A3101"],
        "ids": ["iPhone16,1"],
    }
    payload.update(overrides)
    return DeviceJsonEntry.model_validate(payload)


@pytest.mark.parametrize(
    ("chip", "expected"),
    [
        (None, Processor.UNKNOWN),
        (Chip(id="a17-pro", name="A17 Pro"), Processor.A17_PRO),
        (Chip(id="a11-bionic", name="A11 Bionic"), Processor.A11),
        (Chip(id="a10-fusion", name="A10 Fusion"), Processor.A10),
        (Chip(id="m3-max", name="Apple silicon"), Processor.M3_MAX),
        (Chip(id="mystery", name="Mystery"), Processor.UNKNOWN),
    ],
)
def test_parse_chip(chip: Chip | None, expected: Processor) -> None:
    assert parse_chip(chip) is expected


def test_catalog_name_rewrites_generation_phrases() -> None:
    assert catalog_name("Apple TV (3rd Gen)") == "Apple TV (3rd generation)"
    assert catalog_name("iPad mini (7th Gen)") == "iPad mini (A17 Pro)"
    assert catalog_name("Apple Watch Ultra (2nd Gen)") == "Apple Watch Ultra 2"
    assert catalog_name(None) == UNKNOWN_NAME
    assert catalog_name("  ") == UNKNOWN_NAME


def test_entry_projects_to_canonical_record() -> None:
    device = _entry().to_canonical()

    assert device.idiom is Idiom.PHONE
    assert device.official_name == "iPhone 15 Pro"
    assert device.identifiers == ("iPhone16,1",)
    assert device.introduction == IntroductionDate(2023)
    assert device.os_versions.launch.is_zero
    assert device.os_versions.end_of_support is None
    assert device.capabilities == {
        Capability.flag(CapabilityKind.DYNAMIC_ISLAND),
        Capability.flag(CapabilityKind.ACTION_BUTTON),
        Capability.biometrics(Biometrics.FACE_ID),
    }
    assert device.model_numbers == ("A2848", "A3101")
    assert device.processor is Processor.A17_PRO


@pytest.mark.parametrize(
    ("maximum", "expected"),
    [
        ("7.2.2", Version(8)),
        ("12.5.7", Version(13)),
        ("18.0", None),
        ("not a version", None),
    ],
)
def test_end_of_support_is_next_major_after_last_listed(
    maximum: str, expected: Version | None
) -> None:
    software = [{"device_version": {"min": "5.0", "max": maximum}, "id": "os", "name": "OS"}]

    device = _entry(software=software).to_canonical()

    assert device.os_versions.end_of_support == expected


def test_unknown_platform_name_leaves_idiom_unspecified() -> None:
    assert _entry(name="Toaster").to_canonical().idiom is Idiom.UNSPECIFIED


def test_malformed_year_is_dropped() -> None:
    entry = _entry(year="n/a")

    assert entry.year is None
    assert entry.to_canonical().introduction is None


def test_lookup_key_prefers_generation_name() -> None:
    key = _entry().lookup_key()

    assert key.name_hint == "iPhone 15 Pro"
    assert key.identifier == "iPhone16,1"
    assert key.model_number == "A2848"
    assert key.support_reference is None


def test_from_canonical_keeps_entry_when_catalog_agrees(
    catalog_devices: list[CanonicalDevice],
) -> None:
    entry = _entry(internal_names=["D83AP"])

    assert entry.from_canonical(catalog_devices[0]) == entry


def test_from_canonical_rewrites_diverging_fields(
    catalog_devices: list[CanonicalDevice],
) -> None:
    entry = _entry(internal_names=["D83AP"])
    reference = catalog_devices[0].replace(
        idiom=Idiom.TABLET,
        official_name="iPad mini (A17 Pro)",
        processor=Processor.A16,
        introduction=IntroductionDate(2024, 10),
    )

    updated = entry.from_canonical(reference)

    assert updated.name == "iPad"
    assert updated.gen_name == "iPad mini (7th Gen)"
    assert updated.year == 2024  # noqa: PLR2004
    assert updated.chip == Chip(id="a16", name="A16")
    assert updated.internal_names == ("D83AP",)
    assert updated.software == entry.software
    assert updated.to_canonical().processor is Processor.A16


def test_from_canonical_converges(catalog_devices: list[CanonicalDevice]) -> None:
    reference = catalog_devices[0].replace(processor=Processor.A16)

    once = _entry().from_canonical(reference)

    assert once.from_canonical(reference) == once
