"""Name cleaning and re-expression for identifier listing lines."""

from __future__ import annotations

import pytest

from devicebridge.adapters.listing import ListingEntry, clean_official_name, listing_name
from devicebridge.domain.model import CanonicalDevice, Idiom
from devicebridge.domain.reconciliation import FieldName


@pytest.mark.parametrize(
    ("name", "identifier", "expected"),
    [
        ("iPhone 15 Pro", "iPhone16,1", "iPhone 15 Pro"),
        ("Apple TV 3rd Gen", "AppleTV3,1", "Apple TV (3rd generation)"),
        ("iPad mini 7th Gen (WiFi)", "iPad16,1", "iPad mini (A17 Pro)"),
        ("iPad Air 11-inch 6th Gen (WiFi)", "iPad14,8", "iPad Air 11-inch (M2)"),
        ("2nd Gen iPad", "iPad2,1", "iPad 2"),
        ("iPhone XR", "iPhone11,8", "iPhone Xʀ"),
        ("5th Gen iPod", "iPod5,1", "iPod touch (5th generation)"),
    ],
)
def test_clean_official_name(name: str, identifier: str, expected: str) -> None:
    assert clean_official_name(name, identifier) == expected


def test_entry_projects_to_canonical_record() -> None:
    entry = ListingEntry(identifier=" AppleTV3,1", official_name="Apple TV 3rd Gen ")

    device = entry.to_canonical()

    assert device.idiom is Idiom.TV
    assert device.official_name == "Apple TV (3rd generation)"
    assert device.identifiers == ("AppleTV3,1",)


def test_entry_lookup_key_uses_identifier() -> None:
    key = ListingEntry(identifier="iPhone16,1", official_name="iPhone 15 Pro").lookup_key()

    assert key.identifier == "iPhone16,1"
    assert key.name_hint == "iPhone 15 Pro"
    assert key.model_number is None


def test_listing_names_are_not_compared() -> None:
    assert FieldName.OFFICIAL_NAME in ListingEntry.diff_ignore_keys


def test_from_canonical_keeps_wording_while_names_agree() -> None:
    entry = ListingEntry(identifier="AppleTV3,1", official_name="Apple TV 3rd Gen")
    reference = CanonicalDevice(
        idiom=Idiom.TV, official_name="Apple TV (3rd generation)", identifiers=("AppleTV3,1",)
    )

    assert entry.from_canonical(reference) is entry


def test_from_canonical_rewrites_a_corrected_name() -> None:
    entry = ListingEntry(identifier="iPhone11,8", official_name="iPhone XS")
    reference = CanonicalDevice(
        idiom=Idiom.PHONE, official_name="iPhone Xʀ", identifiers=("iPhone11,8",)
    )

    updated = entry.from_canonical(reference)

    assert updated.native_text() == "iPhone11,8 : iPhone XR"
    assert entry.official_name == "iPhone XS"


def test_from_canonical_converges() -> None:
    entry = ListingEntry(identifier="iPhone11,8", official_name="iPhone XS")
    reference = CanonicalDevice(
        idiom=Idiom.PHONE, official_name="iPhone Xʀ", identifiers=("iPhone11,8",)
    )

    once = entry.from_canonical(reference)

    assert once.from_canonical(reference) == once


def test_listing_name_for_watch_and_tablet_variants() -> None:
    watch = CanonicalDevice(
        idiom=Idiom.WATCH,
        official_name="Apple Watch Series 2",
        identifiers=("Watch2,3", "Watch2,4"),
    )
    tablet = CanonicalDevice(
        idiom=Idiom.TABLET,
        official_name="iPad (3rd generation)",
        identifiers=("iPad3,1", "iPad3,2", "iPad3,3"),
    )

    assert listing_name(watch, "Watch2,3") == "Apple Watch Series 2 case"
    assert listing_name(watch, "Watch2,4") == "Apple Watch Series 2 case (GPS+Cellular)"
    assert listing_name(tablet, "iPad3,1") == "iPad 3 (WiFi)"
    assert listing_name(tablet, "iPad3,2") == "iPad 3 GSM+LTE"
    assert listing_name(tablet, "iPad3,3") == "iPad 3 CDMA+LTE"
