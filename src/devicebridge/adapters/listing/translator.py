"""Translate listing lines to and from canonical records.

Listing names are informal ("2nd Gen iPad", "iPad Air 11-inch 6th Gen") and
carry connectivity noise ("(WiFi)", "GSM+CDMA"). ``clean_official_name``
rewrites them into catalog vocabulary; ``listing_name`` goes the other way.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import CanonicalDevice, Idiom, identifier_version
from devicebridge.domain.reconciliation import infer_idiom
from devicebridge.domain.reconciliation.loose import is_unknown_name, names_loosely_equal

if TYPE_CHECKING:
    from .schema import ListingEntry

_WHITESPACE = re.compile(r"\s+")

CASE_REWRITES: Final[tuple[tuple[str, str], ...]] = (
    ("mini", "Mini"),
    (" inch", "-inch"),
)
# Connectivity and revision noise; removed in this order.
REMOVED_FRAGMENTS: Final[tuple[str, ...]] = (
    "+",
    "Rev A",
    "1st Gen",
    "1TB",
    "10.2-inch",
    "case",
    "CDMA",
    "GPS",
    "GSM",
    "Cellular",
    "LTE",
    "WiFi",
    "China",
    "Global",
    "New Revision",
    ", ",
    "()",
)
NAME_REWRITES: Final[tuple[tuple[str, str], ...]] = (
    ("(2017)", "(5th generation)"),
    ("10.5-inch 2nd Gen", "(10.5-inch)"),
    ("XR", "Xʀ"),
)
# Applied in order; longer listing names precede their prefixes.
NAME_MAP: Final[tuple[tuple[str, str], ...]] = (
    ("2nd Gen iPod", "iPod touch (2nd generation)"),
    ("3rd Gen iPod", "iPod touch (3rd generation)"),
    ("4th Gen iPod", "iPod touch (4th generation)"),
    ("5th Gen iPod", "iPod touch (5th generation)"),
    ("6th Gen iPod", "iPod touch (6th generation)"),
    ("7th Gen iPod", "iPod touch (7th generation)"),
    ("iPad 3G", "iPad"),
    ("2nd Gen iPad", "iPad 2"),
    ("3rd Gen iPad", "iPad (3rd generation)"),
    ("4th Gen iPad Mini", "iPad Mini 4"),
    ("iPad (4th generation) Mini", "iPad Mini 4"),
    ("4th Gen iPad", "iPad (4th generation)"),
    ("iPad Mini Retina", "iPad Mini 2"),
    ("iPad Pro 11-inch 3rd Gen", "iPad Pro 11-inch"),
    ("iPad Pro 2nd Gen", "iPad Pro 12.9-inch (2nd generation)"),
    ("iPad Pro 11-inch 4th Gen", "iPad Pro 11-inch (2nd generation)"),
    ("iPad Pro 11-inch 5th Gen", "iPad Pro 11-inch (3rd generation)"),
    ("iPad Air 11-inch 6th Gen", "iPad Air 11-inch (M2)"),
    ("iPad Air 13-inch 6th Gen", "iPad Air 13-inch (M2)"),
    ("iPad Air 11-inch 7th Gen", "iPad Air 11-inch (M3)"),
    ("iPad Air 13-inch 7th Gen", "iPad Air 13-inch (M3)"),
    ("iPad 11th Gen", "iPad (A16)"),
    ("iPad Mini 7th Gen", "iPad mini (A17 Pro)"),
    ("12.9-inch 7th Gen", "13-inch (M4)"),
    ("mini 7th Gen", "mini (A17 Pro)"),
)
# (identifier major, name fragment, replacement name); the listing reuses
# names across generations that the identifier tells apart.
MAJOR_NAME_OVERRIDES: Final[tuple[tuple[int, str, str], ...]] = (
    (16, "iPad Pro 11-inch", "iPad Pro 11-inch (M4)"),
    (14, "iPad Pro 11-inch", "iPad Pro 11-inch (4th generation)"),
)
_ORDINALS: Final[dict[int, str]] = {2: "2nd", 3: "3rd"}


def _ordinal(number: int) -> str:
    return _ORDINALS.get(number, f"{number}th")


def _replace_all(text: str, pairs: tuple[tuple[str, str], ...]) -> str:
    for old, new in pairs:
        text = text.replace(old, new)
    return text


def clean_official_name(name: str, identifier: str) -> str:
    """Rewrite a listing name into catalog vocabulary."""

    major = identifier_version(identifier).major
    text = _replace_all(name, CASE_REWRITES)
    for fragment in REMOVED_FRAGMENTS:
        text = text.replace(fragment, "")
    text = _replace_all(text, NAME_REWRITES)
    text = _WHITESPACE.sub(" ", text).strip()
    if major == 1 and "Apple Watch" in text:
        text = text.replace("Watch ", "Watch (1st generation) ")
    text = _replace_all(text, NAME_MAP)
    for generation in range(2, 10):
        ordinal = _ordinal(generation)
        text = text.replace(f"{ordinal} Gen", f"({ordinal} generation)")
    for override_major, fragment, replacement in MAJOR_NAME_OVERRIDES:
        if major == override_major and fragment in text:
            text = replacement
    return _WHITESPACE.sub(" ", text).strip()


def _identifier_number(identifier: str) -> float:
    version = identifier_version(identifier)
    return float(f"{version.major}.{version.minor}")


def _tablet_suffix(position: int, number: float) -> str:
    if position == 0:
        return " (WiFi)"
    if position == 1:
        if number < 4:
            return " GSM+LTE"
        return " (GSM+CDMA)" if number < 5 else " (WiFi+Cellular)"
    if position == 2:
        return " CDMA+LTE" if number < 4 else " (China)"
    return ""


def listing_name(reference: CanonicalDevice, identifier: str) -> str:
    """Express the catalog name the way the listing writes it for ``identifier``."""

    position = (
        reference.identifiers.index(identifier) if identifier in reference.identifiers else -1
    )
    number = _identifier_number(identifier)
    name = reference.official_name.replace("(3rd generation)", "3")
    if reference.idiom is Idiom.WATCH:
        if number < 7.9:
            name += " case"
        if position == 1:
            name += " (GPS+Cellular)"
    elif reference.idiom is Idiom.TABLET:
        name = (
            name.replace("(M2)", "6th Gen")
            .replace("(", "")
            .replace(")", "")
            .replace("generation", "Gen")
            .replace("-", "")
            .replace("Mini 2", "mini retina")
        )
        name += _tablet_suffix(position, number)
    elif "Xʀ" in name:
        name = name.replace("Xʀ", "XR")
    return name


def entry_to_device(entry: ListingEntry) -> CanonicalDevice:
    official_name = clean_official_name(entry.official_name, entry.identifier)
    return CanonicalDevice(
        idiom=infer_idiom(official_name, entry.identifier),
        official_name=official_name,
        identifiers=(entry.identifier,),
    )


def entry_from_device[TEntry: ListingEntry](
    entry: TEntry, reference: CanonicalDevice
) -> TEntry:
    """Re-express ``reference`` as a listing line for the entry's identifier.

    The entry keeps its own wording while the catalog name still agrees with it.
    """

    if is_unknown_name(reference.official_name) or names_loosely_equal(
        clean_official_name(entry.official_name, entry.identifier), reference.official_name
    ):
        return entry
    return entry.model_copy(
        update={"official_name": listing_name(reference, entry.identifier)}
    )
