"""Translate support page records to and from canonical records.

Capabilities come from three places: feature phrases found in the section
text, qualifiers in the product name (" Pro", " mini", ...), and, for
computers, the form factor derived from name and introduction year.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    UNKNOWN_SUPPORT_REFERENCE,
    Biometrics,
    Camera,
    CanonicalDevice,
    Capability,
    CapabilityKind,
    ComputerForm,
    Idiom,
    IntroductionDate,
    OSVersionRange,
    Processor,
    Version,
)
from devicebridge.domain.reconciliation import infer_idiom
from devicebridge.domain.reconciliation.loose import names_loosely_equal

if TYPE_CHECKING:
    from .schema import SupportPageEntry

log = logging.getLogger(__name__)

FEATURE_CAPABILITIES: Final[MappingProxyType[str, Capability]] = MappingProxyType(
    {
        "Thunderbolt": Capability.flag(CapabilityKind.THUNDERBOLT),
        "USB-C": Capability.flag(CapabilityKind.USB_C),
        "Headphone": Capability.flag(CapabilityKind.HEADPHONE_JACK),
        "Ethernet": Capability.flag(CapabilityKind.ETHERNET),
        "Action button": Capability.flag(CapabilityKind.ACTION_BUTTON),
        "no SIM tray": Capability.flag(CapabilityKind.ESIM),
    }
)
# Phrases that contain a feature phrase without meaning it.
FEATURE_EXCEPTIONS: Final[MappingProxyType[str, str]] = MappingProxyType(
    {"no SIM tray": "CDMA model has no SIM tray"}
)
# (fragment, capability, excluded fragment) checked against the product name.
NAME_QUALIFIERS: Final[tuple[tuple[str, CapabilityKind, str | None], ...]] = (
    # "iPad mini (A17 Pro)" names the chip, not a Pro model.
    (" Pro", CapabilityKind.PRO, " Pro)"),
    (" Air", CapabilityKind.AIR, None),
    (" Plus", CapabilityKind.PLUS, None),
    (" Max", CapabilityKind.MAX, None),
)
IDIOM_LABELS: Final[MappingProxyType[str, Idiom]] = MappingProxyType(
    {str(idiom): idiom for idiom in Idiom} | {"mac": Idiom.COMPUTER, "pad": Idiom.TABLET}
)
# 13-inch models without Touch Bar, and so without Touch ID.
NO_TOUCH_ID_IDENTIFIERS: Final[frozenset[str]] = frozenset({"MacBookPro14,1", "MacBookPro13,1"})

_TOUCH_ID = Capability.biometrics(Biometrics.TOUCH_ID)


def feature_capabilities(features: tuple[str, ...]) -> set[Capability]:
    capabilities: set[Capability] = set()
    text = "\n".join(features)
    for phrase, capability in FEATURE_CAPABILITIES.items():
        exception = FEATURE_EXCEPTIONS.get(phrase)
        if phrase in text and (exception is None or exception not in text):
            capabilities.add(capability)
    return capabilities


def name_capabilities(name: str) -> set[Capability]:
    capabilities: set[Capability] = set()
    for fragment, kind, excluded in NAME_QUALIFIERS:
        if fragment in name and (excluded is None or excluded not in name):
            capabilities.add(Capability.flag(kind))
    if " mini" in name.lower():
        capabilities.add(Capability.flag(CapabilityKind.MINI))
    return capabilities


def _has_touch_id(name: str, year: int, identifiers: tuple[str, ...]) -> bool:
    qualifies = (
        (" Pro" in name and year > 2015)  # noqa: PLR2004
        or (" Air" in name and year > 2017)  # noqa: PLR2004
        or ("iMac" in name and year > 2020)  # noqa: PLR2004
    )
    return qualifies and NO_TOUCH_ID_IDENTIFIERS.isdisjoint(identifiers)


def _macbook_capabilities(name: str, year: int) -> set[Capability]:
    if year < 2012:  # noqa: PLR2004
        return {
            Capability.computer_form(ComputerForm.MACBOOK),
            Capability.flag(CapabilityKind.MAGSAFE_1),
        }
    if (year < 2016 and " Pro" in name) or (year < 2018 and " Air" in name):  # noqa: PLR2004
        return {Capability.computer_form(ComputerForm.MACBOOK_GEN1)}
    if year < 2021 or "MacBook Pro (13-inch, M2" in name:  # noqa: PLR2004
        return {
            Capability.computer_form(ComputerForm.MACBOOK),
            Capability.cameras({Camera.FACETIME_HD_720P}),
        }
    return {Capability.computer_form(ComputerForm.MACBOOK_GEN2)}


def computer_capabilities(
    name: str, year: int | None, identifiers: tuple[str, ...]
) -> set[Capability]:
    """Form factor and Touch ID for a computer named ``name``."""

    year = year or 0
    capabilities: set[Capability] = set()
    if _has_touch_id(name, year, identifiers):
        capabilities.add(_TOUCH_ID)
    if "Mac Pro" in name and "iMac" not in name:
        if year < 2013:  # noqa: PLR2004
            form = ComputerForm.MAC_PRO_GEN1
        elif year == 2013:  # noqa: PLR2004
            form = ComputerForm.MAC_PRO_GEN2
        else:
            form = ComputerForm.MAC_PRO_GEN3
        capabilities.add(Capability.computer_form(form))
    elif "MacBook" in name:
        capabilities |= _macbook_capabilities(name, year)
    elif "Mac mini" in name:
        capabilities.add(Capability.computer_form(ComputerForm.MAC_MINI))
    elif "Mac Studio" in name:
        capabilities.add(Capability.computer_form(ComputerForm.MAC_STUDIO))
    elif "iMac" in name:
        capabilities.add(Capability.computer_form(ComputerForm.IMAC))
    else:
        log.warning("Unknown computer form for %r", name)
        capabilities.add(Capability.computer_form(ComputerForm.MACBOOK))
    return capabilities


def parse_idiom(entry: SupportPageEntry) -> Idiom:
    if entry.idiom is not None:
        idiom = IDIOM_LABELS.get(entry.idiom.strip())
        if idiom is not None:
            return idiom
        log.warning("Unknown idiom label %r for %s", entry.idiom, entry.official_name)
    identifier = entry.identifiers[0] if entry.identifiers else None
    return infer_idiom(entry.official_name, identifier)


def parse_processor(entry: SupportPageEntry) -> Processor:
    if entry.chip is not None:
        return Processor.find_in(entry.chip)
    processor = Processor.find_in(entry.official_name)
    # Part numbers like "MA623" can look like processor names.
    if processor is not Processor.UNKNOWN and processor.display_name.lower() in (
        " ".join(entry.part_numbers).lower()
    ):
        return Processor.UNKNOWN
    return processor


def parse_end_of_support(entry: SupportPageEntry) -> Version | None:
    version = Version.parse(entry.end_of_support_os)
    return None if version.is_zero else version


def entry_to_device(entry: SupportPageEntry) -> CanonicalDevice:
    idiom = parse_idiom(entry)
    capabilities = feature_capabilities(entry.features) | name_capabilities(entry.official_name)
    if idiom is Idiom.COMPUTER:
        capabilities |= computer_capabilities(
            entry.official_name, entry.year_introduced, entry.identifiers
        )
    return CanonicalDevice(
        idiom=idiom,
        official_name=entry.official_name,
        identifiers=entry.identifiers,
        introduction=(
            IntroductionDate(year=entry.year_introduced) if entry.year_introduced else None
        ),
        support_reference=entry.support_reference,
        os_versions=OSVersionRange(end_of_support=parse_end_of_support(entry)),
        image=entry.image,
        capabilities=frozenset(capabilities),
        model_numbers=entry.part_numbers,
        processor=parse_processor(entry),
    )


def _features_for(entry: SupportPageEntry, reference: CanonicalDevice) -> tuple[str, ...]:
    if not entry.features:
        return ()
    if feature_capabilities(entry.features) <= reference.effective_capabilities:
        return entry.features
    return tuple(
        phrase
        for phrase, capability in FEATURE_CAPABILITIES.items()
        if capability in reference.effective_capabilities
    )


def entry_from_device[TEntry: SupportPageEntry](
    entry: TEntry, reference: CanonicalDevice
) -> TEntry:
    """Re-express ``reference`` as a support page record.

    Values the page never states stay absent so the record remains comparable
    with what the page actually says.
    """

    official_name = reference.official_name
    if names_loosely_equal(entry.official_name, reference.official_name):
        official_name = entry.official_name
    part_numbers = reference.model_numbers
    if set(entry.part_numbers) <= set(reference.model_numbers):
        part_numbers = entry.part_numbers or reference.model_numbers
    end_of_support = reference.os_versions.end_of_support
    chip = entry.chip
    if chip is not None and reference.processor is not Processor.UNKNOWN:
        chip = reference.processor.display_name
    return entry.model_copy(
        update={
            "official_name": official_name,
            "idiom": str(reference.idiom),
            "identifiers": reference.identifiers,
            "year_introduced": (
                reference.introduction.year
                if entry.year_introduced is not None and reference.introduction
                else None
            ),
            "support_id": (
                None
                if entry.support_id is None
                or reference.support_reference == UNKNOWN_SUPPORT_REFERENCE
                else reference.support_reference
            ),
            "end_of_support_os": (
                str(end_of_support)
                if entry.end_of_support_os is not None and end_of_support is not None
                else None
            ),
            "image": reference.image,
            "features": _features_for(entry, reference),
            "part_numbers": part_numbers,
            "chip": chip,
        }
    )
