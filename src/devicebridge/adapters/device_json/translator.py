"""Translate device catalog JSON entries to and from canonical records."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    UNKNOWN_NAME,
    Biometrics,
    CanonicalDevice,
    Capability,
    CapabilityKind,
    Idiom,
    IntroductionDate,
    OSVersionRange,
    Processor,
    Version,
    capabilities_of_kind,
)
from devicebridge.domain.reconciliation.loose import is_unknown_name, names_loosely_equal

if TYPE_CHECKING:
    from .schema import Chip, DeviceJsonEntry

IDIOM_NAMES: Final[MappingProxyType[str, Idiom]] = MappingProxyType(
    {
        "Mac": Idiom.COMPUTER,
        "iPod touch": Idiom.MEDIA_PLAYER,
        "iPhone": Idiom.PHONE,
        "iPad": Idiom.TABLET,
        "Apple TV": Idiom.TV,
        "CarPlay": Idiom.CAR_INTEGRATION,
        "Apple Watch": Idiom.WATCH,
        "HomePod": Idiom.SPEAKER,
        "Apple Vision Pro": Idiom.HEADSET,
    }
)
TRAIT_CAPABILITIES: Final[MappingProxyType[str, Capability]] = MappingProxyType(
    {
        "button.action": Capability.flag(CapabilityKind.ACTION_BUTTON),
        "button.camera": Capability.flag(CapabilityKind.CAMERA_CONTROL),
        "display.always-on": Capability.flag(CapabilityKind.ALWAYS_ON_DISPLAY),
        "display.dynamic-island": Capability.flag(CapabilityKind.DYNAMIC_ISLAND),
        "display.notch": Capability.flag(CapabilityKind.NOTCH),
        "id.face": Capability.biometrics(Biometrics.FACE_ID),
        "id.optic": Capability.biometrics(Biometrics.OPTIC_ID),
        "id.touch": Capability.biometrics(Biometrics.TOUCH_ID),
        "intelligence": Capability.flag(CapabilityKind.INTELLIGENCE),
    }
)
# Derived from the absence of biometrics; never read back.
HOME_BUTTON_TRAIT: Final[str] = "button.home"
HOME_BUTTON_IDIOMS: Final[frozenset[Idiom]] = frozenset(
    {Idiom.PHONE, Idiom.MEDIA_PLAYER, Idiom.TABLET}
)
# Applied in order to ``gen_name``.
NAME_MAP: Final[tuple[tuple[str, str], ...]] = (
    ("iPad mini (7th Gen)", "iPad mini (A17 Pro)"),
    ("iPad Pro (11-inch) (5th Gen)", "iPad Pro 11-inch (M4)"),
    ("iPad Air (11-inch) (2nd Gen)", "iPad Air 11-inch (M3)"),
    ("iPad Air (13-inch) (2nd Gen)", "iPad Air 13-inch (M3)"),
    ("iPad (11th Gen)", "iPad (A16)"),
    ("Ultra (2nd Gen)", "Ultra 2"),
    ("(3rd Gen)", "(3rd generation)"),
    ("(4th Gen)", "(4th generation)"),
)
# Marketing words the catalog leaves out of processor names.
CHIP_NAME_SUFFIXES: Final[tuple[str, ...]] = ("Bionic", "Fusion")
# Newest OS major the source lists for retired devices; later maxima mean
# the device is still supported.
LAST_RETIRED_OS_MAJOR: Final[int] = 17


def catalog_name(gen_name: str | None) -> str:
    if gen_name is None or not gen_name.strip():
        return UNKNOWN_NAME
    name = gen_name.strip()
    for old, new in NAME_MAP:
        name = name.replace(old, new)
    return name


def source_name_for(official_name: str) -> str:
    name = official_name
    for old, new in reversed(NAME_MAP):
        name = name.replace(new, old)
    return name


def parse_chip(chip: Chip | None) -> Processor:
    if chip is None:
        return Processor.UNKNOWN
    name = chip.name
    for suffix in CHIP_NAME_SUFFIXES:
        name = name.replace(suffix, "")
    processor = Processor.find_in(name)
    if processor is Processor.UNKNOWN:
        processor = Processor.find_in(chip.id.replace("-", " "))
    return processor


def end_of_support(entry: DeviceJsonEntry) -> Version | None:
    if not entry.software:
        return None
    last = entry.software[-1].device_version.max
    version = Version.parse(last)
    if last is None or version.is_zero or version.major > LAST_RETIRED_OS_MAJOR:
        return None
    return version.next_major()


def trait_capabilities(traits: tuple[str, ...]) -> frozenset[Capability]:
    return frozenset(TRAIT_CAPABILITIES[trait] for trait in traits if trait in TRAIT_CAPABILITIES)


def entry_to_device(entry: DeviceJsonEntry) -> CanonicalDevice:
    return CanonicalDevice(
        idiom=IDIOM_NAMES.get(entry.name, Idiom.UNSPECIFIED),
        official_name=catalog_name(entry.gen_name),
        identifiers=entry.ids,
        introduction=IntroductionDate(year=entry.year) if entry.year else None,
        # Launch versions in this source are unreliable; only the end of support is used.
        os_versions=OSVersionRange(end_of_support=end_of_support(entry)),
        capabilities=trait_capabilities(entry.traits),
        model_numbers=entry.a_numbers,
        processor=parse_chip(entry.chip),
    )


def _traits_for(entry: DeviceJsonEntry, reference: CanonicalDevice) -> tuple[str, ...]:
    capabilities = reference.effective_capabilities
    traits: list[str] = []
    biometrics = capabilities_of_kind(capabilities, CapabilityKind.BIOMETRICS)
    has_biometrics = any(c.value is not Biometrics.NONE for c in biometrics)
    if not has_biometrics and reference.idiom in HOME_BUTTON_IDIOMS:
        traits.append(HOME_BUTTON_TRAIT)
    traits.extend(
        trait for trait, capability in TRAIT_CAPABILITIES.items() if capability in capabilities
    )
    # Traits the canonical model has no capability for stay as published.
    traits.extend(
        trait
        for trait in entry.traits
        if trait not in TRAIT_CAPABILITIES and trait != HOME_BUTTON_TRAIT
    )
    if set(traits) == set(entry.traits):
        return entry.traits
    return tuple(traits)


def _idiom_name(entry: DeviceJsonEntry, idiom: Idiom) -> str:
    for name, candidate in IDIOM_NAMES.items():
        if candidate is idiom:
            return name
    return entry.name


def entry_from_device[TEntry: DeviceJsonEntry](
    entry: TEntry, reference: CanonicalDevice
) -> TEntry:
    """Re-express ``reference`` in the catalog's vocabulary.

    Fields the canonical model does not carry (software history, internal
    names, family) are kept from ``entry``.
    """

    gen_name = entry.gen_name
    if not is_unknown_name(reference.official_name) and not names_loosely_equal(
        catalog_name(entry.gen_name), reference.official_name
    ):
        gen_name = source_name_for(reference.official_name)
    chip: dict[str, str] | Chip | None = entry.chip
    processor = reference.processor
    if processor is not Processor.UNKNOWN and parse_chip(entry.chip) is not processor:
        chip = {"id": str(processor), "name": processor.display_name}
    return type(entry).model_validate(
        entry.model_dump()
        | {
            "name": _idiom_name(entry, reference.idiom),
            "gen_name": gen_name,
            "year": reference.introduction.year if reference.introduction else entry.year,
            "chip": chip,
            "traits": _traits_for(entry, reference),
            "a_numbers": reference.model_numbers,
            "ids": reference.identifiers,
        }
    )
