"""Translate computer catalog entries to and from canonical records.

Color names, processor names and the ``kind`` string are the source's own
vocabulary; the tables below map them onto the canonical enums.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    CanonicalDevice,
    Capability,
    CapabilityKind,
    Color,
    ComputerForm,
    Idiom,
    Processor,
)

if TYPE_CHECKING:
    from .schema import MacJsonEntry

log = logging.getLogger(__name__)

COLOR_NAMES: Final[MappingProxyType[str, Color]] = MappingProxyType(
    {
        "Blue2024": Color.BLUE_DARK,
        "Blue": Color.BLUE,
        "Green2024": Color.GREEN_DARK,
        "Green": Color.GREEN,
        "Gold": Color.GOLD,
        "Rose Gold": Color.ROSE_GOLD,
        "Space Gray": Color.SPACE_GRAY,
        "Sky Blue": Color.SKY_BLUE,
        "Starlight": Color.STARLIGHT,
        "Midnight": Color.MIDNIGHT,
        "Orange2024": Color.ORANGE_DARK,
        "Orange": Color.ORANGE,
        "Pink2024": Color.PINK_DARK,
        "Pink": Color.PINK,
        "Purple2024": Color.PURPLE_DARK,
        "Purple": Color.PURPLE,
        "SilverLight": Color.SILVER_LIGHT,
        "Silver": Color.SILVER,
        "White": Color.WHITE,
        "Yellow2024": Color.YELLOW_DARK,
        "Yellow": Color.YELLOW,
    }
)
UNMAPPED_COLOR: Final[Color] = Color.SILVER_LIGHT
COLOR_YEAR_SUFFIX: Final[str] = "2024"
# The catalog does not tell Space Black apart from Space Gray.
COLOR_ALIASES: Final[MappingProxyType[str, str]] = MappingProxyType({"Space Black": "Space Gray"})
# Years and processors for which "Space Gray" on a Pro model is sold as "Space Black".
SPACE_BLACK_YEARS: Final[range] = range(2023, 2025)
SPACE_BLACK_PROCESSORS: Final[frozenset[Processor]] = frozenset(
    {Processor.M3_PRO, Processor.M4, Processor.M4_PRO}
)
PROCESSOR_NAME_OVERRIDES: Final[MappingProxyType[str, Processor]] = MappingProxyType(
    {"iMac Pro": Processor.XEON_E5}
)
# Checked in order against the start of ``kind``.
KIND_FORMS: Final[tuple[tuple[str, ComputerForm], ...]] = (
    ("Mac Pro", ComputerForm.MAC_PRO_GEN3),
    ("iMac", ComputerForm.IMAC),
    ("MacBook", ComputerForm.MACBOOK),
    ("Mac mini", ComputerForm.MAC_MINI),
    ("Mac Studio", ComputerForm.MAC_STUDIO),
)
DEFAULT_FORM: Final[ComputerForm] = ComputerForm.MACBOOK
FORM_KINDS: Final[MappingProxyType[ComputerForm, str]] = MappingProxyType(
    {
        ComputerForm.MAC_PRO_GEN1: "Mac",
        ComputerForm.MAC_PRO_GEN2: "Mac",
        ComputerForm.MAC_PRO_GEN3: "Mac",
        ComputerForm.IMAC: "iMac",
        ComputerForm.MACBOOK: "MacBook",
        ComputerForm.MACBOOK_GEN1: "MacBook",
        ComputerForm.MACBOOK_GEN2: "MacBook",
        ComputerForm.MAC_MINI: "Mac mini",
        ComputerForm.MAC_STUDIO: "Mac Studio",
    }
)
# Entries whose part list is published per processor variant; keep it as is.
PART_LIST_OVERRIDE_IDENTIFIERS: Final[frozenset[str]] = frozenset({"Mac16,5"})

_PRO = Capability.flag(CapabilityKind.PRO)
_AIR = Capability.flag(CapabilityKind.AIR)
_USB_C = Capability.flag(CapabilityKind.USB_C)


def form_for_kind(kind: str) -> ComputerForm:
    for prefix, form in KIND_FORMS:
        if kind.startswith(prefix):
            return form
    return DEFAULT_FORM


def kind_for(reference: CanonicalDevice) -> str:
    form = reference.computer_form
    kind = FORM_KINDS[form] if form is not None else "Mac"
    if reference.has_capability(CapabilityKind.PRO):
        kind += " Pro"
    if reference.has_capability(CapabilityKind.AIR):
        kind += " Air"
    if "Server" in reference.official_name:
        kind += " Server"
    return kind


def parse_color(text: str, name: str) -> Color:
    """Map a color name; iMac colors depend on the model year in ``name``."""

    key = text
    is_imac = "iMac" in name
    is_2024 = COLOR_YEAR_SUFFIX in name
    if is_imac and is_2024 and key != "Silver":
        key += COLOR_YEAR_SUFFIX
    if is_imac and not is_2024 and key == "Silver":
        key = "SilverLight"
    key = COLOR_ALIASES.get(key, key)
    color = COLOR_NAMES.get(key)
    if color is None:
        log.warning("Unknown color %r (key %r) for %s", text, key, name)
        return UNMAPPED_COLOR
    return color


def color_name(color: Color, reference: CanonicalDevice) -> str | None:
    for name, candidate in COLOR_NAMES.items():
        if candidate is color:
            key = name.removesuffix(COLOR_YEAR_SUFFIX)
            break
    else:
        return None
    if key == "SilverLight":
        key = "Silver"
    year = reference.introduction.year if reference.introduction else 0
    if (
        key == "Space Gray"
        and year in SPACE_BLACK_YEARS
        and reference.has_capability(CapabilityKind.PRO)
        and reference.processor in SPACE_BLACK_PROCESSORS
    ):
        key = "Space Black"
    return key


def parse_processor(name: str) -> Processor:
    override = PROCESSOR_NAME_OVERRIDES.get(name)
    return override if override is not None else Processor.find_in(name)


def entry_to_device(entry: MacJsonEntry) -> CanonicalDevice:
    capabilities = {Capability.computer_form(form_for_kind(entry.kind)), _USB_C}
    if "Pro" in entry.name:
        capabilities.add(_PRO)
    if "Air" in entry.name:
        capabilities.add(_AIR)
    colors = tuple(parse_color(color, entry.name) for color in entry.colors)
    return CanonicalDevice(
        idiom=Idiom.COMPUTER,
        official_name=entry.name,
        identifiers=entry.models,
        capabilities=frozenset(capabilities),
        model_numbers=entry.parts,
        # An empty list means the source does not say.
        colors=colors or (Color.DEFAULT,),
        processor=parse_processor(entry.name),
    )


def _colors_for(entry: MacJsonEntry, reference: CanonicalDevice) -> tuple[str, ...]:
    if not entry.colors:
        return ()
    names = tuple(
        name
        for color in reference.colors
        if color is not Color.DEFAULT and (name := color_name(color, reference)) is not None
    )
    if sorted(names) == sorted(entry.colors):
        return entry.colors
    return names


def entry_from_device[TEntry: MacJsonEntry](
    entry: TEntry, reference: CanonicalDevice
) -> TEntry:
    """Re-express ``reference`` as a computer catalog entry.

    The name, notes and variant are the source's own and are kept.
    """

    parts = reference.model_numbers
    if not PART_LIST_OVERRIDE_IDENTIFIERS.isdisjoint(reference.identifiers):
        parts = entry.parts
    return entry.model_copy(
        update={
            "models": reference.identifiers,
            "kind": kind_for(reference),
            "colors": _colors_for(entry, reference),
            "parts": parts,
        }
    )
