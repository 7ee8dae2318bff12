"""Capability tags and the capabilities implied by idiom and computer form.

A capability is a ``(kind, value)`` pair. Flag kinds carry no value; the
associated-data kinds carry one hashable value (an enum member, a frozenset of
enum members, or a ``Screen``). Every capability has a stable text form which
round-trips through ``Capability.parse``.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from .enums import (
    Biometrics,
    Camera,
    CapabilityKind,
    Cellular,
    ComputerForm,
    Idiom,
    StylusGeneration,
    WatchCaseSize,
)
from .primitives import Screen

log = logging.getLogger(__name__)

_SET_KINDS: Final[MappingProxyType[CapabilityKind, type[StrEnum]]] = MappingProxyType(
    {
        CapabilityKind.CAMERAS: Camera,
        CapabilityKind.PENCILS: StylusGeneration,
    }
)
_ENUM_KINDS: Final[MappingProxyType[CapabilityKind, type[StrEnum]]] = MappingProxyType(
    {
        CapabilityKind.CELLULAR: Cellular,
        CapabilityKind.BIOMETRICS: Biometrics,
        CapabilityKind.COMPUTER_FORM: ComputerForm,
        CapabilityKind.WATCH_SIZE: WatchCaseSize,
    }
)

ASSOCIATED_KINDS: Final[frozenset[CapabilityKind]] = frozenset(
    {*_SET_KINDS, *_ENUM_KINDS, CapabilityKind.SCREEN}
)
SET_KINDS: Final[frozenset[CapabilityKind]] = frozenset(_SET_KINDS)
# A device holds at most one value per associated kind.
EXCLUSIVE_KINDS: Final[frozenset[CapabilityKind]] = ASSOCIATED_KINDS


@dataclass(frozen=True, slots=True)
class Capability:
    kind: CapabilityKind
    value: Hashable | None = None

    def __post_init__(self) -> None:
        if self.kind in ASSOCIATED_KINDS and self.value is None:
            raise ValueError(f"Capability {self.kind} requires a value")
        if self.kind not in ASSOCIATED_KINDS and self.value is not None:
            raise ValueError(f"Capability {self.kind} does not take a value")

    @classmethod
    def flag(cls, kind: CapabilityKind) -> Capability:
        return cls(kind=kind)

    @classmethod
    def cameras(cls, cameras: Iterable[Camera]) -> Capability:
        return cls(kind=CapabilityKind.CAMERAS, value=frozenset(cameras))

    @classmethod
    def cellular(cls, generation: Cellular) -> Capability:
        return cls(kind=CapabilityKind.CELLULAR, value=generation)

    @classmethod
    def screen(cls, screen: Screen) -> Capability:
        return cls(kind=CapabilityKind.SCREEN, value=screen)

    @classmethod
    def biometrics(cls, kind: Biometrics) -> Capability:
        return cls(kind=CapabilityKind.BIOMETRICS, value=kind)

    @classmethod
    def pencils(cls, generations: Iterable[StylusGeneration]) -> Capability:
        return cls(kind=CapabilityKind.PENCILS, value=frozenset(generations))

    @classmethod
    def computer_form(cls, form: ComputerForm) -> Capability:
        return cls(kind=CapabilityKind.COMPUTER_FORM, value=form)

    @classmethod
    def watch_size(cls, size: WatchCaseSize) -> Capability:
        return cls(kind=CapabilityKind.WATCH_SIZE, value=size)

    @property
    def is_exclusive(self) -> bool:
        return self.kind in EXCLUSIVE_KINDS

    @property
    def text(self) -> str:
        """Stable text form, e.g. ``usbC`` or ``cameras(telephoto,wide)``."""

        if self.value is None:
            return str(self.kind)
        if isinstance(self.value, frozenset):
            members = ",".join(sorted(str(member) for member in self.value))
            return f"{self.kind}({members})"
        return f"{self.kind}({self.value})"

    @property
    def sort_key(self) -> tuple[int, str]:
        return (list(CapabilityKind).index(self.kind), self.text)

    @classmethod
    def parse(cls, text: str) -> Capability | None:
        """Parse the text form; ``None`` when ``text`` is not a capability."""

        raw = text.strip()
        name, _, rest = raw.partition("(")
        try:
            kind = CapabilityKind(name)
        except ValueError:
            log.warning("Unknown capability %r", text)
            return None
        if kind not in ASSOCIATED_KINDS:
            return cls(kind=kind) if not rest else None
        if not rest.endswith(")"):
            log.warning("Malformed capability %r", text)
            return None
        payload = rest[:-1]
        value = _parse_value(kind, payload)
        if value is None:
            log.warning("Malformed capability value %r", text)
            return None
        return cls(kind=kind, value=value)


def _parse_value(kind: CapabilityKind, payload: str) -> Hashable | None:
    if kind is CapabilityKind.SCREEN:
        return Screen.parse(payload)
    if kind in _SET_KINDS:
        enum_type = _SET_KINDS[kind]
        members = [member for member in payload.split(",") if member]
        try:
            return frozenset(enum_type(member) for member in members)
        except ValueError:
            return None
    try:
        return _ENUM_KINDS[kind](payload)
    except ValueError:
        return None


def sorted_capabilities(capabilities: Iterable[Capability]) -> tuple[Capability, ...]:
    return tuple(sorted(capabilities, key=lambda capability: capability.sort_key))


def capabilities_of_kind(
    capabilities: Iterable[Capability], kind: CapabilityKind
) -> tuple[Capability, ...]:
    return sorted_capabilities(c for c in capabilities if c.kind is kind)


_BATTERY = Capability.flag(CapabilityKind.BATTERY)

IDIOM_IMPLIED: Final[MappingProxyType[Idiom, frozenset[Capability]]] = MappingProxyType(
    {
        Idiom.PHONE: frozenset({_BATTERY}),
        Idiom.TABLET: frozenset({_BATTERY}),
        Idiom.MEDIA_PLAYER: frozenset({_BATTERY}),
        Idiom.HEADSET: frozenset({_BATTERY}),
        Idiom.WATCH: frozenset({_BATTERY, Capability.flag(CapabilityKind.WIRELESS_CHARGING)}),
    }
)

_ETHERNET = frozenset({Capability.flag(CapabilityKind.ETHERNET)})

FORM_IMPLIED: Final[MappingProxyType[ComputerForm, frozenset[Capability]]] = MappingProxyType(
    {
        ComputerForm.MACBOOK: frozenset({_BATTERY, Capability.flag(CapabilityKind.USB_C)}),
        ComputerForm.MACBOOK_GEN1: frozenset(
            {_BATTERY, Capability.flag(CapabilityKind.MAGSAFE_2)}
        ),
        ComputerForm.MACBOOK_GEN2: frozenset(
            {
                _BATTERY,
                Capability.flag(CapabilityKind.MAGSAFE_3),
                Capability.flag(CapabilityKind.USB_C),
            }
        ),
        ComputerForm.MAC_MINI: _ETHERNET,
        ComputerForm.MAC_STUDIO: _ETHERNET,
        ComputerForm.MAC_PRO_GEN1: _ETHERNET,
        ComputerForm.MAC_PRO_GEN2: _ETHERNET,
        ComputerForm.MAC_PRO_GEN3: _ETHERNET,
        ComputerForm.IMAC: frozenset(),
    }
)


def implied_capabilities(
    idiom: Idiom, capabilities: Iterable[Capability] = ()
) -> frozenset[Capability]:
    """Capabilities implied by ``idiom`` and any computer form in ``capabilities``."""

    implied = set(IDIOM_IMPLIED.get(idiom, frozenset()))
    for capability in capabilities:
        if capability.kind is CapabilityKind.COMPUTER_FORM and isinstance(
            capability.value, ComputerForm
        ):
            implied |= FORM_IMPLIED[capability.value]
    return frozenset(implied)


def explicit_capabilities(
    idiom: Idiom, capabilities: Iterable[Capability]
) -> frozenset[Capability]:
    """Drop everything that ``idiom`` or the computer form re-derives."""

    capability_set = frozenset(capabilities)
    return capability_set - implied_capabilities(idiom, capability_set)
