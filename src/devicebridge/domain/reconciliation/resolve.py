"""Lookup resolution against an immutable catalog snapshot.

Responsibilities of this stage:
- index the catalog once by identifier, model number and support reference
- pick the ground-truth record for a bridge's ``LookupKey``
- synthesize a blank record when nothing matches

Matching order (first step with at least one candidate wins, no fall-through):
1) identifier
2) model number
3) support reference
4) synthesized fallback

The resolver is total: it never raises and always returns exactly one record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    UNKNOWN_IDENTIFIER,
    UNKNOWN_NAME,
    UNKNOWN_SUPPORT_REFERENCE,
    CanonicalDevice,
    Idiom,
)

from .contracts import LookupKey, MatchStrategy

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = logging.getLogger(__name__)

type PositionIndex = Mapping[str, tuple[int, ...]]

# Checked in order; the first fragment found in the lower-cased name wins.
NAME_HINT_IDIOMS: Final[tuple[tuple[str, Idiom], ...]] = (
    ("iphone", Idiom.PHONE),
    ("ipad", Idiom.TABLET),
    ("ipod", Idiom.MEDIA_PLAYER),
    ("apple watch", Idiom.WATCH),
    ("homepod", Idiom.SPEAKER),
    ("apple tv", Idiom.TV),
    ("vision", Idiom.HEADSET),
    ("carplay", Idiom.CAR_INTEGRATION),
    ("imac", Idiom.COMPUTER),
    ("macbook", Idiom.COMPUTER),
    ("mac mini", Idiom.COMPUTER),
    ("mac studio", Idiom.COMPUTER),
    ("mac pro", Idiom.COMPUTER),
)
IDENTIFIER_PREFIX_IDIOMS: Final[tuple[tuple[str, Idiom], ...]] = (
    ("iPhone", Idiom.PHONE),
    ("iPad", Idiom.TABLET),
    ("iPod", Idiom.MEDIA_PLAYER),
    ("Watch", Idiom.WATCH),
    ("AudioAccessory", Idiom.SPEAKER),
    ("AppleTV", Idiom.TV),
    ("RealityDevice", Idiom.HEADSET),
    ("iMac", Idiom.COMPUTER),
    ("Mac", Idiom.COMPUTER),
)


def infer_idiom(name_hint: str | None = None, identifier: str | None = None) -> Idiom:
    """Guess the idiom from a display name, then from an identifier prefix."""

    if name_hint:
        lowered = name_hint.lower()
        for fragment, idiom in NAME_HINT_IDIOMS:
            if fragment in lowered:
                return idiom
    if identifier:
        for prefix, idiom in IDENTIFIER_PREFIX_IDIOMS:
            if identifier.startswith(prefix):
                return idiom
    return Idiom.UNSPECIFIED


@dataclass(frozen=True, slots=True)
class LookupIndex:
    """Read-only snapshot of the catalog, built once before fan-out."""

    devices: tuple[CanonicalDevice, ...]
    by_identifier: PositionIndex
    by_model_number: PositionIndex
    by_support_reference: PositionIndex

    @classmethod
    def build(cls, devices: Iterable[CanonicalDevice]) -> LookupIndex:
        ordered = tuple(devices)
        by_identifier: dict[str, list[int]] = {}
        by_model_number: dict[str, list[int]] = {}
        by_support_reference: dict[str, list[int]] = {}
        for position, device in enumerate(ordered):
            for identifier in device.identifiers:
                if identifier != UNKNOWN_IDENTIFIER:
                    by_identifier.setdefault(identifier, []).append(position)
            for model_number in device.model_numbers:
                by_model_number.setdefault(model_number, []).append(position)
            if device.support_reference != UNKNOWN_SUPPORT_REFERENCE:
                by_support_reference.setdefault(device.support_reference, []).append(position)
        log.debug(
            "Built lookup index: devices=%s, identifiers=%s, model_numbers=%s",
            len(ordered),
            len(by_identifier),
            len(by_model_number),
        )
        return cls(
            devices=ordered,
            by_identifier=_freeze(by_identifier),
            by_model_number=_freeze(by_model_number),
            by_support_reference=_freeze(by_support_reference),
        )

    def __len__(self) -> int:
        return len(self.devices)


def _freeze(index: dict[str, list[int]]) -> PositionIndex:
    return MappingProxyType({key: tuple(positions) for key, positions in index.items()})


@dataclass(frozen=True, slots=True, kw_only=True)
class Resolution:
    """Ground truth chosen for one bridge record."""

    device: CanonicalDevice
    strategy: MatchStrategy
    matched_key: str | None = None
    candidates: tuple[CanonicalDevice, ...] = field(default_factory=tuple)

    @property
    def is_synthesized(self) -> bool:
        return self.strategy is MatchStrategy.SYNTHESIZED


@dataclass(frozen=True, slots=True)
class _Step:
    strategy: MatchStrategy
    key: Callable[[LookupKey], str | None]
    index: Callable[[LookupIndex], PositionIndex]
    prefer_richest: bool = False


_STEPS: Final[tuple[_Step, ...]] = (
    _Step(MatchStrategy.IDENTIFIER, lambda key: key.identifier, lambda idx: idx.by_identifier),
    _Step(
        MatchStrategy.MODEL_NUMBER,
        lambda key: key.model_number,
        lambda idx: idx.by_model_number,
        prefer_richest=True,
    ),
    _Step(
        MatchStrategy.SUPPORT_REFERENCE,
        lambda key: key.support_reference,
        lambda idx: idx.by_support_reference,
    ),
)


@dataclass(frozen=True, slots=True)
class Resolver:
    """Resolve lookup keys against a ``LookupIndex``."""

    index: LookupIndex

    def resolve(self, key: LookupKey) -> Resolution:
        for step in _STEPS:
            value = step.key(key)
            if not value or value == UNKNOWN_SUPPORT_REFERENCE:
                continue
            positions = step.index(self.index).get(value, ())
            if not positions:
                continue
            best = _pick_best(self.index.devices, positions, prefer_richest=step.prefer_richest)
            log.debug("Resolved %r by %s=%s", key.name_hint, step.strategy, value)
            return Resolution(
                device=self.index.devices[best],
                strategy=step.strategy,
                matched_key=value,
                candidates=tuple(self.index.devices[position] for position in positions),
            )
        log.debug("No catalog match for %r; synthesizing", key.name_hint)
        return Resolution(device=synthesize_device(key), strategy=MatchStrategy.SYNTHESIZED)


def _pick_best(
    devices: tuple[CanonicalDevice, ...],
    positions: tuple[int, ...],
    *,
    prefer_richest: bool,
) -> int:
    """Richest record (model-number step), then identifier superset, then catalog order."""

    if len(positions) == 1:
        return positions[0]
    identifier_sets = {position: set(devices[position].identifiers) for position in positions}

    def superset_count(position: int) -> int:
        own = identifier_sets[position]
        return sum(
            1 for other in positions if other != position and identifier_sets[other] <= own
        )

    def sort_key(position: int) -> tuple[int, int, int]:
        richness = len(devices[position].effective_capabilities) if prefer_richest else 0
        return (-richness, -superset_count(position), position)

    return min(positions, key=sort_key)


def synthesize_device(key: LookupKey) -> CanonicalDevice:
    """Blank record with the inferred idiom and the key's identifier."""

    return CanonicalDevice(
        idiom=infer_idiom(key.name_hint, key.identifier),
        official_name=UNKNOWN_NAME,
        identifiers=(key.identifier or UNKNOWN_IDENTIFIER,),
    )
