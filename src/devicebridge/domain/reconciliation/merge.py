"""Field-level, asymmetric merge of ground truth and bridge-derived records.

``merge_devices(base, incoming)`` keeps ``base`` as the default for every field
and lets ``incoming`` contribute only where it adds information:

- idiom: incoming unless unspecified
- official name: incoming only as a correction (known and not loosely equal)
- identifiers: sorted union, unless incoming is already a subset
- introduction: incoming when base has none, refines the year, or disagrees
- support reference, processor: incoming only while base is unknown
- OS versions: incoming launch/end values when not the default
- image: incoming when present
- capabilities: flags accumulate; associated kinds keep one value, base
  wins a conflict
- model numbers: incoming only when disjoint (or for idioms in
  ``MergePolicy.replace_model_numbers_for``)
- colors: append new real colors, never replace

No field decision depends on another field's outcome, except that model-number
replacement looks at the merged idiom.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from devicebridge.domain.model import (
    EXCLUSIVE_KINDS,
    SET_KINDS,
    UNKNOWN_IDENTIFIER,
    UNKNOWN_SUPPORT_REFERENCE,
    CanonicalDevice,
    CapabilityKind,
    Color,
    Idiom,
    OSVersionRange,
    Processor,
    implied_capabilities,
)

from .loose import (
    exclusive_conflicts,
    introductions_loosely_equal,
    is_refinement,
    is_unknown_name,
    names_loosely_equal,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devicebridge.domain.model import Capability, IntroductionDate, Version


@dataclass(frozen=True, slots=True)
class MergePolicy:
    # Watch case variants share identifiers, so their part lists overlap by nature.
    replace_model_numbers_for: frozenset[Idiom] = field(
        default_factory=lambda: frozenset({Idiom.WATCH})
    )


DEFAULT_MERGE_POLICY = MergePolicy()


def merge_devices(
    base: CanonicalDevice,
    incoming: CanonicalDevice,
    *,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> CanonicalDevice:
    """Combine ``base`` (ground truth) with ``incoming`` (bridge projection)."""

    idiom = merge_idiom(base.idiom, incoming.idiom)
    return CanonicalDevice(
        idiom=idiom,
        official_name=merge_official_name(base.official_name, incoming.official_name),
        identifiers=merge_identifiers(base.identifiers, incoming.identifiers),
        introduction=merge_introduction(base.introduction, incoming.introduction),
        support_reference=merge_support_reference(
            base.support_reference, incoming.support_reference
        ),
        os_versions=merge_os_versions(base.os_versions, incoming.os_versions),
        image=incoming.image if incoming.image is not None else base.image,
        capabilities=merge_capabilities(base, incoming),
        model_numbers=merge_model_numbers(
            base.model_numbers, incoming.model_numbers, idiom=idiom, policy=policy
        ),
        colors=merge_colors(base.colors, incoming.colors),
        processor=merge_processor(base.processor, incoming.processor),
    )


def merge_idiom(base: Idiom, incoming: Idiom) -> Idiom:
    return base if incoming is Idiom.UNSPECIFIED else incoming


def merge_official_name(base: str, incoming: str) -> str:
    if is_unknown_name(incoming) or names_loosely_equal(base, incoming):
        return base
    return incoming


def merge_identifiers(base: tuple[str, ...], incoming: tuple[str, ...]) -> tuple[str, ...]:
    if not incoming or set(incoming) <= set(base):
        return base
    combined = set(base) | set(incoming)
    if any(identifier != UNKNOWN_IDENTIFIER for identifier in combined):
        combined.discard(UNKNOWN_IDENTIFIER)
    return tuple(sorted(combined))


def merge_introduction(
    base: IntroductionDate | None, incoming: IntroductionDate | None
) -> IntroductionDate | None:
    if incoming is None:
        return base
    if base is None or is_refinement(base, incoming):
        return incoming
    if introductions_loosely_equal(base, incoming):
        return base
    return incoming


def merge_support_reference(base: str, incoming: str) -> str:
    """Incoming fills an unknown base only; two known values are left as a conflict."""

    if base == UNKNOWN_SUPPORT_REFERENCE:
        return incoming
    return base


def merge_processor(base: Processor, incoming: Processor) -> Processor:
    """Incoming fills an unknown base only.

    A known base is never overwritten: two known processors that differ are
    reported as a conflict by the diff stage and left for review.
    """

    if base is Processor.UNKNOWN:
        return incoming
    return base


def merge_os_versions(base: OSVersionRange, incoming: OSVersionRange) -> OSVersionRange:
    launch = base.launch if incoming.launch.is_zero else incoming.launch
    end_of_support: Version | None = base.end_of_support
    if incoming.end_of_support is not None and not incoming.end_of_support.is_zero:
        end_of_support = incoming.end_of_support
    return OSVersionRange(launch=launch, end_of_support=end_of_support)


def merge_capabilities(base: CanonicalDevice, incoming: CanonicalDevice) -> frozenset[Capability]:
    """Union of flags; one value per associated kind.

    Effective sets keep the union monotonic even when the idiom changes; the
    merged record strips whatever its own idiom implies. For an associated kind
    held by both sides, the larger of two nested camera or pencil sets wins and
    a true conflict keeps the base value.
    """

    base_by_kind = _by_kind(base.effective_capabilities)
    incoming_by_kind = _by_kind(incoming.effective_capabilities)
    merged: set[Capability] = set()
    rejected: set[Capability] = set()
    for kind in CapabilityKind:
        base_values = base_by_kind.get(kind, frozenset())
        incoming_values = incoming_by_kind.get(kind, frozenset())
        if kind not in EXCLUSIVE_KINDS:
            merged |= base_values | incoming_values
            continue
        chosen = _merge_exclusive(kind, base_values, incoming_values)
        merged |= chosen
        rejected |= incoming_values - chosen
    # Flags implied only by a rejected computer form stay out.
    merged -= implied_capabilities(Idiom.UNSPECIFIED, rejected) - base.effective_capabilities
    return frozenset(merged)


def _by_kind(capabilities: Iterable[Capability]) -> dict[CapabilityKind, frozenset[Capability]]:
    grouped: dict[CapabilityKind, set[Capability]] = {}
    for capability in capabilities:
        grouped.setdefault(capability.kind, set()).add(capability)
    return {kind: frozenset(values) for kind, values in grouped.items()}


def _merge_exclusive(
    kind: CapabilityKind,
    base_values: frozenset[Capability],
    incoming_values: frozenset[Capability],
) -> frozenset[Capability]:
    if not base_values or not incoming_values or base_values == incoming_values:
        return base_values or incoming_values
    if kind not in SET_KINDS or kind in exclusive_conflicts(base_values, incoming_values):
        return base_values
    (base_capability,) = base_values
    (incoming_capability,) = incoming_values
    if _set_size(incoming_capability) > _set_size(base_capability):
        return incoming_values
    return base_values


def _set_size(capability: Capability) -> int:
    return len(capability.value) if isinstance(capability.value, frozenset) else 0


def merge_model_numbers(
    base: tuple[str, ...],
    incoming: tuple[str, ...],
    *,
    idiom: Idiom,
    policy: MergePolicy = DEFAULT_MERGE_POLICY,
) -> tuple[str, ...]:
    if not incoming:
        return base
    if set(incoming).isdisjoint(base) or idiom in policy.replace_model_numbers_for:
        return incoming
    return base


def merge_colors(base: tuple[Color, ...], incoming: tuple[Color, ...]) -> tuple[Color, ...]:
    additions = [
        color for color in incoming if color is not Color.DEFAULT and color not in base
    ]
    if not additions:
        return base
    return (*base, *additions)
