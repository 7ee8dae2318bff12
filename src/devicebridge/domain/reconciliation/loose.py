"""Loose-equality operators shared by merge and diff.

Every operator here is one-sided: ``base`` tolerates ``incoming`` leaving a
value out, but two present values that neither equal nor subsume each other
disagree. Merge decides with the boolean helpers; the diff stage reports the
``*_agreement`` functions.
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    EXCLUSIVE_KINDS,
    SET_KINDS,
    CapabilityKind,
    Color,
)

from .contracts import Agreement

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from devicebridge.domain.model import Capability, CanonicalDevice, IntroductionDate

_UNKNOWN_MARKER: Final[str] = "unknown"
_ORDINAL = re.compile(r"\b(\d+)(?:st|nd|rd|th)\b")
_GENERATION = re.compile(r"\bgeneration\b")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
# Small capital R as used in "iPhone Xʀ".
_FOLD = str.maketrans({"ʀ": "r"})


def normalize_name(name: str) -> str:
    """Fold a device name for loose comparison.

    ``"iPod touch (2nd generation)"`` and ``"iPod Touch 2nd Gen"`` both
    normalize to ``"ipod touch 2 gen"``.
    """

    text = unicodedata.normalize("NFKC", name).translate(_FOLD).lower()
    text = _GENERATION.sub("gen", text)
    text = _ORDINAL.sub(r"\1", text)
    text = _PUNCTUATION.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def is_unknown_name(name: str) -> bool:
    return not name.strip() or _UNKNOWN_MARKER in name.lower()


def names_loosely_equal(left: str, right: str) -> bool:
    """Case, punctuation and generation-phrase insensitive; substrings match."""

    left_normalized = normalize_name(left)
    right_normalized = normalize_name(right)
    if not left_normalized or not right_normalized:
        return left_normalized == right_normalized
    return left_normalized in right_normalized or right_normalized in left_normalized


def introductions_loosely_equal(
    left: IntroductionDate | None, right: IntroductionDate | None
) -> bool:
    """Exact match, or the same year when either side only knows the year."""

    if left is None or right is None:
        return left is right
    if left == right:
        return True
    return left.year == right.year and (left.is_year_only or right.is_year_only)


def is_refinement(base: IntroductionDate | None, incoming: IntroductionDate | None) -> bool:
    """``incoming`` adds month/day precision to a year-only ``base``."""

    return (
        base is not None
        and incoming is not None
        and base.is_year_only
        and not incoming.is_year_only
        and base.year == incoming.year
    )


def exclusive_conflicts(
    base: Iterable[Capability], incoming: Iterable[Capability]
) -> tuple[CapabilityKind, ...]:
    """Exclusive kinds present on both sides with values that do not subsume.

    Set-valued kinds (cameras, pencils) agree when one side's set contains the
    other's.
    """

    base_values = _values_by_kind(base)
    incoming_values = _values_by_kind(incoming)
    conflicts: list[CapabilityKind] = []
    for kind in CapabilityKind:
        if kind not in EXCLUSIVE_KINDS or kind not in base_values or kind not in incoming_values:
            continue
        left, right = base_values[kind], incoming_values[kind]
        if left == right or (kind in SET_KINDS and _subsumes(left, right)):
            continue
        conflicts.append(kind)
    return tuple(conflicts)


def _values_by_kind(
    capabilities: Iterable[Capability],
) -> dict[CapabilityKind, frozenset[object]]:
    values: dict[CapabilityKind, set[object]] = {}
    for capability in capabilities:
        values.setdefault(capability.kind, set()).add(capability.value)
    return {kind: frozenset(kind_values) for kind, kind_values in values.items()}


def _subsumes(left: frozenset[object], right: frozenset[object]) -> bool:
    if len(left) != 1 or len(right) != 1:
        return False
    (left_members,) = left
    (right_members,) = right
    if not isinstance(left_members, frozenset) or not isinstance(right_members, frozenset):
        return False
    return left_members <= right_members or right_members <= left_members


# --- per-field agreement ---------------------------------------------------


def scalar_agreement(base: object, incoming: object, *, sentinels: Collection[object]) -> Agreement:
    if incoming in sentinels:
        return Agreement.EQUAL
    if base in sentinels:
        return Agreement.COMPATIBLE
    if base == incoming:
        return Agreement.EQUAL
    return Agreement.CONFLICT


def name_agreement(base: str, incoming: str) -> Agreement:
    if is_unknown_name(incoming) or names_loosely_equal(base, incoming):
        return Agreement.EQUAL
    if is_unknown_name(base):
        return Agreement.COMPATIBLE
    return Agreement.CONFLICT


def introduction_agreement(
    base: IntroductionDate | None, incoming: IntroductionDate | None
) -> Agreement:
    if incoming is None or base == incoming:
        return Agreement.EQUAL
    if base is None or is_refinement(base, incoming):
        return Agreement.COMPATIBLE
    if introductions_loosely_equal(base, incoming):
        return Agreement.EQUAL
    return Agreement.CONFLICT


def subset_agreement(base: Iterable[object], incoming: Iterable[object]) -> Agreement:
    if set(incoming) <= set(base):
        return Agreement.EQUAL
    return Agreement.COMPATIBLE


def color_agreement(base: Iterable[Color], incoming: Iterable[Color]) -> Agreement:
    real_colors = [color for color in incoming if color is not Color.DEFAULT]
    return subset_agreement(base, real_colors)


def capability_agreement(base: CanonicalDevice, incoming: CanonicalDevice) -> Agreement:
    if exclusive_conflicts(base.effective_capabilities, incoming.effective_capabilities):
        return Agreement.CONFLICT
    known = base.effective_capabilities
    if all(_covered(capability, known) for capability in incoming.capabilities):
        return Agreement.EQUAL
    return Agreement.COMPATIBLE


def _covered(capability: Capability, capabilities: Collection[Capability]) -> bool:
    """Whether ``capabilities`` holds ``capability`` or a camera or pencil set containing it."""

    if capability in capabilities:
        return True
    if capability.kind not in SET_KINDS or not isinstance(capability.value, frozenset):
        return False
    return any(
        other.kind is capability.kind
        and isinstance(other.value, frozenset)
        and capability.value <= other.value
        for other in capabilities
    )


def model_number_agreement(base: Collection[str], incoming: Collection[str]) -> Agreement:
    if not incoming or set(incoming) <= set(base):
        return Agreement.EQUAL
    if not base:
        return Agreement.COMPATIBLE
    return Agreement.CONFLICT
