"""Three-way field comparison and classification.

``compare_devices(base, merged, incoming)`` reports, per field, how ``incoming``
relates to ``base`` (``Agreement``), whether the merge changed the value, and
which side contributed the merged value. ``classify`` reduces the comparisons:

- any non-ignored ``conflict`` -> ``conflict``
- every field unchanged and every non-ignored field ``equal`` -> ``identical``
- otherwise -> ``mergedClean``

The result only holds strings and enums so it can be serialized for review
tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    UNKNOWN_SUPPORT_REFERENCE,
    Idiom,
    Processor,
    Version,
    sorted_capabilities,
)

from .contracts import (
    FIELD_SOURCE_HIGHLIGHTS,
    Agreement,
    FieldName,
    FieldSource,
    HighlightColor,
    MatchClassification,
)
from .loose import (
    capability_agreement,
    color_agreement,
    introduction_agreement,
    model_number_agreement,
    name_agreement,
    scalar_agreement,
    subset_agreement,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from devicebridge.domain.model import CanonicalDevice

_EMPTY: Final[str] = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldComparison:
    field: FieldName
    base: str
    merged: str
    incoming: str
    agreement: Agreement
    changed: bool
    source: FieldSource
    ignored: bool = False

    @property
    def highlight(self) -> HighlightColor | None:
        return FIELD_SOURCE_HIGHLIGHTS.get(self.source)

    @property
    def is_conflict(self) -> bool:
        return self.agreement is Agreement.CONFLICT and not self.ignored


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceDiff:
    fields: tuple[FieldComparison, ...]
    classification: MatchClassification = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "classification", classify(self.fields))

    @property
    def evidence(self) -> tuple[FieldComparison, ...]:
        """Fields that make this a conflict."""

        return tuple(comparison for comparison in self.fields if comparison.is_conflict)

    @property
    def changed_fields(self) -> tuple[FieldName, ...]:
        return tuple(comparison.field for comparison in self.fields if comparison.changed)

    def __getitem__(self, name: FieldName) -> FieldComparison:
        for comparison in self.fields:
            if comparison.field is name:
                return comparison
        raise KeyError(name)


def classify(fields: Iterable[FieldComparison]) -> MatchClassification:
    comparisons = tuple(fields)
    if any(comparison.is_conflict for comparison in comparisons):
        return MatchClassification.CONFLICT
    if all(
        not comparison.changed and (comparison.ignored or comparison.agreement is Agreement.EQUAL)
        for comparison in comparisons
    ):
        return MatchClassification.IDENTICAL
    return MatchClassification.MERGED_CLEAN


# --- display ---------------------------------------------------------------


def _text(value: object) -> str:
    return _EMPTY if value is None else str(value)


def _list_text(values: Iterable[object]) -> str:
    return ", ".join(str(value) for value in values)


def _capabilities_text(device: CanonicalDevice) -> str:
    return _list_text(capability.text for capability in sorted_capabilities(device.capabilities))


def _version_text(version: Version | None) -> str:
    if version is None or version.is_zero:
        return _EMPTY
    return str(version)


@dataclass(frozen=True, slots=True)
class _FieldRule:
    name: FieldName
    value: Callable[[CanonicalDevice], object]
    display: Callable[[CanonicalDevice], str]
    agreement: Callable[[CanonicalDevice, CanonicalDevice], Agreement]


_FIELD_RULES: Final[tuple[_FieldRule, ...]] = (
    _FieldRule(
        FieldName.IDIOM,
        lambda device: device.idiom,
        lambda device: str(device.idiom),
        lambda base, incoming: scalar_agreement(
            base.idiom, incoming.idiom, sentinels=(Idiom.UNSPECIFIED,)
        ),
    ),
    _FieldRule(
        FieldName.OFFICIAL_NAME,
        lambda device: device.official_name,
        lambda device: device.official_name,
        lambda base, incoming: name_agreement(base.official_name, incoming.official_name),
    ),
    _FieldRule(
        FieldName.IDENTIFIERS,
        lambda device: device.identifiers,
        lambda device: _list_text(device.identifiers),
        lambda base, incoming: subset_agreement(base.identifiers, incoming.identifiers),
    ),
    _FieldRule(
        FieldName.INTRODUCTION,
        lambda device: device.introduction,
        lambda device: _text(device.introduction),
        lambda base, incoming: introduction_agreement(base.introduction, incoming.introduction),
    ),
    _FieldRule(
        FieldName.SUPPORT_REFERENCE,
        lambda device: device.support_reference,
        lambda device: device.support_reference,
        lambda base, incoming: scalar_agreement(
            base.support_reference,
            incoming.support_reference,
            sentinels=(UNKNOWN_SUPPORT_REFERENCE,),
        ),
    ),
    _FieldRule(
        FieldName.LAUNCH_OS_VERSION,
        lambda device: device.os_versions.launch,
        lambda device: _version_text(device.os_versions.launch),
        lambda base, incoming: scalar_agreement(
            base.os_versions.launch, incoming.os_versions.launch, sentinels=(Version.ZERO,)
        ),
    ),
    _FieldRule(
        FieldName.END_OF_SUPPORT_OS_VERSION,
        lambda device: device.os_versions.end_of_support,
        lambda device: _version_text(device.os_versions.end_of_support),
        lambda base, incoming: scalar_agreement(
            base.os_versions.end_of_support,
            incoming.os_versions.end_of_support,
            sentinels=(None, Version.ZERO),
        ),
    ),
    _FieldRule(
        FieldName.IMAGE,
        lambda device: device.image,
        lambda device: _text(device.image),
        lambda base, incoming: scalar_agreement(base.image, incoming.image, sentinels=(None,)),
    ),
    _FieldRule(
        FieldName.CAPABILITIES,
        lambda device: device.capabilities,
        _capabilities_text,
        capability_agreement,
    ),
    _FieldRule(
        FieldName.MODEL_NUMBERS,
        lambda device: device.model_numbers,
        lambda device: _list_text(device.model_numbers),
        lambda base, incoming: model_number_agreement(base.model_numbers, incoming.model_numbers),
    ),
    _FieldRule(
        FieldName.COLORS,
        lambda device: device.colors,
        lambda device: _list_text(device.colors),
        lambda base, incoming: color_agreement(base.colors, incoming.colors),
    ),
    _FieldRule(
        FieldName.PROCESSOR,
        lambda device: device.processor,
        lambda device: str(device.processor),
        lambda base, incoming: scalar_agreement(
            base.processor, incoming.processor, sentinels=(Processor.UNKNOWN,)
        ),
    ),
)


def _field_source(
    base_value: object, merged_value: object, incoming_value: object, agreement: Agreement
) -> FieldSource:
    if merged_value == base_value:
        if incoming_value == base_value or agreement is Agreement.EQUAL:
            return FieldSource.UNCHANGED
        return FieldSource.BASE
    if merged_value == incoming_value:
        return FieldSource.INCOMING
    return FieldSource.COMBINED


def compare_devices(
    base: CanonicalDevice,
    merged: CanonicalDevice,
    incoming: CanonicalDevice,
    *,
    ignore: Iterable[FieldName] = (),
) -> DeviceDiff:
    """Compare ground truth, merge result and bridge projection field by field."""

    ignored = frozenset(ignore)
    return DeviceDiff(
        fields=tuple(_compare_field(rule, base, merged, incoming, ignored) for rule in _FIELD_RULES)
    )


def _compare_field(
    rule: _FieldRule,
    base: CanonicalDevice,
    merged: CanonicalDevice,
    incoming: CanonicalDevice,
    ignored: frozenset[FieldName],
) -> FieldComparison:
    base_value, merged_value, incoming_value = (
        rule.value(base),
        rule.value(merged),
        rule.value(incoming),
    )
    agreement = rule.agreement(base, incoming)
    return FieldComparison(
        field=rule.name,
        base=rule.display(base),
        merged=rule.display(merged),
        incoming=rule.display(incoming),
        agreement=agreement,
        changed=merged_value != base_value,
        source=_field_source(base_value, merged_value, incoming_value, agreement),
        ignored=rule.name in ignored,
    )

