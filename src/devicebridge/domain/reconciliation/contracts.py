"""Shared reconciliation contract components.

This module intentionally holds only:
- the lookup key handed from bridges to the resolver
- the enums shared by resolver, merge and diff stages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final


class FieldName(StrEnum):
    """Canonical device fields compared by the diff stage, in display order."""

    IDIOM = "idiom"
    OFFICIAL_NAME = "official_name"
    IDENTIFIERS = "identifiers"
    INTRODUCTION = "introduction"
    SUPPORT_REFERENCE = "support_reference"
    LAUNCH_OS_VERSION = "launch_os_version"
    END_OF_SUPPORT_OS_VERSION = "end_of_support_os_version"
    IMAGE = "image"
    CAPABILITIES = "capabilities"
    MODEL_NUMBERS = "model_numbers"
    COLORS = "colors"
    PROCESSOR = "processor"


@dataclass(frozen=True, slots=True, kw_only=True)
class LookupKey:
    """Identifying information a bridge hands to the resolver."""

    name_hint: str
    identifier: str | None = None
    model_number: str | None = None
    support_reference: str | None = None


class MatchStrategy(StrEnum):
    """Which resolver step produced the ground-truth record."""

    IDENTIFIER = "identifier"
    MODEL_NUMBER = "modelNumber"
    SUPPORT_REFERENCE = "supportReference"
    SYNTHESIZED = "synthesized"


class MatchClassification(StrEnum):
    """Outcome of reconciling one bridge record."""

    IDENTICAL = "identical"
    MERGED_CLEAN = "mergedClean"
    CONFLICT = "conflict"


class Agreement(StrEnum):
    """Relation between base and incoming for one field."""

    EQUAL = "equal"
    COMPATIBLE = "compatible"
    CONFLICT = "conflict"


class FieldSource(StrEnum):
    """Which variant contributed the merged value of one field."""

    UNCHANGED = "unchanged"
    BASE = "base"
    INCOMING = "incoming"
    COMBINED = "combined"


class HighlightColor(StrEnum):
    BLUE = "blue"
    MAGENTA = "magenta"
    GREEN = "green"


FIELD_SOURCE_HIGHLIGHTS: Final[MappingProxyType[FieldSource, HighlightColor]] = MappingProxyType(
    {
        FieldSource.BASE: HighlightColor.BLUE,
        FieldSource.INCOMING: HighlightColor.MAGENTA,
        FieldSource.COMBINED: HighlightColor.GREEN,
    }
)
