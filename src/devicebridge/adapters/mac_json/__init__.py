"""Public interface for the computer catalog JSON adapter."""

from __future__ import annotations

from .loader import COLLAPSED_IDENTIFIERS, MacJsonLoader, collapse_identifiers, split_joined
from .schema import MacJsonEntry
from .translator import (
    COLOR_NAMES,
    PART_LIST_OVERRIDE_IDENTIFIERS,
    PROCESSOR_NAME_OVERRIDES,
    color_name,
    form_for_kind,
    kind_for,
    parse_color,
    parse_processor,
)

__all__ = [
    "COLLAPSED_IDENTIFIERS",
    "COLOR_NAMES",
    "PART_LIST_OVERRIDE_IDENTIFIERS",
    "PROCESSOR_NAME_OVERRIDES",
    "MacJsonEntry",
    "MacJsonLoader",
    "collapse_identifiers",
    "color_name",
    "form_for_kind",
    "kind_for",
    "parse_color",
    "parse_processor",
    "split_joined",
]
