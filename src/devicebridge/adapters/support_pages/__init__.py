"""Public interface for the support page adapter."""

from __future__ import annotations

from .loader import (
    REGROUPED_IDENTIFIERS,
    SEPARATE_IDENTIFIERS,
    SupportPagesLoader,
    split_identifiers,
)
from .schema import SupportPageEntry
from .translator import (
    FEATURE_CAPABILITIES,
    NO_TOUCH_ID_IDENTIFIERS,
    computer_capabilities,
    feature_capabilities,
    name_capabilities,
    parse_idiom,
    parse_processor,
)

__all__ = [
    "FEATURE_CAPABILITIES",
    "NO_TOUCH_ID_IDENTIFIERS",
    "REGROUPED_IDENTIFIERS",
    "SEPARATE_IDENTIFIERS",
    "SupportPageEntry",
    "SupportPagesLoader",
    "computer_capabilities",
    "feature_capabilities",
    "name_capabilities",
    "parse_idiom",
    "parse_processor",
    "split_identifiers",
]
