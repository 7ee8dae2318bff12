"""Public interface for the device catalog JSON adapter."""

from __future__ import annotations

from .loader import EXCLUDED_FAMILIES, SPLIT_IDENTIFIERS, DeviceJsonLoader
from .schema import Chip, DeviceJsonEntry, SoftwareItem, VersionSpan
from .translator import (
    CHIP_NAME_SUFFIXES,
    IDIOM_NAMES,
    NAME_MAP,
    TRAIT_CAPABILITIES,
    catalog_name,
    parse_chip,
)

__all__ = [
    "CHIP_NAME_SUFFIXES",
    "EXCLUDED_FAMILIES",
    "IDIOM_NAMES",
    "NAME_MAP",
    "SPLIT_IDENTIFIERS",
    "TRAIT_CAPABILITIES",
    "Chip",
    "DeviceJsonEntry",
    "DeviceJsonLoader",
    "SoftwareItem",
    "VersionSpan",
    "catalog_name",
    "parse_chip",
]
