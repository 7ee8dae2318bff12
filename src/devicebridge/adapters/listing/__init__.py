"""Public interface for the identifier listing adapter."""

from __future__ import annotations

from .loader import SKIPPED_NAME_FRAGMENTS, ListingLoader, render_listing
from .schema import LINE_SEPARATOR, ListingEntry
from .translator import clean_official_name, listing_name

__all__ = [
    "LINE_SEPARATOR",
    "SKIPPED_NAME_FRAGMENTS",
    "ListingEntry",
    "ListingLoader",
    "clean_official_name",
    "listing_name",
    "render_listing",
]
