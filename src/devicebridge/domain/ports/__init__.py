"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import Catalog
from .loading import BridgeLoader

__all__ = [
    "BridgeLoader",
    "Catalog",
]
