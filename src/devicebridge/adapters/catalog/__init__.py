"""Catalog storage adapters."""

from __future__ import annotations

from .documents import CATALOG_FORMAT_VERSION, CatalogDocument, DeviceDocument
from .memory import InMemoryCatalog
from .store import JsonCatalogStore

__all__ = [
    "CATALOG_FORMAT_VERSION",
    "CatalogDocument",
    "DeviceDocument",
    "InMemoryCatalog",
    "JsonCatalogStore",
]
