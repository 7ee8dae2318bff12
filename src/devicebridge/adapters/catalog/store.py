"""JSON file persistence for the canonical catalog."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from devicebridge.domain.errors import CatalogUnavailableError

from .documents import CATALOG_FORMAT_VERSION, CatalogDocument, DeviceDocument
from .memory import InMemoryCatalog

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devicebridge.domain.model import CanonicalDevice

log = logging.getLogger(__name__)


class JsonCatalogStore:
    """Load and save the catalog as one JSON document.

    Any failure to read or validate the file raises ``CatalogUnavailableError``;
    a missing file is only tolerated with ``allow_missing``.
    """

    def __init__(self, path: Path | str, *, allow_missing: bool = False) -> None:
        self.path = Path(path)
        self.allow_missing = allow_missing

    def load(self) -> InMemoryCatalog:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            if self.allow_missing:
                log.info("No catalog at %s; starting empty", self.path)
                return InMemoryCatalog()
            msg = f"catalog file not found: {self.path}"
            raise CatalogUnavailableError(msg, location=str(self.path)) from exc
        except OSError as exc:
            msg = f"cannot read catalog: {exc}"
            raise CatalogUnavailableError(msg, location=str(self.path)) from exc

        try:
            document = CatalogDocument.model_validate_json(text)
        except ValidationError as exc:
            msg = f"invalid catalog ({exc.error_count()} errors): {exc.errors()[0]['msg']}"
            raise CatalogUnavailableError(msg, location=str(self.path)) from exc
        if document.format_version != CATALOG_FORMAT_VERSION:
            msg = f"unsupported catalog format version {document.format_version}"
            raise CatalogUnavailableError(msg, location=str(self.path))

        catalog = InMemoryCatalog(entry.to_device() for entry in document.devices)
        log.info("Loaded %s catalog records from %s", len(catalog), self.path)
        return catalog

    def save(self, devices: Iterable[CanonicalDevice]) -> None:
        """Write ``devices`` in the given order, replacing the file atomically."""

        document = CatalogDocument(
            devices=[DeviceDocument.from_device(device) for device in devices]
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, temporary = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                handle.write(document.model_dump_json(indent=2))
                handle.write("\n")
            Path(temporary).replace(self.path)
        except BaseException:
            Path(temporary).unlink(missing_ok=True)
            raise
        log.info("Saved %s catalog records to %s", len(document.devices), self.path)
