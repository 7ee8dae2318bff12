"""Load the third-party device catalog JSON."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from devicebridge.adapters.json_source import parse_json_entries

from .schema import DeviceJsonEntry

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)

# Accessory families the catalog does not track.
EXCLUDED_FAMILIES: Final[frozenset[str]] = frozenset({"AirTag", "AirPod", "AirPods"})
# Published as one entry but catalogued as separate devices.
SPLIT_IDENTIFIERS: Final[frozenset[str]] = frozenset({"AppleTV3,1", "AppleTV3,2"})


@dataclass(frozen=True, slots=True)
class DeviceJsonLoader:
    source_name: ClassVar[str] = DeviceJsonEntry.source_name

    excluded_families: frozenset[str] = EXCLUDED_FAMILIES
    split_identifiers: frozenset[str] = SPLIT_IDENTIFIERS

    def load(self, text: str) -> list[DeviceJsonEntry]:
        entries = parse_json_entries(text, DeviceJsonEntry, source_name=self.source_name)
        loaded = [
            split
            for entry in entries
            if entry.family not in self.excluded_families
            for split in self.split(entry)
        ]
        log.debug("Loaded %s device entries from %s published", len(loaded), len(entries))
        return loaded

    def split(self, entry: DeviceJsonEntry) -> Iterator[DeviceJsonEntry]:
        """One entry per identifier for entries listing a split identifier.

        Part numbers are paired with identifiers by position when the counts
        match; otherwise every split keeps the full list.
        """

        if len(entry.ids) < 2 or self.split_identifiers.isdisjoint(entry.ids):  # noqa: PLR2004
            yield entry
            return
        paired = len(entry.a_numbers) == len(entry.ids)
        for position, identifier in enumerate(entry.ids):
            a_numbers = (entry.a_numbers[position],) if paired else entry.a_numbers
            yield entry.model_copy(update={"ids": (identifier,), "a_numbers": a_numbers})
