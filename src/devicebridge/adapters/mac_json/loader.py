"""Load the third-party computer catalog JSON."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Final

from devicebridge.adapters.json_source import parse_json_entries

from .schema import MacJsonEntry

log = logging.getLogger(__name__)

JOINED_VALUE_SEPARATOR: Final[str] = ";"
# Identifiers published inside a group but catalogued on their own (they
# differ by processor); the last one found in a group wins.
COLLAPSED_IDENTIFIERS: Final[tuple[str, ...]] = (
    "Mac16,11",
    "Mac16,6",
    "Mac16,5",
    "Mac15,6",
    "Mac15,7",
)


def split_joined(values: tuple[str, ...]) -> tuple[str, ...]:
    """Split values like ``"Mac14,5; Mac14,9"`` into separate items."""

    parts: list[str] = []
    for value in values:
        parts.extend(part.strip() for part in value.split(JOINED_VALUE_SEPARATOR) if part.strip())
    return tuple(parts)


def collapse_identifiers(models: tuple[str, ...], keys: tuple[str, ...]) -> tuple[str, ...]:
    collapsed = models
    for key in keys:
        if key in models:
            collapsed = (key,)
    return collapsed


@dataclass(frozen=True, slots=True)
class MacJsonLoader:
    source_name: ClassVar[str] = MacJsonEntry.source_name

    collapsed_identifiers: tuple[str, ...] = COLLAPSED_IDENTIFIERS

    def load(self, text: str) -> list[MacJsonEntry]:
        entries = [
            self.normalize(entry)
            for entry in parse_json_entries(text, MacJsonEntry, source_name=self.source_name)
        ]
        log.debug("Loaded %s computer entries", len(entries))
        return entries

    def normalize(self, entry: MacJsonEntry) -> MacJsonEntry:
        models = collapse_identifiers(split_joined(entry.models), self.collapsed_identifiers)
        return entry.model_copy(update={"models": models, "parts": split_joined(entry.parts)})
