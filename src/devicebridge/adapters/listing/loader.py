"""Load the plain-text identifier listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from .schema import LINE_SEPARATOR, ListingEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)

# Lines for simulator architectures, not devices.
SKIPPED_NAME_FRAGMENTS: Final[frozenset[str]] = frozenset({"iPhone Simulator"})


@dataclass(frozen=True, slots=True)
class ListingLoader:
    source_name: ClassVar[str] = ListingEntry.source_name

    skipped_name_fragments: frozenset[str] = SKIPPED_NAME_FRAGMENTS

    def load(self, text: str) -> list[ListingEntry]:
        entries: list[ListingEntry] = []
        for number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            parts = line.split(LINE_SEPARATOR)
            if len(parts) != 2:  # noqa: PLR2004
                log.warning("Skipping listing line %s: %r", number, line)
                continue
            entry = ListingEntry(identifier=parts[0], official_name=parts[1])
            if any(fragment in entry.official_name for fragment in self.skipped_name_fragments):
                continue
            entries.append(entry)
        log.debug("Loaded %s listing entries", len(entries))
        return entries


def render_listing(entries: Iterable[ListingEntry]) -> str:
    lines = [entry.native_text() for entry in entries]
    return "\n".join(lines) + "\n" if lines else ""
