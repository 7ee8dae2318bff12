"""Load support page records extracted to JSON."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Final

from devicebridge.adapters.json_source import parse_json_entries

from .schema import SupportPageEntry

log = logging.getLogger(__name__)

# Identifiers listed together on a page but catalogued as separate records.
SEPARATE_IDENTIFIERS: Final[frozenset[str]] = frozenset(
    {"Mac16,11", "Mac16,5", "Mac16,7", "Mac16,6", "Mac16,8", "Mac15,6", "Mac15,7"}
)
# Identifiers that stand for a fixed group regardless of the page grouping.
REGROUPED_IDENTIFIERS: Final[MappingProxyType[str, tuple[str, ...]]] = MappingProxyType(
    {
        "Mac15,8": ("Mac15,8", "Mac15,10"),
        "Mac15,9": ("Mac15,9", "Mac15,11"),
    }
)


def split_identifiers(
    identifiers: tuple[str, ...],
    *,
    separate: frozenset[str] = SEPARATE_IDENTIFIERS,
    regrouped: MappingProxyType[str, tuple[str, ...]] = REGROUPED_IDENTIFIERS,
) -> list[tuple[str, ...]]:
    """Partition a section's identifiers into per-record groups.

    Each separate identifier gets a group of its own, each regrouped key its
    fixed group, and whatever is left stays together in page order.
    """

    groups: list[tuple[str, ...]] = []
    claimed: set[str] = set()
    for identifier in identifiers:
        if identifier in separate:
            groups.append((identifier,))
            claimed.add(identifier)
        elif identifier in regrouped:
            group = regrouped[identifier]
            groups.append(group)
            claimed.update(group)
    rest = tuple(identifier for identifier in identifiers if identifier not in claimed)
    if rest or not groups:
        groups.append(rest)
    return groups


@dataclass(frozen=True, slots=True)
class SupportPagesLoader:
    source_name: ClassVar[str] = SupportPageEntry.source_name

    separate_identifiers: frozenset[str] = SEPARATE_IDENTIFIERS
    regrouped_identifiers: MappingProxyType[str, tuple[str, ...]] = field(
        default_factory=lambda: REGROUPED_IDENTIFIERS
    )

    def load(self, text: str) -> list[SupportPageEntry]:
        entries: list[SupportPageEntry] = []
        for entry in parse_json_entries(text, SupportPageEntry, source_name=self.source_name):
            entries.extend(self.split(entry))
        log.debug("Loaded %s support page entries", len(entries))
        return entries

    def split(self, entry: SupportPageEntry) -> list[SupportPageEntry]:
        groups = split_identifiers(
            entry.identifiers,
            separate=self.separate_identifiers,
            regrouped=self.regrouped_identifiers,
        )
        if len(groups) == 1:
            return [entry]
        return [entry.model_copy(update={"identifiers": group}) for group in groups]
