"""Pydantic model describing the third-party computer catalog JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Self

from pydantic import BaseModel, ConfigDict

from devicebridge.domain.reconciliation import FieldName, LookupKey

from .translator import entry_from_device, entry_to_device

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice


class MacJsonEntry(BaseModel):
    """One computer model; ``models`` are identifiers and ``parts`` part numbers."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    source_name: ClassVar[str] = "mac_json"
    # Names carry size and year qualifiers the catalog spells differently.
    diff_ignore_keys: ClassVar[frozenset[FieldName]] = frozenset({FieldName.OFFICIAL_NAME})

    models: tuple[str, ...] = ()
    kind: str = ""
    colors: tuple[str, ...] = ()
    name: str
    notes: tuple[str, ...] | None = None
    variant: str = ""
    parts: tuple[str, ...] = ()

    def to_canonical(self) -> CanonicalDevice:
        return entry_to_device(self)

    def from_canonical(self, reference: CanonicalDevice) -> Self:
        return entry_from_device(self, reference)

    def lookup_key(self) -> LookupKey:
        return LookupKey(
            name_hint=self.name,
            identifier=self.models[0] if self.models else None,
            model_number=self.parts[0] if self.parts else None,
        )

    def native_text(self) -> str:
        return self.model_dump_json(indent=2)
