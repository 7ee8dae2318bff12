"""Record shape of the plain-text identifier listing."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Final, Self

from pydantic import BaseModel, ConfigDict, field_validator

from devicebridge.domain.reconciliation import FieldName, LookupKey

from .translator import entry_from_device, entry_to_device

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice

LINE_SEPARATOR: Final[str] = " : "


class ListingEntry(BaseModel):
    """One ``identifier : name`` line."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    source_name: ClassVar[str] = "listing"
    # Listing names are informal ("2nd Gen iPad"); the catalog name stays authoritative.
    diff_ignore_keys: ClassVar[frozenset[FieldName]] = frozenset({FieldName.OFFICIAL_NAME})

    identifier: str
    official_name: str

    @field_validator("identifier", "official_name", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    def to_canonical(self) -> CanonicalDevice:
        return entry_to_device(self)

    def from_canonical(self, reference: CanonicalDevice) -> Self:
        return entry_from_device(self, reference)

    def lookup_key(self) -> LookupKey:
        return LookupKey(name_hint=self.official_name, identifier=self.identifier)

    def native_text(self) -> str:
        return f"{self.identifier}{LINE_SEPARATOR}{self.official_name}"
