"""Records extracted from vendor support pages.

The HTML extraction runs elsewhere; this adapter reads its JSON output, one
object per product section.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devicebridge.domain.model import UNKNOWN_SUPPORT_REFERENCE
from devicebridge.domain.reconciliation import FieldName, LookupKey

from .translator import entry_from_device, entry_to_device

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice


class SupportPageEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    source_name: ClassVar[str] = "support_pages"
    # Pages show one photo per section; the catalog may prefer another variant's.
    diff_ignore_keys: ClassVar[frozenset[FieldName]] = frozenset({FieldName.IMAGE})

    official_name: str = Field(alias="name")
    idiom: str | None = None
    identifiers: tuple[str, ...] = ()
    year_introduced: int | None = None
    support_id: str | None = None
    end_of_support_os: str | None = None
    image: str | None = None
    # Feature phrases found in the section text, e.g. "USB-C" or "Action button".
    features: tuple[str, ...] = ()
    part_numbers: tuple[str, ...] = ()
    chip: str | None = None
    page: str | None = None

    @field_validator(
        "idiom", "support_id", "end_of_support_os", "image", "chip", "page", mode="before"
    )
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("year_introduced", mode="before")
    @classmethod
    def _parse_year(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped) if stripped.isdigit() else None
        return value

    @property
    def support_reference(self) -> str:
        return self.support_id.upper() if self.support_id else UNKNOWN_SUPPORT_REFERENCE

    def to_canonical(self) -> CanonicalDevice:
        return entry_to_device(self)

    def from_canonical(self, reference: CanonicalDevice) -> Self:
        return entry_from_device(self, reference)

    def lookup_key(self) -> LookupKey:
        support_reference = self.support_reference
        return LookupKey(
            name_hint=self.official_name,
            identifier=self.identifiers[0] if self.identifiers else None,
            model_number=self.part_numbers[0] if self.part_numbers else None,
            support_reference=(
                None if support_reference == UNKNOWN_SUPPORT_REFERENCE else support_reference
            ),
        )

    def native_text(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True)
