"""Pydantic models describing the third-party device catalog JSON."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Self

from pydantic import BaseModel, ConfigDict, field_validator

from devicebridge.domain.reconciliation import FieldName, LookupKey

from .translator import entry_from_device, entry_to_device

if TYPE_CHECKING:
    from devicebridge.domain.model import CanonicalDevice

log = logging.getLogger(__name__)


class DeviceJsonModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class VersionSpan(DeviceJsonModel):
    min: str
    max: str | None = None


class SoftwareItem(DeviceJsonModel):
    device_version: VersionSpan
    id: str
    name: str
    version: VersionSpan | None = None


class Chip(DeviceJsonModel):
    id: str
    name: str


class DeviceJsonEntry(DeviceJsonModel):
    """One device as published by the catalog; ``ids`` may group several SKUs."""

    source_name: ClassVar[str] = "device_json"
    diff_ignore_keys: ClassVar[frozenset[FieldName]] = frozenset()

    name: str
    gen_name: str | None = None
    year: int | None = None
    family: str = ""
    chip: Chip | None = None
    software: tuple[SoftwareItem, ...] = ()
    traits: tuple[str, ...] = ()
    internal_names: tuple[str, ...] = ()
    a_numbers: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()

    @field_validator("year", mode="before")
    @classmethod
    def _parse_year(cls, value: object) -> object:
        if value is None or isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            log.warning("Ignoring malformed year %r", value)
            return None

    def to_canonical(self) -> CanonicalDevice:
        return entry_to_device(self)

    def from_canonical(self, reference: CanonicalDevice) -> Self:
        return entry_from_device(self, reference)

    def lookup_key(self) -> LookupKey:
        return LookupKey(
            name_hint=self.gen_name or self.name,
            identifier=self.ids[0] if self.ids else None,
            model_number=self.a_numbers[0] if self.a_numbers else None,
        )

    def native_text(self) -> str:
        return self.model_dump_json(indent=2)
