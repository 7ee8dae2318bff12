"""Pydantic documents for the JSON catalog file.

Values are stored in their text forms (capability text, dotted versions,
ISO-like introduction dates) so the file stays readable and diffable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devicebridge.domain.model import (
    UNKNOWN_NAME,
    UNKNOWN_SUPPORT_REFERENCE,
    CanonicalDevice,
    Capability,
    Color,
    Idiom,
    IntroductionDate,
    OSVersionRange,
    Processor,
    Version,
    sorted_capabilities,
)

CATALOG_FORMAT_VERSION = 1


class DeviceDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    idiom: Idiom = Idiom.UNSPECIFIED
    official_name: str = UNKNOWN_NAME
    identifiers: list[str] = Field(default_factory=list)
    introduction: str | None = None
    support_reference: str = UNKNOWN_SUPPORT_REFERENCE
    launch_os_version: str | None = None
    end_of_support_os_version: str | None = None
    image: str | None = None
    capabilities: list[str] = Field(default_factory=list)
    model_numbers: list[str] = Field(default_factory=list)
    colors: list[Color] = Field(default_factory=lambda: [Color.DEFAULT])
    processor: Processor = Processor.UNKNOWN

    @field_validator("capabilities")
    @classmethod
    def _check_capabilities(cls, values: list[str]) -> list[str]:
        invalid = [value for value in values if Capability.parse(value) is None]
        if invalid:
            msg = f"unknown capabilities: {', '.join(invalid)}"
            raise ValueError(msg)
        return values

    @field_validator("introduction")
    @classmethod
    def _check_introduction(cls, value: str | None) -> str | None:
        if value is not None and IntroductionDate.parse(value) is None:
            msg = f"invalid introduction date: {value!r}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_device(cls, device: CanonicalDevice) -> DeviceDocument:
        launch = device.os_versions.launch
        end_of_support = device.os_versions.end_of_support
        return cls(
            idiom=device.idiom,
            official_name=device.official_name,
            identifiers=list(device.identifiers),
            introduction=str(device.introduction) if device.introduction else None,
            support_reference=device.support_reference,
            launch_os_version=None if launch.is_zero else str(launch),
            end_of_support_os_version=None if end_of_support is None else str(end_of_support),
            image=device.image,
            capabilities=[
                capability.text for capability in sorted_capabilities(device.capabilities)
            ],
            model_numbers=list(device.model_numbers),
            colors=list(device.colors),
            processor=device.processor,
        )

    def to_device(self) -> CanonicalDevice:
        end_of_support = (
            Version.parse(self.end_of_support_os_version)
            if self.end_of_support_os_version is not None
            else None
        )
        return CanonicalDevice(
            idiom=self.idiom,
            official_name=self.official_name,
            identifiers=tuple(self.identifiers),
            introduction=IntroductionDate.parse(self.introduction),
            support_reference=self.support_reference,
            os_versions=OSVersionRange(
                launch=Version.parse(self.launch_os_version),
                end_of_support=end_of_support,
            ),
            image=self.image,
            capabilities=frozenset(
                capability
                for capability in map(Capability.parse, self.capabilities)
                if capability is not None
            ),
            model_numbers=tuple(self.model_numbers),
            colors=tuple(self.colors),
            processor=self.processor,
        )


class CatalogDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    format_version: int = CATALOG_FORMAT_VERSION
    devices: list[DeviceDocument] = Field(default_factory=list)
