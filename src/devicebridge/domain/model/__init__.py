"""Public domain model surface."""

from __future__ import annotations

from devicebridge.domain.model.capabilities import (
    EXCLUSIVE_KINDS,
    FORM_IMPLIED,
    IDIOM_IMPLIED,
    SET_KINDS,
    Capability,
    capabilities_of_kind,
    explicit_capabilities,
    implied_capabilities,
    sorted_capabilities,
)
from devicebridge.domain.model.device import (
    DEFAULT_COLORS,
    UNKNOWN_IDENTIFIER,
    UNKNOWN_NAME,
    UNKNOWN_SUPPORT_REFERENCE,
    CanonicalDevice,
    normalize_colors,
    unique,
)
from devicebridge.domain.model.enums import (
    Biometrics,
    Camera,
    CapabilityKind,
    Cellular,
    Color,
    ComputerForm,
    Idiom,
    Processor,
    StylusGeneration,
    WatchCaseSize,
)
from devicebridge.domain.model.primitives import (
    IntroductionDate,
    OSVersionRange,
    Screen,
    Version,
    identifier_version,
)

__all__ = [  # noqa: RUF022
    # device
    "CanonicalDevice",
    "DEFAULT_COLORS",
    "UNKNOWN_IDENTIFIER",
    "UNKNOWN_NAME",
    "UNKNOWN_SUPPORT_REFERENCE",
    "normalize_colors",
    "unique",
    # capabilities
    "Capability",
    "EXCLUSIVE_KINDS",
    "SET_KINDS",
    "FORM_IMPLIED",
    "IDIOM_IMPLIED",
    "capabilities_of_kind",
    "explicit_capabilities",
    "implied_capabilities",
    "sorted_capabilities",
    # enums
    "Biometrics",
    "Camera",
    "CapabilityKind",
    "Cellular",
    "Color",
    "ComputerForm",
    "Idiom",
    "Processor",
    "StylusGeneration",
    "WatchCaseSize",
    # primitives
    "IntroductionDate",
    "OSVersionRange",
    "Screen",
    "Version",
    "identifier_version",
]
