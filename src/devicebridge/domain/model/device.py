"""Canonical device record."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from .capabilities import explicit_capabilities, implied_capabilities
from .enums import CapabilityKind, Color, ComputerForm, Idiom, Processor
from .primitives import IntroductionDate, OSVersionRange

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .capabilities import Capability

UNKNOWN_NAME: Final[str] = "Unknown Device"
UNKNOWN_IDENTIFIER: Final[str] = "Unknown0,0"
UNKNOWN_SUPPORT_REFERENCE: Final[str] = "unknown"
DEFAULT_COLORS: Final[tuple[Color, ...]] = (Color.DEFAULT,)


def unique[T](items: Iterable[T]) -> tuple[T, ...]:
    """De-duplicate ``items`` preserving first-seen order."""

    return tuple(dict.fromkeys(items))


def normalize_colors(colors: Iterable[Color]) -> tuple[Color, ...]:
    distinct = unique(colors)
    if any(color is not Color.DEFAULT for color in distinct):
        return tuple(color for color in distinct if color is not Color.DEFAULT)
    return distinct


@dataclass(frozen=True, slots=True, kw_only=True)
class CanonicalDevice:
    """One catalog record.

    Construction normalizes the collections: identifiers, model numbers and
    colors lose duplicates (first occurrence wins), ``Color.DEFAULT`` is dropped
    once a real color is present, and capabilities implied by the idiom or the
    computer form are removed from ``capabilities``. Use
    ``effective_capabilities`` for the full set.
    """

    idiom: Idiom = Idiom.UNSPECIFIED
    official_name: str = UNKNOWN_NAME
    identifiers: tuple[str, ...] = ()
    introduction: IntroductionDate | None = None
    support_reference: str = UNKNOWN_SUPPORT_REFERENCE
    os_versions: OSVersionRange = field(default_factory=OSVersionRange)
    image: str | None = None
    capabilities: frozenset[Capability] = frozenset()
    model_numbers: tuple[str, ...] = ()
    colors: tuple[Color, ...] = DEFAULT_COLORS
    processor: Processor = Processor.UNKNOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", unique(self.identifiers))
        object.__setattr__(self, "model_numbers", unique(self.model_numbers))
        object.__setattr__(self, "colors", normalize_colors(self.colors))
        object.__setattr__(
            self, "capabilities", explicit_capabilities(self.idiom, self.capabilities)
        )

    @property
    def effective_capabilities(self) -> frozenset[Capability]:
        return self.capabilities | implied_capabilities(self.idiom, self.capabilities)

    @property
    def computer_form(self) -> ComputerForm | None:
        for capability in self.capabilities:
            if capability.kind is CapabilityKind.COMPUTER_FORM and isinstance(
                capability.value, ComputerForm
            ):
                return capability.value
        return None

    @property
    def primary_identifier(self) -> str:
        return self.identifiers[0] if self.identifiers else UNKNOWN_IDENTIFIER

    @property
    def has_known_identifier(self) -> bool:
        return any(identifier != UNKNOWN_IDENTIFIER for identifier in self.identifiers)

    def has_capability(self, kind: CapabilityKind) -> bool:
        return any(capability.kind is kind for capability in self.effective_capabilities)

    def replace(self, **changes: Any) -> CanonicalDevice:
        """Return a re-normalized copy with ``changes`` applied."""

        return dataclasses.replace(self, **changes)

    def __str__(self) -> str:
        return f"{self.official_name} ({', '.join(self.identifiers) or UNKNOWN_IDENTIFIER})"
