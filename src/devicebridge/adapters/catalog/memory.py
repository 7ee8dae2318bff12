"""In-memory catalog keeping records in catalog order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from devicebridge.domain.model import UNKNOWN_IDENTIFIER, UNKNOWN_SUPPORT_REFERENCE

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from devicebridge.domain.model import CanonicalDevice

log = logging.getLogger(__name__)


class InMemoryCatalog:
    def __init__(self, devices: Iterable[CanonicalDevice] = ()) -> None:
        self._devices: list[CanonicalDevice] = list(devices)

    def __len__(self) -> int:
        return len(self._devices)

    def all(self) -> Sequence[CanonicalDevice]:
        return tuple(self._devices)

    def lookup(
        self,
        *,
        identifier: str | None = None,
        model_number: str | None = None,
        support_reference: str | None = None,
    ) -> list[CanonicalDevice]:
        """Records matching every given criterion, in catalog order."""

        if identifier is None and model_number is None and support_reference is None:
            return []
        return [
            device
            for device in self._devices
            if (identifier is None or identifier in device.identifiers)
            and (model_number is None or model_number in device.model_numbers)
            and (
                support_reference is None
                or (
                    support_reference != UNKNOWN_SUPPORT_REFERENCE
                    and device.support_reference == support_reference
                )
            )
        ]

    def upsert(
        self, device: CanonicalDevice, *, replacing: CanonicalDevice | None = None
    ) -> None:
        """Replace ``replacing`` in place; otherwise match on a known identifier, else append."""

        if replacing is not None:
            for position, existing in enumerate(self._devices):
                if existing == replacing:
                    log.debug("Replacing catalog record %s", existing)
                    self._devices[position] = device
                    return
        known = set(device.identifiers) - {UNKNOWN_IDENTIFIER}
        for position, existing in enumerate(self._devices):
            if known & set(existing.identifiers):
                log.debug("Replacing catalog record %s", existing)
                self._devices[position] = device
                return
        log.debug("Appending catalog record %s", device)
        self._devices.append(device)
