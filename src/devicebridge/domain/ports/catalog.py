"""Ports for reading and updating the canonical catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from devicebridge.domain.model import CanonicalDevice


@runtime_checkable
class Catalog(Protocol):
    """Ordered store of canonical records.

    ``all`` returns records in catalog order, which is the order used for
    deterministic output.
    """

    def lookup(
        self,
        *,
        identifier: str | None = None,
        model_number: str | None = None,
        support_reference: str | None = None,
    ) -> list[CanonicalDevice]: ...

    def all(self) -> Sequence[CanonicalDevice]: ...

    def upsert(
        self, device: CanonicalDevice, *, replacing: CanonicalDevice | None = None
    ) -> None:
        """Store ``device`` in place of ``replacing``.

        Without ``replacing`` (or when it is no longer stored) the first record
        sharing a known identifier is replaced, else ``device`` is appended.
        """


__all__ = ["Catalog"]
