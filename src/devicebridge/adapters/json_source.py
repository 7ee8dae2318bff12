"""Shared parsing for sources published as a JSON array of records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, TypeAdapter, ValidationError

from devicebridge.domain.errors import SourceFormatError

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

_DOCUMENT = TypeAdapter(list[dict[str, object]])


def parse_json_entries[TModel: BaseModel](
    text: str, model: type[TModel], *, source_name: str
) -> list[TModel]:
    """Validate every array item against ``model``.

    A document that is not a JSON array of objects raises ``SourceFormatError``;
    items that fail validation are skipped with a warning.
    """

    try:
        raw_entries = _DOCUMENT.validate_json(text)
    except ValidationError as exc:
        raise SourceFormatError(
            f"expected a JSON array of objects ({exc.error_count()} errors)",
            source_name=source_name,
        ) from exc

    entries: list[TModel] = []
    for position, raw in enumerate(raw_entries):
        try:
            entries.append(model.model_validate(raw))
        except ValidationError as exc:
            log.warning(
                "Skipping %s entry %s (%s): %s",
                source_name,
                position,
                _describe(raw),
                exc.errors(include_url=False)[0]["msg"],
            )
    return entries


def _describe(raw: Mapping[str, object]) -> str:
    for key in ("name", "official_name", "gen_name"):
        value = raw.get(key)
        if isinstance(value, str):
            return value
    return "unnamed"
