"""Deterministic text rendering of canonical records.

The output is compared bit for bit between runs, so every field is written in
a fixed order and values equal to the record defaults are left out:

- unknown processor and support reference
- default colors, zero launch version, no end of support
- empty identifier, capability and model number lists
- missing introduction and image

Capabilities are written as stored, i.e. without the ones implied by the idiom
or computer form.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Final

from devicebridge.domain.model import (
    DEFAULT_COLORS,
    UNKNOWN_SUPPORT_REFERENCE,
    Idiom,
    Processor,
    sorted_capabilities,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from devicebridge.domain.model import CanonicalDevice

DEFINITION_HEADER: Final[str] = "[[device]]"


def _quote(value: object) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def _quote_list(values: Iterable[object]) -> str:
    return "[" + ", ".join(_quote(value) for value in values) + "]"


def render_definition(device: CanonicalDevice) -> str:
    """Render one record; no trailing newline."""

    lines = [DEFINITION_HEADER]
    if device.idiom is not Idiom.UNSPECIFIED:
        lines.append(f"idiom = {_quote(device.idiom)}")
    lines.append(f"official_name = {_quote(device.official_name)}")
    if device.identifiers:
        lines.append(f"identifiers = {_quote_list(device.identifiers)}")
    if device.introduction is not None:
        lines.append(f"introduction = {_quote(device.introduction)}")
    if device.support_reference != UNKNOWN_SUPPORT_REFERENCE:
        lines.append(f"support_reference = {_quote(device.support_reference)}")
    if not device.os_versions.launch.is_zero:
        lines.append(f"launch_os_version = {_quote(device.os_versions.launch)}")
    if device.os_versions.end_of_support is not None:
        lines.append(f"end_of_support_os_version = {_quote(device.os_versions.end_of_support)}")
    if device.image is not None:
        lines.append(f"image = {_quote(device.image)}")
    if device.capabilities:
        texts = (capability.text for capability in sorted_capabilities(device.capabilities))
        lines.append(f"capabilities = {_quote_list(texts)}")
    if device.model_numbers:
        lines.append(f"model_numbers = {_quote_list(device.model_numbers)}")
    if device.colors != DEFAULT_COLORS:
        lines.append(f"colors = {_quote_list(device.colors)}")
    if device.processor is not Processor.UNKNOWN:
        lines.append(f"processor = {_quote(device.processor)}")
    return "\n".join(lines)


def render_catalog(devices: Iterable[CanonicalDevice]) -> str:
    """Render records in the given order, separated by blank lines."""

    definitions = [render_definition(device) for device in devices]
    if not definitions:
        return ""
    return "\n\n".join(definitions) + "\n"


__all__ = ["DEFINITION_HEADER", "render_catalog", "render_definition"]
