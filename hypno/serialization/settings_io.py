"""Settings import/export — the ``{"spiral": {...}, "text": [...]}`` JSON schema."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from hypno.models.pattern import (
    DEFAULT_TEXT_STYLE,
    ExportedSettings,
    PatternSettings,
    TextOverlay,
    TextStyle,
)

logger = logging.getLogger(__name__)


class SettingsImportError(ValueError):
    """Payload rejected; the caller's state must be left as it was."""


def export_settings(settings: PatternSettings, overlays: Sequence[TextOverlay]) -> dict[str, Any]:
    """Wire dict. Overlay ids are session-local and are not exported."""
    return ExportedSettings(spiral=settings, text=list(overlays)).to_wire()


def dumps_settings(settings: PatternSettings, overlays: Sequence[TextOverlay]) -> str:
    return json.dumps(export_settings(settings, overlays), indent=2)


def _describe(e: ValidationError) -> str:
    first = e.errors()[0]
    loc = ".".join(str(p) for p in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]


def load_settings(
    data: Any,
    current: PatternSettings | None = None,
    template: TextStyle = DEFAULT_TEXT_STYLE,
) -> tuple[PatternSettings, list[TextOverlay]]:
    """Validate a decoded payload.

    ``spiral`` is merged over ``current`` (fields it omits keep their value);
    every text entry is merged over ``template`` and gets a fresh id.
    """
    if not isinstance(data, dict):
        raise SettingsImportError("Invalid settings format: expected an object")
    spiral = data.get("spiral")
    if not isinstance(spiral, dict):
        raise SettingsImportError("Invalid settings format: missing 'spiral' section")
    text = data.get("text")
    if not isinstance(text, list):
        raise SettingsImportError("Invalid settings format: 'text' must be a list")

    base = (current or PatternSettings()).to_wire()
    try:
        settings = PatternSettings.model_validate({**base, **spiral})
    except ValidationError as e:
        raise SettingsImportError(f"Invalid spiral settings: {_describe(e)}") from e

    defaults = template.model_dump(by_alias=True)
    overlays: list[TextOverlay] = []
    for i, entry in enumerate(text):
        if not isinstance(entry, dict):
            raise SettingsImportError(f"Invalid text entry #{i}: expected an object")
        try:
            fields = {k: v for k, v in entry.items() if k != "id"}
            overlays.append(TextOverlay.model_validate({**defaults, **fields}))
        except ValidationError as e:
            raise SettingsImportError(f"Invalid text entry #{i}: {_describe(e)}") from e

    return settings, overlays


def loads_settings(
    raw: str,
    current: PatternSettings | None = None,
    template: TextStyle = DEFAULT_TEXT_STYLE,
) -> tuple[PatternSettings, list[TextOverlay]]:
    """Parse JSON text. Any failure surfaces as SettingsImportError."""
    if not raw or not raw.strip():
        raise SettingsImportError("Paste settings JSON first")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SettingsImportError(f"Error parsing JSON: {e.msg} (line {e.lineno})") from e
    return load_settings(data, current, template)
