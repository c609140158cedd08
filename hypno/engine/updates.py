"""Update messages — (field path, new value) edits applied to an immutable snapshot.

Paths use wire keys:
    spiral.<key>            e.g. "spiral.spacing", "spiral.blendMode"
    text.<overlay id>.<key> e.g. "text.3f2a….x", "text.3f2a….fontSize"
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from hypno.models.pattern import PatternSettings, TextOverlay

# Overlay anchor coordinates are always kept inside the canvas
_CLAMPED_TEXT_KEYS = {"x", "y"}


class UpdateError(ValueError):
    """Raised for an unknown path or a value the field does not accept."""


@dataclass(frozen=True)
class Update:
    path: str
    value: Any


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _wire_key(model: type[BaseModel], key: str) -> str:
    for name, info in model.model_fields.items():
        if key in (name, info.alias):
            return info.alias or name
    raise UpdateError(f"Unknown field {key!r} on {model.__name__}")


def _replace(model: BaseModel, key: str, value: Any) -> BaseModel:
    wire = _wire_key(type(model), key)
    data = model.model_dump(by_alias=True)
    data[wire] = value
    try:
        updated = type(model).model_validate(data)
    except ValidationError as e:
        raise UpdateError(f"Invalid value for {wire}: {e.errors()[0]['msg']}") from e
    if isinstance(model, TextOverlay):
        updated = updated.model_copy(update={"id": model.id})
    return updated


def apply_update(
    settings: PatternSettings,
    overlays: Sequence[TextOverlay],
    update: Update,
) -> tuple[PatternSettings, list[TextOverlay]]:
    """Return the new (settings, overlays) snapshot; inputs are left untouched."""
    parts = update.path.split(".")
    overlays = list(overlays)

    if parts[0] == "spiral" and len(parts) == 2:
        return _replace(settings, parts[1], update.value), overlays  # type: ignore[return-value]

    if parts[0] == "text" and len(parts) == 3:
        overlay_id, key = parts[1], parts[2]
        value = update.value
        if key in _CLAMPED_TEXT_KEYS:
            try:
                value = clamp01(value)
            except (TypeError, ValueError) as e:
                raise UpdateError(f"Invalid value for {key}: {value!r}") from e
        for i, o in enumerate(overlays):
            if o.id == overlay_id:
                overlays[i] = _replace(o, key, value)  # type: ignore[assignment]
                return settings, overlays
        raise UpdateError(f"No text overlay with id {overlay_id!r}")

    raise UpdateError(f"Malformed update path {update.path!r}")


def apply_updates(
    settings: PatternSettings,
    overlays: Sequence[TextOverlay],
    updates: Iterable[Update],
) -> tuple[PatternSettings, list[TextOverlay]]:
    result = (settings, list(overlays))
    for u in updates:
        result = apply_update(result[0], result[1], u)
    return result
