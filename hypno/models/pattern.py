"""Pattern + text overlay data model — the serialized settings schema."""

from __future__ import annotations

import enum
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class BlendMode(str, enum.Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"
    DIFFERENCE = "difference"
    LIGHTER = "lighter"


# Canvas composite-operation names that older exports used on the wire
_BLEND_ALIASES = {"source-over": BlendMode.NORMAL.value}


class PatternSettings(BaseModel):
    """Immutable snapshot of every pattern, canvas and sparkle control."""

    model_config = _WIRE_CONFIG

    center_x: float = 0.5
    center_y: float = 0.5
    spacing: float = 20.0
    thickness: float = 10.0
    rotation: float = 0.0
    color: str = "#000000"
    opacity: float = 0.8
    blend_mode: BlendMode = BlendMode.NORMAL
    is_concentric: bool = False

    # Canvas
    aspect_ratio: str = "original"  # 'original', '1:1', '9:16', '1280:1063', ...

    # Background & quality
    blur: float = 0.0
    anti_aliasing: bool = True

    # Double pattern
    is_double: bool = False
    secondary_color: str = "#ffffff"

    # Deformation
    deformation_amount: float = 0.0
    deformation_frequency: float = 10.0

    # Sparkle effect
    sparkle_amount: int = 500
    sparkle_size: float = 1.5
    sparkle_opacity: float = 0.7
    sparkle_color: str = "#ffffff"
    sparkle_blur: float = 0.0

    @field_validator("blend_mode", mode="before")
    @classmethod
    def _accept_composite_names(cls, value: object) -> object:
        if isinstance(value, str):
            return _BLEND_ALIASES.get(value, value)
        return value

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class TextStyle(BaseModel):
    """Template used when a new text overlay is added."""

    model_config = _WIRE_CONFIG

    text: str = "TG:\nRFV34D"
    font_size: float = 32.0
    color: str = "#000000"
    background_color: str = "#ffffff"
    padding: float = 16.0
    border_radius: float = 12.0
    line_height: float = 1.2


DEFAULT_TEXT_STYLE = TextStyle()


class TextOverlay(TextStyle):
    """A draggable multi-line label anchored by its box center (normalized)."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, exclude=True)
    x: float = 0.5
    y: float = 0.5

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ExportedSettings(BaseModel):
    """Top-level import/export payload: ``{"spiral": {...}, "text": [...]}``."""

    model_config = _WIRE_CONFIG

    spiral: PatternSettings = Field(default_factory=PatternSettings)
    text: list[TextOverlay] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return {
            "spiral": self.spiral.to_wire(),
            "text": [t.to_wire() for t in self.text],
        }
