"""RenderContext — the single mutable state object flowing through all stages of one render.

Inputs (settings, overlays, image) are a snapshot and are never mutated;
stages only replace ``surface`` and fill the derived fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from hypno.engine.geometry import PatternPath
from hypno.engine.text_layout import TextBox, TextMeasurer
from hypno.models.pattern import PatternSettings, TextOverlay


@dataclass
class RenderContext:
    """Shared state for one full redraw."""

    settings: PatternSettings
    image: Image.Image
    width: int
    height: int
    overlays: list[TextOverlay] = field(default_factory=list)
    measurer: TextMeasurer | None = None
    rng: np.random.Generator | None = None
    # Center-drag gesture active: draw the guide marker
    dragging_center: bool = False
    supersample: int = 1
    reference_width: float = 1080.0
    guide_color: str = "#ffffff"

    # HxWx3 float RGB, starts cleared (transparent black composited on nothing)
    surface: NDArray[np.float32] | None = None

    # --- Derived per stage ---
    pattern_paths: list[PatternPath] = field(default_factory=list)
    sparkles: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))
    text_boxes: list[TextBox] = field(default_factory=list)

    # --- Render metadata ---
    completed_stages: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.surface is None:
            self.surface = np.zeros((self.height, self.width, 3), dtype=np.float32)

    @property
    def diagonal(self) -> float:
        return float(np.sqrt(self.width**2 + self.height**2))

    @property
    def center_px(self) -> tuple[float, float]:
        return (self.settings.center_x * self.width, self.settings.center_y * self.height)

    @property
    def stroke_supersample(self) -> int:
        """Anti-aliasing off → draw at native resolution (hard edges)."""
        return self.supersample if self.settings.anti_aliasing else 1
