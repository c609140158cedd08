"""Canvas geometry — output raster size from source image size + aspect-ratio token."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ORIGINAL_ASPECT = "original"

# Fixed-size preset: forces an exact pixel size instead of a derived ratio
FIXED_SIZE_TOKEN = "1280:1063"
FIXED_SIZE = (1280, 1063)

DEFAULT_MAX_CANVAS_SIZE = 2048

# Ratios closer than this are considered equal (no crop)
_RATIO_TOLERANCE = 0.01


@dataclass(frozen=True)
class CanvasGeometry:
    width: int
    height: int

    @property
    def diagonal(self) -> float:
        return float((self.width**2 + self.height**2) ** 0.5)


def parse_aspect_ratio(token: str) -> float | None:
    """'W:H' → W/H. 'original' and anything unparseable → None (no constraint)."""
    if token == ORIGINAL_ASPECT:
        return None
    parts = token.split(":")
    if len(parts) != 2:
        logger.debug("Unrecognized aspect ratio %r, using source ratio", token)
        return None
    try:
        w, h = int(parts[0]), int(parts[1])
    except ValueError:
        logger.debug("Unrecognized aspect ratio %r, using source ratio", token)
        return None
    if w <= 0 or h <= 0:
        return None
    return w / h


def compute_canvas_geometry(
    image_width: int,
    image_height: int,
    aspect_ratio: str = ORIGINAL_ASPECT,
    max_size: int = DEFAULT_MAX_CANVAS_SIZE,
) -> CanvasGeometry:
    """Cap the source size to ``max_size`` then crop it to the requested ratio."""
    if aspect_ratio == FIXED_SIZE_TOKEN:
        return CanvasGeometry(*FIXED_SIZE)

    if image_width <= 0 or image_height <= 0:
        return CanvasGeometry(0, 0)

    w = float(image_width)
    h = float(image_height)
    target = parse_aspect_ratio(aspect_ratio) or (w / h)

    if w > max_size or h > max_size:
        ratio = w / h
        if w > h:
            w = float(max_size)
            h = max_size / ratio
        else:
            h = float(max_size)
            w = max_size * ratio

    current = w / h
    if abs(current - target) > _RATIO_TOLERANCE:
        if current > target:
            w = h * target
        else:
            h = w / target

    return CanvasGeometry(max(1, _round_half_up(w)), max(1, _round_half_up(h)))


def _round_half_up(value: float) -> int:
    # .5 rounds up (built-in round() would round half to even)
    return int(math.floor(value + 0.5))
