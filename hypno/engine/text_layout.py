"""Text layout engine — pixel bounding boxes for multi-line labels.

The box computed here is used both to paint a label and to pick it with
the pointer, so the two can never disagree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from PIL import ImageFont
from shapely.geometry import Point, box

from hypno.models.pattern import TextOverlay

logger = logging.getLogger(__name__)

# Text metrics are authored against a 1080px-wide canvas
REFERENCE_WIDTH = 1080.0

# Heavy sans-serif faces tried in order when no font path is configured
_FONT_HINTS = [
    "/usr/share/fonts/truetype/inter/Inter-ExtraBold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
]


class TextMeasurer(Protocol):
    def measure(self, text: str, font_size: float) -> float:
        """Rendered advance width of ``text`` in pixels."""
        ...


def find_font(explicit_path: str | None = None) -> str | None:
    if explicit_path and Path(explicit_path).exists():
        return explicit_path
    for p in _FONT_HINTS:
        if Path(p).exists():
            return p
    return None


@lru_cache(maxsize=64)
def load_font(font_path: str | None, size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if font_path:
        try:
            return ImageFont.truetype(font_path, size=size)
        except OSError as e:
            logger.warning("Could not load font %s: %s", font_path, e)
    return ImageFont.load_default(size=size)


class PillowTextMeasurer:
    """Measures with the same font the text stage paints with."""

    def __init__(self, font_path: str | None = None) -> None:
        self.font_path = find_font(font_path)

    def font(self, font_size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        return load_font(self.font_path, max(font_size, 1.0))

    def measure(self, text: str, font_size: float) -> float:
        if not text:
            return 0.0
        return float(self.font(font_size).getlength(text))


@dataclass(frozen=True)
class TextBox:
    """Pixel-space bounding box of a laid-out overlay (top-left origin)."""

    overlay_id: str
    x: float
    y: float
    width: float
    height: float
    lines: tuple[str, ...] = ()
    font_size: float = 0.0
    padding: float = 0.0
    border_radius: float = 0.0
    line_advance: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def contains(self, px: float, py: float) -> bool:
        """Inclusive of the edges."""
        return box(*self.bounds).covers(Point(px, py))

    def line_centers(self) -> list[tuple[float, float]]:
        """Center point of each text line, top to bottom."""
        cx = self.x + self.width / 2
        top = self.y + self.padding + self.line_advance / 2
        return [(cx, top + i * self.line_advance) for i in range(len(self.lines))]


def layout_text(
    overlay: TextOverlay,
    canvas_width: float,
    canvas_height: float,
    measurer: TextMeasurer,
    reference_width: float = REFERENCE_WIDTH,
) -> TextBox:
    lines = overlay.lines
    scale = canvas_width / reference_width if reference_width > 0 else 1.0
    font_size = overlay.font_size * scale
    padding = overlay.padding * scale

    max_width = max((measurer.measure(line, font_size) for line in lines), default=0.0)

    line_advance = font_size * overlay.line_height
    # No trailing inter-line gap after the last line
    block_height = line_advance * len(lines) - font_size * (overlay.line_height - 1)

    width = max_width + padding * 2
    height = block_height + padding * 2
    return TextBox(
        overlay_id=overlay.id,
        x=overlay.x * canvas_width - width / 2,
        y=overlay.y * canvas_height - height / 2,
        width=width,
        height=height,
        lines=tuple(lines),
        font_size=font_size,
        padding=padding,
        border_radius=overlay.border_radius * scale,
        line_advance=line_advance,
    )


def layout_all(
    overlays: list[TextOverlay],
    canvas_width: float,
    canvas_height: float,
    measurer: TextMeasurer,
    reference_width: float = REFERENCE_WIDTH,
) -> list[TextBox]:
    """Boxes in paint order (later = on top)."""
    return [layout_text(o, canvas_width, canvas_height, measurer, reference_width) for o in overlays]


def pick_topmost(boxes: list[TextBox], px: float, py: float) -> TextBox | None:
    """Topmost box under the pointer (reverse paint order)."""
    for tb in reversed(boxes):
        if tb.contains(px, py):
            return tb
    return None


def pick_first(boxes: list[TextBox], px: float, py: float) -> TextBox | None:
    for tb in boxes:
        if tb.contains(px, py):
            return tb
    return None
