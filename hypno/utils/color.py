"""Color parsing helpers. No engine imports."""

from __future__ import annotations

import logging

from PIL import ImageColor

logger = logging.getLogger(__name__)

# Invalid CSS colors leave the default (opaque black) in effect.
_FALLBACK = (0, 0, 0, 255)


def parse_rgba(value: str) -> tuple[int, int, int, int]:
    """Parse a CSS color string ('#fff', '#112233', 'white', 'rgba(...)') to 8-bit RGBA."""
    try:
        rgb = ImageColor.getrgb(value.strip())
    except (ValueError, AttributeError):
        logger.debug("Unparseable color %r, using black", value)
        return _FALLBACK
    if len(rgb) == 4:
        return rgb  # type: ignore[return-value]
    return (rgb[0], rgb[1], rgb[2], 255)


def parse_unit_rgba(value: str) -> tuple[float, float, float, float]:
    """Same as parse_rgba but scaled to 0..1 floats."""
    r, g, b, a = parse_rgba(value)
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)
