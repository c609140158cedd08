"""Rasterization utilities — polylines and dots to coverage masks, PIL <-> float arrays.

Masks are drawn at ``supersample``× resolution and box-filtered back down,
which gives anti-aliased edges without a vector backend.
"""

from __future__ import annotations

import base64
import binascii
import io
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw, ImageFilter


def to_float_rgb(image: Image.Image) -> NDArray[np.float32]:
    """HxWx3 float array in 0..1."""
    return np.asarray(image.convert("RGB"), dtype=np.float32) / 255.0


def from_float_rgb(surface: NDArray[np.float32]) -> Image.Image:
    data = np.clip(surface * 255.0 + 0.5, 0, 255).astype(np.uint8)
    return Image.fromarray(data, "RGB")


def _downsample(mask: Image.Image, width: int, height: int) -> NDArray[np.float32]:
    if mask.size != (width, height):
        mask = mask.resize((width, height), Image.BOX)
    return np.asarray(mask, dtype=np.float32) / 255.0


def stroke_mask(
    loops: Sequence[NDArray[np.float64]],
    width: int,
    height: int,
    thickness: float,
    closed: bool = False,
    supersample: int = 1,
) -> NDArray[np.float32]:
    """Coverage mask (HxW, 0..1) for polylines stroked with round joins and caps.

    All loops share one mask, so overlapping segments do not accumulate
    coverage (one path, one stroke).
    """
    s = max(1, int(supersample))
    mask = Image.new("L", (width * s, height * s), 0)
    if thickness <= 0 or not loops:
        return _downsample(mask, width, height)

    draw = ImageDraw.Draw(mask)
    line_width = max(1, int(round(thickness * s)))
    cap = thickness * s / 2.0

    for loop in loops:
        if len(loop) == 0:
            continue
        pts = np.asarray(loop, dtype=np.float64) * s
        if closed and len(pts) > 1:
            pts = np.vstack([pts, pts[:1]])
        coords = [(float(x), float(y)) for x, y in pts]
        if len(coords) > 1:
            draw.line(coords, fill=255, width=line_width, joint="curve")
        if not closed:
            for x, y in (coords[0], coords[-1]):
                draw.ellipse([x - cap, y - cap, x + cap, y + cap], fill=255)

    return _downsample(mask, width, height)


def dots_mask(
    dots: NDArray[np.float64],
    width: int,
    height: int,
    supersample: int = 1,
    blur: float = 0.0,
) -> NDArray[np.float32]:
    """Coverage for filled circles given as an Nx3 array of (x, y, radius).

    Each dot is rasterized (and blurred) on its own patch and the patches are
    summed, so overlapping dots add up and the result can exceed 1.
    """
    s = max(1, int(supersample))
    full_w, full_h = width * s, height * s
    acc = np.zeros((full_h, full_w), dtype=np.float32)
    # Gaussian tail beyond 3 sigma is negligible
    margin = int(math.ceil(blur * s * 3)) if blur > 0 else 0

    for x, y, r in np.asarray(dots, dtype=np.float64).reshape(-1, 3):
        if r <= 0:
            continue
        cx, cy, rr = x * s, y * s, r * s
        x0 = int(math.floor(cx - rr)) - margin - 1
        y0 = int(math.floor(cy - rr)) - margin - 1
        x1 = int(math.ceil(cx + rr)) + margin + 1
        y1 = int(math.ceil(cy + rr)) + margin + 1

        ax0, ay0 = max(x0, 0), max(y0, 0)
        ax1, ay1 = min(x1, full_w), min(y1, full_h)
        if ax0 >= ax1 or ay0 >= ay1:
            continue

        patch = Image.new("L", (x1 - x0, y1 - y0), 0)
        ImageDraw.Draw(patch).ellipse(
            [cx - rr - x0, cy - rr - y0, cx + rr - x0, cy + rr - y0], fill=255
        )
        if blur > 0:
            patch = patch.filter(ImageFilter.GaussianBlur(radius=blur * s))
        data = np.asarray(patch, dtype=np.float32) / 255.0
        acc[ay0:ay1, ax0:ax1] += data[ay0 - y0 : ay1 - y0, ax0 - x0 : ax1 - x0]

    if s > 1:
        acc = acc.reshape(height, s, width, s).mean(axis=(1, 3))
    return acc


def encode_png(image: Image.Image) -> bytes:
    """Encode a rendered surface as PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def decode_image(data: str) -> Image.Image:
    """Decode a base64 (or data URL) image. Raises ValueError when undecodable."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, OSError) as e:
        raise ValueError(f"Could not decode image: {e}") from e
    return image
