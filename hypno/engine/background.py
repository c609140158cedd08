"""Background fitter — centered "cover" crop of the source photo into the canvas."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageFilter


@dataclass(frozen=True)
class CropBox:
    """Source sub-rectangle to sample (float pixels)."""

    sx: float
    sy: float
    width: float
    height: float

    def as_box(self) -> tuple[float, float, float, float]:
        """(left, upper, right, lower) for PIL resize(box=...)."""
        return (self.sx, self.sy, self.sx + self.width, self.sy + self.height)


def fit_cover(src_w: float, src_h: float, dst_w: float, dst_h: float) -> CropBox:
    """Crop the source to the destination ratio without letterboxing.

    Wider source → keep full height, trim left/right. Otherwise keep full
    width, trim top/bottom. The crop is centered.
    """
    if src_w <= 0 or src_h <= 0 or dst_w <= 0 or dst_h <= 0:
        return CropBox(0.0, 0.0, float(max(src_w, 0)), float(max(src_h, 0)))

    img_ratio = src_w / src_h
    canvas_ratio = dst_w / dst_h

    if img_ratio > canvas_ratio:
        s_height = float(src_h)
        s_width = s_height * canvas_ratio
        return CropBox((src_w - s_width) / 2, 0.0, s_width, s_height)

    s_width = float(src_w)
    s_height = s_width / canvas_ratio
    return CropBox(0.0, (src_h - s_height) / 2, s_width, s_height)


def fit_background(
    image: Image.Image,
    width: int,
    height: int,
    blur: float = 0.0,
    smooth: bool = True,
) -> Image.Image:
    """Cover-fit ``image`` to width×height, then blur the result (background only)."""
    crop = fit_cover(image.width, image.height, width, height)
    resample = Image.LANCZOS if smooth else Image.NEAREST
    fitted = image.convert("RGB").resize((width, height), resample=resample, box=crop.as_box())
    if blur > 0:
        fitted = fitted.filter(ImageFilter.GaussianBlur(radius=blur))
    return fitted
