"""Tests for the cover-fit background."""

from __future__ import annotations

import pytest

from hypno.engine.background import CropBox, fit_background, fit_cover
from tests.conftest import split_image


def test_wider_source_crops_left_and_right():
    assert fit_cover(200, 100, 100, 100) == CropBox(50, 0, 100, 100)


def test_taller_source_crops_top_and_bottom():
    assert fit_cover(100, 200, 100, 100) == CropBox(0, 50, 100, 100)


def test_same_ratio_uses_whole_image():
    assert fit_cover(400, 300, 800, 600) == CropBox(0, 0, 400, 300)


def test_crop_matches_canvas_ratio():
    crop = fit_cover(1920, 1080, 1080, 1350)
    assert crop.width / crop.height == pytest.approx(1080 / 1350)
    assert crop.sx == pytest.approx((1920 - crop.width) / 2)
    assert crop.height == 1080


def test_degenerate_target_does_not_divide_by_zero():
    crop = fit_cover(100, 100, 0, 50)
    assert crop == CropBox(0, 0, 100, 100)


def test_fit_background_fills_canvas_with_centered_crop():
    img = split_image(200, 100)
    out = fit_background(img, 100, 100)
    assert out.size == (100, 100)
    assert out.mode == "RGB"
    # Crop spans x 50..150 of the source: left half red, right half blue
    r, _, b = out.getpixel((10, 50))
    assert r >= 250 and b <= 5
    r, _, b = out.getpixel((90, 50))
    assert r <= 5 and b >= 250


def test_blur_softens_the_edge():
    img = split_image(200, 100)
    sharp = fit_background(img, 100, 100, blur=0, smooth=False)
    blurred = fit_background(img, 100, 100, blur=4, smooth=False)
    assert sharp.getpixel((49, 50)) == (255, 0, 0)
    r, _, b = blurred.getpixel((49, 50))
    assert 0 < b < 255 and r < 255
