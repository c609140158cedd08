"""Tests for canvas geometry (aspect ratio, size cap, fixed preset)."""

from __future__ import annotations

import pytest

from hypno.engine.canvas import CanvasGeometry, compute_canvas_geometry, parse_aspect_ratio


def test_original_keeps_source_size():
    assert compute_canvas_geometry(800, 600, "original") == CanvasGeometry(800, 600)


def test_large_source_is_capped_preserving_ratio():
    assert compute_canvas_geometry(4000, 3000, "original") == CanvasGeometry(2048, 1536)


def test_portrait_cap():
    assert compute_canvas_geometry(1000, 5000, "original") == CanvasGeometry(410, 2048)


def test_square_crop_of_landscape():
    assert compute_canvas_geometry(800, 600, "1:1") == CanvasGeometry(600, 600)


def test_widescreen_crop_rounds_half_up():
    # 1000 / (16/9) = 562.5
    assert compute_canvas_geometry(1000, 1000, "16:9") == CanvasGeometry(1000, 563)


def test_story_ratio_on_landscape():
    geo = compute_canvas_geometry(1920, 1080, "9:16")
    assert geo.height == 1080
    assert geo.width == 608  # 1080 * 9/16 = 607.5


def test_fixed_preset_forces_exact_size():
    assert compute_canvas_geometry(300, 300, "1280:1063") == CanvasGeometry(1280, 1063)
    assert compute_canvas_geometry(5000, 100, "1280:1063") == CanvasGeometry(1280, 1063)


def test_nearly_equal_ratio_is_not_cropped():
    assert compute_canvas_geometry(1001, 1000, "1:1") == CanvasGeometry(1001, 1000)


@pytest.mark.parametrize("token", ["bogus", "3:0", "a:b", "1:2:3", ""])
def test_unrecognized_token_falls_back_to_source_ratio(token):
    assert parse_aspect_ratio(token) is None
    assert compute_canvas_geometry(800, 600, token) == CanvasGeometry(800, 600)


def test_parse_ratio():
    assert parse_aspect_ratio("original") is None
    assert parse_aspect_ratio("4:3") == pytest.approx(4 / 3)


def test_diagonal():
    assert CanvasGeometry(300, 400).diagonal == pytest.approx(500)
