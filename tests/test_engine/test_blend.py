"""Tests for blend-mode compositing."""

from __future__ import annotations

import numpy as np
import pytest

from hypno.engine.blend import composite
from hypno.models.pattern import BlendMode


def _surface(value: float) -> np.ndarray:
    return np.full((2, 2, 3), value, dtype=np.float32)


FULL = np.ones((2, 2), dtype=np.float32)


def _pixel(out: np.ndarray) -> float:
    return float(out[0, 0, 0])


@pytest.mark.parametrize(
    "mode, cb, cs, expected",
    [
        (BlendMode.NORMAL, 0.2, 0.6, 0.6),
        (BlendMode.MULTIPLY, 0.5, 0.5, 0.25),
        (BlendMode.SCREEN, 0.5, 0.5, 0.75),
        (BlendMode.DARKEN, 0.3, 0.7, 0.3),
        (BlendMode.LIGHTEN, 0.3, 0.7, 0.7),
        (BlendMode.DIFFERENCE, 0.8, 0.3, 0.5),
        (BlendMode.OVERLAY, 0.25, 1.0, 0.5),
        (BlendMode.HARD_LIGHT, 1.0, 0.25, 0.5),
        (BlendMode.SOFT_LIGHT, 0.5, 0.5, 0.5),
        (BlendMode.LIGHTER, 0.5, 0.25, 0.75),
    ],
)
def test_blend_functions(mode, cb, cs, expected):
    out = composite(_surface(cb), (cs, cs, cs), FULL, mode)
    assert _pixel(out) == pytest.approx(expected, abs=1e-6)


def test_alpha_mixes_with_backdrop():
    out = composite(_surface(0.0), (1.0, 1.0, 1.0), FULL, BlendMode.NORMAL, alpha=0.8)
    assert _pixel(out) == pytest.approx(0.8)


def test_zero_coverage_leaves_backdrop():
    backdrop = _surface(0.4)
    out = composite(backdrop, (1.0, 0.0, 0.0), np.zeros((2, 2), dtype=np.float32), BlendMode.MULTIPLY)
    assert np.allclose(out, backdrop)


def test_lighter_is_additive_and_clipped():
    out = composite(_surface(0.9), (1.0, 1.0, 1.0), FULL, BlendMode.LIGHTER, alpha=0.5)
    assert _pixel(out) == pytest.approx(1.0)


def test_backdrop_not_modified():
    backdrop = _surface(0.5)
    composite(backdrop, (0.0, 0.0, 0.0), FULL)
    assert np.allclose(backdrop, 0.5)


def test_source_over_alias_maps_to_normal():
    from hypno.models.pattern import PatternSettings

    assert PatternSettings(blend_mode="source-over").blend_mode is BlendMode.NORMAL


def test_lighter_adds_coverage_above_one():
    coverage = np.full((2, 2), 2.0, dtype=np.float32)
    out = composite(_surface(0.0), (1.0, 1.0, 1.0), coverage, BlendMode.LIGHTER, alpha=0.3)
    assert _pixel(out) == pytest.approx(0.6)


def test_other_modes_cap_coverage_at_one():
    coverage = np.full((2, 2), 2.0, dtype=np.float32)
    out = composite(_surface(0.0), (1.0, 1.0, 1.0), coverage, BlendMode.NORMAL, alpha=0.3)
    assert _pixel(out) == pytest.approx(0.3)
