"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from hypno.engine.session import EditorSession
from hypno.models.pattern import PatternSettings


class FixedWidthMeasurer:
    """Deterministic text metrics: every glyph is half the font size wide."""

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * font_size * 0.5


# Settings with the pattern and sparkles switched off — background only
QUIET_SETTINGS = PatternSettings(opacity=0.0, sparkle_amount=0)


def solid_image(width: int, height: int, color: tuple[int, int, int] = (128, 128, 128)) -> Image.Image:
    return Image.new("RGB", (width, height), color)


def split_image(width: int, height: int) -> Image.Image:
    """Left half red, right half blue."""
    img = Image.new("RGB", (width, height), (0, 0, 255))
    img.paste((255, 0, 0), (0, 0, width // 2, height))
    return img


@pytest.fixture
def measurer() -> FixedWidthMeasurer:
    return FixedWidthMeasurer()


@pytest.fixture
def gray_image() -> Image.Image:
    return solid_image(400, 300)


@pytest.fixture
def session(measurer: FixedWidthMeasurer, gray_image: Image.Image) -> EditorSession:
    s = EditorSession(settings=QUIET_SETTINGS, measurer=measurer, rng=np.random.default_rng(7))
    s.load_image(gray_image)
    return s
