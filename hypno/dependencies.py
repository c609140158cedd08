"""Shared engine collaborators for the API handlers."""

from __future__ import annotations

from functools import lru_cache

from hypno.config import settings
from hypno.engine.compositor import Compositor
from hypno.engine.text_layout import PillowTextMeasurer


@lru_cache(maxsize=1)
def get_compositor() -> Compositor:
    return Compositor()


@lru_cache(maxsize=1)
def get_measurer() -> PillowTextMeasurer:
    return PillowTextMeasurer(settings.font_path or None)
