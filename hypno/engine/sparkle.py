"""Sparkle field generator — uniform random dots, regenerated on every render."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def generate_sparkles(
    count: int,
    size: float,
    width: float,
    height: float,
    rng: np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """Nx3 array of (x, y, radius) with x∈[0,w), y∈[0,h), radius∈[0,size).

    Pass a seeded ``rng`` for a reproducible field; by default every call
    draws a fresh one, so preview and export differ.
    """
    n = max(0, int(count))
    if n == 0:
        return np.empty((0, 3))
    rng = rng if rng is not None else np.random.default_rng()
    u = rng.random((n, 3))
    return u * np.array([width, height, max(size, 0.0)], dtype=np.float64)
