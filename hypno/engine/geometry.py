"""Geometry generator — spiral / concentric ripple polylines in pixel space.

Pure and deterministic: same settings + canvas size → same vertices.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from hypno.models.pattern import PatternSettings

logger = logging.getLogger(__name__)

# 1° angular resolution for rings
RING_SAMPLES = 360

# Parametric step for the Archimedean spiral (radians)
SPIRAL_STEP = 0.1

# Radius coupling for ring deformation: the ripple phase shifts outward
_RING_PHASE_PER_PX = 0.1

# Spiral deformation runs at a tenth of the nominal frequency
_SPIRAL_FREQ_SCALE = 0.1


@dataclass
class PatternPath:
    """One stroked set: every loop is an Nx2 array of (x, y) pixel vertices."""

    loops: list[NDArray[np.float64]] = field(default_factory=list)
    closed: bool = False
    color: str = "#000000"
    secondary: bool = False

    @property
    def num_vertices(self) -> int:
        return sum(len(loop) for loop in self.loops)

    @property
    def is_empty(self) -> bool:
        return self.num_vertices == 0


def ring_radii(spacing: float, max_radius: float, offset: float = 0.0) -> NDArray[np.float64]:
    """Ring radii ``offset + k*spacing`` below ``max_radius``, dropping r <= 0."""
    if not (spacing > 0 and math.isfinite(spacing)):
        return np.empty(0)
    radii = np.arange(offset, max_radius, spacing, dtype=np.float64)
    return radii[radii > 0]


def concentric_loops(
    cx: float,
    cy: float,
    max_radius: float,
    spacing: float,
    deformation_amount: float = 0.0,
    deformation_frequency: float = 0.0,
    offset: float = 0.0,
) -> list[NDArray[np.float64]]:
    angles = np.arange(RING_SAMPLES, dtype=np.float64) * (2 * np.pi / RING_SAMPLES)
    cos_a = np.cos(angles)
    sin_a = np.sin(angles)

    loops: list[NDArray[np.float64]] = []
    for r in ring_radii(spacing, max_radius, offset):
        deform = deformation_amount * np.sin(angles * deformation_frequency + r * _RING_PHASE_PER_PX)
        rr = r + deform
        loops.append(np.column_stack([cx + rr * cos_a, cy + rr * sin_a]))
    return loops


def spiral_polyline(
    cx: float,
    cy: float,
    max_radius: float,
    spacing: float,
    rotation: float = 0.0,
    deformation_amount: float = 0.0,
    deformation_frequency: float = 0.0,
) -> NDArray[np.float64]:
    """Archimedean spiral r = bθ, b = spacing/2π, sampled until r reaches ``max_radius``."""
    if not (spacing > 0 and math.isfinite(spacing)):
        return np.empty((0, 2))
    b = spacing / (2 * math.pi)
    max_theta = max_radius / b

    theta = np.arange(0.0, max_theta, SPIRAL_STEP, dtype=np.float64)
    r = b * theta + deformation_amount * np.sin(theta * deformation_frequency * _SPIRAL_FREQ_SCALE)
    angle = theta + rotation
    return np.column_stack([cx + r * np.cos(angle), cy + r * np.sin(angle)])


def _build_set(settings: PatternSettings, width: int, height: int, secondary: bool) -> PatternPath:
    cx = settings.center_x * width
    cy = settings.center_y * height
    max_radius = math.sqrt(width**2 + height**2)
    color = settings.secondary_color if secondary else settings.color

    if settings.is_concentric:
        offset = settings.spacing / 2 if secondary else 0.0
        loops = concentric_loops(
            cx, cy, max_radius, settings.spacing,
            settings.deformation_amount, settings.deformation_frequency,
            offset=offset,
        )
        return PatternPath(loops=loops, closed=True, color=color, secondary=secondary)

    rotation = settings.rotation + (math.pi if secondary else 0.0)
    poly = spiral_polyline(
        cx, cy, max_radius, settings.spacing, rotation,
        settings.deformation_amount, settings.deformation_frequency,
    )
    loops = [poly] if len(poly) else []
    return PatternPath(loops=loops, closed=False, color=color, secondary=secondary)


def generate_pattern(settings: PatternSettings, width: int, height: int) -> list[PatternPath]:
    """Primary set, plus an interleaved secondary set when ``is_double`` is on."""
    paths = [_build_set(settings, width, height, secondary=False)]
    if settings.is_double:
        paths.append(_build_set(settings, width, height, secondary=True))
    logger.debug(
        "Pattern %s: %s vertices",
        "rings" if settings.is_concentric else "spiral",
        [p.num_vertices for p in paths],
    )
    return paths
