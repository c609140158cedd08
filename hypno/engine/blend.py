"""Blend-mode compositing on float RGB surfaces (W3C Compositing Level 1 formulas).

Backdrop is always opaque, so source-over with a blend function reduces to
``Cb·(1-αs) + B(Cb, Cs)·αs``. ``lighter`` is plain additive (plus).
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from hypno.models.pattern import BlendMode

Array = NDArray[np.float32]


def _multiply(cb: Array, cs: Array) -> Array:
    return cb * cs


def _screen(cb: Array, cs: Array) -> Array:
    return cb + cs - cb * cs


def _hard_light(cb: Array, cs: Array) -> Array:
    return np.where(cs <= 0.5, _multiply(cb, 2 * cs), _screen(cb, 2 * cs - 1))


def _overlay(cb: Array, cs: Array) -> Array:
    return _hard_light(cs, cb)


def _soft_light(cb: Array, cs: Array) -> Array:
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1 - 2 * cs) * cb * (1 - cb),
        cb + (2 * cs - 1) * (d - cb),
    )


BLEND_FUNCTIONS: dict[BlendMode, Callable[[Array, Array], Array]] = {
    BlendMode.NORMAL: lambda cb, cs: cs,
    BlendMode.MULTIPLY: _multiply,
    BlendMode.SCREEN: _screen,
    BlendMode.OVERLAY: _overlay,
    BlendMode.DARKEN: np.minimum,
    BlendMode.LIGHTEN: np.maximum,
    BlendMode.HARD_LIGHT: _hard_light,
    BlendMode.SOFT_LIGHT: _soft_light,
    BlendMode.DIFFERENCE: lambda cb, cs: np.abs(cb - cs),
}


def composite(
    backdrop: Array,
    color: tuple[float, float, float],
    coverage: Array,
    mode: BlendMode = BlendMode.NORMAL,
    alpha: float = 1.0,
) -> Array:
    """Composite a solid ``color`` through a coverage mask onto ``backdrop``.

    Args:
        backdrop: HxWx3 float surface (0..1), not modified.
        color: source RGB (0..1).
        coverage: HxW mask, e.g. an anti-aliased stroke. Capped at 1 except
            for ``lighter``, where summed coverage (overlapping dots) adds up.
        mode: blend mode applied where the source covers the backdrop.
        alpha: global alpha multiplied into the coverage.

    Returns:
        New HxWx3 surface.
    """
    alpha = float(np.clip(alpha, 0.0, 1.0))
    cs = np.asarray(color, dtype=np.float32).reshape(1, 1, 3)

    if mode == BlendMode.LIGHTER:
        # Summed coverage above 1 keeps adding; only the result is clipped
        a = (np.maximum(coverage, 0.0) * alpha)[..., None]
        return np.clip(backdrop + cs * a, 0.0, 1.0).astype(np.float32)

    a = (np.clip(coverage, 0.0, 1.0) * alpha)[..., None]

    blended = BLEND_FUNCTIONS[mode](backdrop, np.broadcast_to(cs, backdrop.shape))
    out = backdrop * (1 - a) + blended * a
    return np.clip(out, 0.0, 1.0).astype(np.float32)
