"""S3 — Sparkles. Additive dots with their own color, opacity and blur."""

from __future__ import annotations

from hypno.engine.blend import composite
from hypno.engine.context import RenderContext
from hypno.engine.registry import Stage, stage
from hypno.engine.sparkle import generate_sparkles
from hypno.models.pattern import BlendMode
from hypno.utils.color import parse_unit_rgba
from hypno.utils.raster import dots_mask


@stage(
    id="S3",
    layer=Stage.SPARKLE,
    dependencies=["S2"],
    description="Scatter random additive sparkle dots",
)
def sparkle(ctx: RenderContext) -> None:
    s = ctx.settings
    ctx.sparkles = generate_sparkles(s.sparkle_amount, s.sparkle_size, ctx.width, ctx.height, ctx.rng)
    mask = dots_mask(
        ctx.sparkles,
        ctx.width,
        ctx.height,
        supersample=ctx.stroke_supersample,
        blur=s.sparkle_blur,
    )
    r, g, b, a = parse_unit_rgba(s.sparkle_color)
    ctx.surface = composite(ctx.surface, (r, g, b), mask, BlendMode.LIGHTER, s.sparkle_opacity * a)
