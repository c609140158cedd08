"""S2 — Pattern strokes. Pattern blend mode + opacity, shared by the secondary set."""

from __future__ import annotations

from hypno.engine.blend import composite
from hypno.engine.context import RenderContext
from hypno.engine.geometry import generate_pattern
from hypno.engine.registry import Stage, stage
from hypno.utils.color import parse_unit_rgba
from hypno.utils.raster import stroke_mask


@stage(
    id="S2",
    layer=Stage.PATTERN,
    dependencies=["S1"],
    description="Stroke spiral / ring geometry with the pattern blend mode",
)
def pattern(ctx: RenderContext) -> None:
    s = ctx.settings
    ctx.pattern_paths = generate_pattern(s, ctx.width, ctx.height)

    for path in ctx.pattern_paths:
        if path.is_empty:
            continue
        mask = stroke_mask(
            path.loops,
            ctx.width,
            ctx.height,
            s.thickness,
            closed=path.closed,
            supersample=ctx.stroke_supersample,
        )
        r, g, b, a = parse_unit_rgba(path.color)
        ctx.surface = composite(ctx.surface, (r, g, b), mask, s.blend_mode, s.opacity * a)
