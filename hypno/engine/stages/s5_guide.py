"""S5 — Guide marker. Ring + crosshair at the pattern center while the center is dragged."""

from __future__ import annotations

from PIL import ImageDraw

from hypno.engine.context import RenderContext
from hypno.engine.registry import Stage, stage
from hypno.utils.color import parse_rgba
from hypno.utils.raster import from_float_rgb, to_float_rgb

GUIDE_RADIUS = 10
GUIDE_ARM = 15
GUIDE_WIDTH = 2


@stage(
    id="S5",
    layer=Stage.GUIDE,
    dependencies=["S4"],
    description="Draw the center-drag guide marker",
)
def guide(ctx: RenderContext) -> None:
    cx, cy = ctx.center_px
    canvas = from_float_rgb(ctx.surface)
    draw = ImageDraw.Draw(canvas)
    color = parse_rgba(ctx.guide_color)[:3]
    draw.ellipse(
        (cx - GUIDE_RADIUS, cy - GUIDE_RADIUS, cx + GUIDE_RADIUS, cy + GUIDE_RADIUS),
        outline=color,
        width=GUIDE_WIDTH,
    )
    draw.line((cx - GUIDE_ARM, cy, cx + GUIDE_ARM, cy), fill=color, width=GUIDE_WIDTH)
    draw.line((cx, cy - GUIDE_ARM, cx, cy + GUIDE_ARM), fill=color, width=GUIDE_WIDTH)
    ctx.surface = to_float_rgb(canvas)
