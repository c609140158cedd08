"""S4 — Text overlays. Rounded background box + centered lines, always normal/opaque/unfiltered."""

from __future__ import annotations

from PIL import Image, ImageDraw

from hypno.engine.context import RenderContext
from hypno.engine.registry import Stage, stage
from hypno.engine.text_layout import PillowTextMeasurer, TextBox, layout_all
from hypno.models.pattern import TextOverlay
from hypno.utils.color import parse_rgba
from hypno.utils.raster import from_float_rgb, to_float_rgb


def _paint_overlay(
    canvas: Image.Image,
    overlay: TextOverlay,
    tb: TextBox,
    fonts: PillowTextMeasurer,
) -> None:
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)

    x0, y0, x1, y1 = tb.bounds
    if x1 > x0 and y1 > y0:
        radius = max(0.0, min(tb.border_radius, tb.width / 2, tb.height / 2))
        draw.rounded_rectangle((x0, y0, x1, y1), radius=radius, fill=parse_rgba(overlay.background_color))

    font = fonts.font(tb.font_size)
    fill = parse_rgba(overlay.color)
    for line, center in zip(tb.lines, tb.line_centers()):
        if line:
            draw.text(center, line, fill=fill, font=font, anchor="mm")

    canvas.alpha_composite(layer)


@stage(
    id="S4",
    layer=Stage.TEXT,
    dependencies=["S3"],
    description="Paint text labels in sequence order",
)
def text(ctx: RenderContext) -> None:
    fonts = ctx.measurer if isinstance(ctx.measurer, PillowTextMeasurer) else PillowTextMeasurer()
    measurer = ctx.measurer or fonts
    ctx.text_boxes = layout_all(ctx.overlays, ctx.width, ctx.height, measurer, ctx.reference_width)
    if not ctx.overlays:
        return

    canvas = from_float_rgb(ctx.surface).convert("RGBA")
    for overlay, tb in zip(ctx.overlays, ctx.text_boxes):
        _paint_overlay(canvas, overlay, tb, fonts)
    ctx.surface = to_float_rgb(canvas)
