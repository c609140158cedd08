"""S1 — Background. Cover-fitted source photo, blurred, full opacity, normal mode."""

from __future__ import annotations

from hypno.engine.background import fit_background
from hypno.engine.context import RenderContext
from hypno.engine.registry import Stage, stage
from hypno.utils.raster import to_float_rgb


@stage(
    id="S1",
    layer=Stage.BACKGROUND,
    description="Cover-fit and blur the source image",
)
def background(ctx: RenderContext) -> None:
    fitted = fit_background(
        ctx.image,
        ctx.width,
        ctx.height,
        blur=ctx.settings.blur,
        smooth=ctx.settings.anti_aliasing,
    )
    ctx.surface = to_float_rgb(fitted)
