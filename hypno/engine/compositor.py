"""Compositor — runs the paint stages in order over a cleared surface."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Sequence

import numpy as np
from PIL import Image

from hypno.config import settings as config
from hypno.engine.canvas import CanvasGeometry, compute_canvas_geometry
from hypno.engine.context import RenderContext
from hypno.engine.registry import StageRegistry, get_registry
from hypno.engine.text_layout import TextMeasurer
from hypno.models.pattern import PatternSettings, TextOverlay
from hypno.utils.raster import from_float_rgb

logger = logging.getLogger(__name__)

_STAGE_PACKAGE = "hypno.engine.stages"


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    package = importlib.import_module(_STAGE_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{_STAGE_PACKAGE}.{module_name}")


class Compositor:
    """Orchestrates the compositing stages."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        supersample: int | None = None,
    ) -> None:
        if registry is None:
            register_stages()
            registry = get_registry()
        self.registry = registry
        self.supersample = supersample if supersample is not None else config.supersample

    def run(self, ctx: RenderContext) -> RenderContext:
        """Run every stage on the given context. A failing stage is recorded, not raised."""
        start = time.perf_counter()
        skip_ids = self._gate(ctx)

        for spec in self.registry.resolve_order():
            if spec.id in skip_ids:
                continue
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_stages.append(spec.id)
                logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        logger.info(
            "Render %dx%d: %d stages (%d skipped) in %.0fms",
            ctx.width,
            ctx.height,
            len(ctx.completed_stages),
            len(skip_ids),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def _gate(self, ctx: RenderContext) -> set[str]:
        """Stages with nothing to draw for this snapshot."""
        skip: set[str] = set()
        if ctx.settings.sparkle_amount <= 0:
            skip.add("S3")
        # Guide only mid-drag, so exports never carry it
        if not ctx.dragging_center:
            skip.add("S5")
        return skip

    def render(
        self,
        settings: PatternSettings,
        overlays: Sequence[TextOverlay],
        image: Image.Image | None,
        *,
        dragging_center: bool = False,
        rng: np.random.Generator | None = None,
        measurer: TextMeasurer | None = None,
        canvas: CanvasGeometry | None = None,
    ) -> RenderContext | None:
        """Full redraw of one snapshot. No decoded image → nothing to draw (None)."""
        if image is None:
            return None
        if canvas is None:
            canvas = compute_canvas_geometry(
                image.width, image.height, settings.aspect_ratio, config.max_canvas_size
            )
        if canvas.width <= 0 or canvas.height <= 0:
            return None

        ctx = RenderContext(
            settings=settings,
            image=image,
            width=canvas.width,
            height=canvas.height,
            overlays=list(overlays),
            measurer=measurer,
            rng=rng,
            dragging_center=dragging_center,
            supersample=self.supersample,
            reference_width=config.text_reference_width,
            guide_color=config.guide_color,
        )
        return self.run(ctx)


def render(
    settings: PatternSettings,
    overlays: Sequence[TextOverlay],
    image: Image.Image | None,
    *,
    dragging_center: bool = False,
    rng: np.random.Generator | None = None,
    measurer: TextMeasurer | None = None,
    canvas: CanvasGeometry | None = None,
) -> Image.Image | None:
    """render(settings, overlays, image) -> raster. Pure apart from the sparkle random source."""
    ctx = Compositor().render(
        settings,
        overlays,
        image,
        dragging_center=dragging_center,
        rng=rng,
        measurer=measurer,
        canvas=canvas,
    )
    if ctx is None:
        return None
    return from_float_rgb(ctx.surface)
