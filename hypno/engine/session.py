"""EditorSession — one editing session: image, settings snapshot, overlays, pointer state.

Every mutation swaps in a new immutable snapshot; ``render()`` always redraws
the current snapshot from scratch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import numpy as np
from PIL import Image

from hypno.config import settings as config
from hypno.engine.canvas import CanvasGeometry, compute_canvas_geometry
from hypno.engine.compositor import Compositor
from hypno.engine.context import RenderContext
from hypno.engine.controller import DragController, Idle
from hypno.engine.text_layout import PillowTextMeasurer, TextBox, TextMeasurer, layout_all
from hypno.engine.updates import Update, apply_updates
from hypno.models.pattern import DEFAULT_TEXT_STYLE, PatternSettings, TextOverlay, TextStyle
from hypno.serialization.settings_io import dumps_settings, export_settings, loads_settings
from hypno.utils.raster import encode_png, from_float_rgb

logger = logging.getLogger(__name__)

_CENTERED = {"center_x": 0.5, "center_y": 0.5}


class EditorSession:
    """Single-producer editing state. Not thread-safe; render from one thread."""

    def __init__(
        self,
        settings: PatternSettings | None = None,
        measurer: TextMeasurer | None = None,
        rng: np.random.Generator | None = None,
        compositor: Compositor | None = None,
    ) -> None:
        self.settings = settings or PatternSettings()
        self.overlays: list[TextOverlay] = []
        self.text_template: TextStyle = DEFAULT_TEXT_STYLE
        self.image: Image.Image | None = None
        self.canvas = CanvasGeometry(0, 0)
        self.controller = DragController()
        self.measurer: TextMeasurer = measurer or PillowTextMeasurer(config.font_path or None)
        # None → fresh sparkle field on every render
        self.rng = rng
        self.compositor = compositor or Compositor()

    # ── Canvas ──

    def load_image(self, image: Image.Image) -> CanvasGeometry:
        """Adopt a decoded image; recomputes canvas geometry and recenters the pattern."""
        self.image = image
        self._recompute_canvas()
        return self.canvas

    def _recompute_canvas(self) -> None:
        if self.image is None:
            return
        self.canvas = compute_canvas_geometry(
            self.image.width,
            self.image.height,
            self.settings.aspect_ratio,
            config.max_canvas_size,
        )
        self.settings = self.settings.model_copy(update=_CENTERED)
        logger.debug("Canvas %dx%d (%s)", self.canvas.width, self.canvas.height, self.settings.aspect_ratio)

    # ── Snapshot edits ──

    def apply(self, updates: Update | Iterable[Update]) -> None:
        """Apply update messages atomically (all or nothing)."""
        if isinstance(updates, Update):
            updates = [updates]
        updates = list(updates)
        if not updates:
            return
        previous_ratio = self.settings.aspect_ratio
        self.settings, self.overlays = apply_updates(self.settings, self.overlays, updates)
        if self.settings.aspect_ratio != previous_ratio:
            self._recompute_canvas()

    def update_text_template(self, **fields: Any) -> TextStyle:
        """Change the style used by the next add_text()."""
        data = {**self.text_template.model_dump(), **fields}
        self.text_template = TextStyle.model_validate(data)
        return self.text_template

    def add_text(self, text: str | None = None) -> TextOverlay:
        """New overlay from the template, anchored at the canvas center, painted on top."""
        fields = self.text_template.model_dump()
        if text is not None:
            fields["text"] = text
        overlay = TextOverlay(**fields, x=0.5, y=0.5)
        self.overlays = [*self.overlays, overlay]
        return overlay

    def remove_text(self, overlay_id: str) -> None:
        self.overlays = [o for o in self.overlays if o.id != overlay_id]
        self.controller.forget(overlay_id)

    def get_text(self, overlay_id: str) -> TextOverlay | None:
        for o in self.overlays:
            if o.id == overlay_id:
                return o
        return None

    # ── Pointer ──

    def text_boxes(self) -> list[TextBox]:
        return layout_all(
            self.overlays,
            self.canvas.width,
            self.canvas.height,
            self.measurer,
            config.text_reference_width,
        )

    def pointer_down(self, x: float, y: float) -> None:
        self.apply(self.controller.pointer_down(x, y, self.canvas, self.text_boxes()))

    def pointer_move(self, x: float, y: float) -> None:
        # Hover picking only needs boxes while idle
        boxes = self.text_boxes() if isinstance(self.controller.state, Idle) else []
        self.apply(self.controller.pointer_move(x, y, self.canvas, boxes))

    def pointer_up(self) -> None:
        self.apply(self.controller.pointer_up())

    def pointer_leave(self) -> None:
        self.apply(self.controller.pointer_leave())

    @property
    def cursor(self) -> str:
        return self.controller.cursor

    @property
    def hovering_id(self) -> str | None:
        return self.controller.hovering_id

    # ── Output ──

    def render_context(self, rng: np.random.Generator | None = None) -> RenderContext | None:
        return self.compositor.render(
            self.settings,
            self.overlays,
            self.image,
            dragging_center=self.controller.is_dragging_center,
            rng=rng if rng is not None else self.rng,
            measurer=self.measurer,
            canvas=self.canvas,
        )

    def render(self, rng: np.random.Generator | None = None) -> Image.Image | None:
        """Current frame, guide marker included while the center is being dragged."""
        ctx = self.render_context(rng)
        if ctx is None:
            return None
        return from_float_rgb(ctx.surface)

    def export_image(self, rng: np.random.Generator | None = None) -> bytes | None:
        """PNG of a fresh render (new sparkle field, no guide marker)."""
        ctx = self.compositor.render(
            self.settings,
            self.overlays,
            self.image,
            dragging_center=False,
            rng=rng if rng is not None else self.rng,
            measurer=self.measurer,
            canvas=self.canvas,
        )
        if ctx is None:
            return None
        return encode_png(from_float_rgb(ctx.surface))

    # ── Settings import/export ──

    def export_settings(self) -> dict[str, Any]:
        return export_settings(self.settings, self.overlays)

    def export_settings_json(self) -> str:
        return dumps_settings(self.settings, self.overlays)

    def import_settings(self, raw: str) -> None:
        """Replace settings + overlays from JSON. On SettingsImportError nothing changes.

        Text fields the payload omits come from the default style, never from
        the new-text template.
        """
        previous_ratio = self.settings.aspect_ratio
        settings, overlays = loads_settings(raw, self.settings)
        self.settings = settings
        self.overlays = overlays
        self.controller = DragController()
        if settings.aspect_ratio != previous_ratio:
            self._recompute_canvas()
        logger.info("Imported settings with %d text overlays", len(overlays))
