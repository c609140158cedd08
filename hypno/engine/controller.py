"""Hit-test & drag controller — pointer events → normalized position updates.

States: Idle, DraggingCenter, DraggingText(overlay_id, offset). Exactly one
is active. Pointer coordinates are canvas pixels. The controller never
touches the snapshot itself; it returns Update messages for the session
to apply.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from hypno.engine.canvas import CanvasGeometry
from hypno.engine.text_layout import TextBox, pick_first, pick_topmost
from hypno.engine.updates import Update, clamp01

logger = logging.getLogger(__name__)

CURSOR_GRAB = "grab"
CURSOR_GRABBING = "grabbing"
CURSOR_POSITION = "crosshair"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class DraggingCenter:
    pass


@dataclass(frozen=True)
class DraggingText:
    overlay_id: str
    # Pointer minus the overlay's pixel anchor at drag start
    offset_x: float
    offset_y: float


DragState = Idle | DraggingCenter | DraggingText


def _center_updates(x: float, y: float, canvas: CanvasGeometry) -> list[Update]:
    return [
        Update("spiral.centerX", clamp01(x / canvas.width)),
        Update("spiral.centerY", clamp01(y / canvas.height)),
    ]


class DragController:
    """Pointer state machine for moving the pattern center and text labels."""

    def __init__(self) -> None:
        self.state: DragState = Idle()
        self.hovering_id: str | None = None

    @property
    def is_dragging_center(self) -> bool:
        return isinstance(self.state, DraggingCenter)

    @property
    def dragging_text_id(self) -> str | None:
        return self.state.overlay_id if isinstance(self.state, DraggingText) else None

    @property
    def cursor(self) -> str:
        if isinstance(self.state, DraggingText):
            return CURSOR_GRABBING
        if self.hovering_id is not None:
            return CURSOR_GRAB
        return CURSOR_POSITION

    def pointer_down(
        self,
        x: float,
        y: float,
        canvas: CanvasGeometry,
        boxes: Sequence[TextBox],
    ) -> list[Update]:
        if canvas.width <= 0 or canvas.height <= 0:
            return []

        hit = pick_topmost(list(boxes), x, y)
        if hit is not None:
            ax, ay = hit.center
            self.state = DraggingText(hit.overlay_id, x - ax, y - ay)
            logger.debug("Drag text %s", hit.overlay_id)
            return []

        self.state = DraggingCenter()
        return _center_updates(x, y, canvas)

    def pointer_move(
        self,
        x: float,
        y: float,
        canvas: CanvasGeometry,
        boxes: Sequence[TextBox],
    ) -> list[Update]:
        if canvas.width <= 0 or canvas.height <= 0:
            return []

        state = self.state
        if isinstance(state, DraggingText):
            oid = state.overlay_id
            return [
                Update(f"text.{oid}.x", clamp01((x - state.offset_x) / canvas.width)),
                Update(f"text.{oid}.y", clamp01((y - state.offset_y) / canvas.height)),
            ]
        if isinstance(state, DraggingCenter):
            return _center_updates(x, y, canvas)

        # Idle: hover feedback only
        hit = pick_first(list(boxes), x, y)
        self.hovering_id = hit.overlay_id if hit is not None else None
        return []

    def pointer_up(self) -> list[Update]:
        self.state = Idle()
        return []

    def pointer_leave(self) -> list[Update]:
        return self.pointer_up()

    def forget(self, overlay_id: str) -> None:
        """Drop any reference to a removed overlay."""
        if self.dragging_text_id == overlay_id:
            self.state = Idle()
        if self.hovering_id == overlay_id:
            self.hovering_id = None
