"""POST /api/layout — canvas geometry and text boxes, for client-side picking."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from hypno.config import settings as config
from hypno.dependencies import get_measurer
from hypno.engine.canvas import compute_canvas_geometry
from hypno.engine.text_layout import layout_all
from hypno.models.requests import LayoutRequest
from hypno.models.responses import LayoutResponse, TextBoxResponse
from hypno.serialization.settings_io import SettingsImportError, load_settings

router = APIRouter()


@router.post("/layout", response_model=LayoutResponse)
async def layout(req: LayoutRequest) -> LayoutResponse:
    try:
        settings, overlays = load_settings(req.settings)
    except SettingsImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    canvas = compute_canvas_geometry(
        req.image_width, req.image_height, settings.aspect_ratio, config.max_canvas_size
    )
    boxes = layout_all(overlays, canvas.width, canvas.height, get_measurer(), config.text_reference_width)

    return LayoutResponse(
        width=canvas.width,
        height=canvas.height,
        center=(settings.center_x * canvas.width, settings.center_y * canvas.height),
        text_boxes=[
            TextBoxResponse(index=i, x=tb.x, y=tb.y, width=tb.width, height=tb.height)
            for i, tb in enumerate(boxes)
        ],
    )
