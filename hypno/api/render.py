"""POST /api/render — one full composite of an uploaded photo, returned as PNG."""

from __future__ import annotations

import logging
import time

import numpy as np
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from hypno.dependencies import get_compositor, get_measurer
from hypno.models.requests import RenderRequest
from hypno.serialization.settings_io import SettingsImportError, load_settings
from hypno.utils.raster import decode_image, encode_png, from_float_rgb

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/render", response_class=Response)
async def render(req: RenderRequest) -> Response:
    start = time.perf_counter()

    try:
        settings, overlays = load_settings(req.settings)
    except SettingsImportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        image = decode_image(req.image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    rng = np.random.default_rng(req.seed) if req.seed is not None else None
    ctx = get_compositor().render(settings, overlays, image, rng=rng, measurer=get_measurer())
    if ctx is None:
        raise HTTPException(status_code=400, detail="Image has no drawable area")

    png = encode_png(from_float_rgb(ctx.surface))
    elapsed = (time.perf_counter() - start) * 1000
    return Response(
        content=png,
        media_type="image/png",
        headers={
            "X-Render-Time-Ms": f"{elapsed:.1f}",
            "X-Canvas-Size": f"{ctx.width}x{ctx.height}",
            "X-Stage-Errors": str(len(ctx.errors)),
        },
    )
