"""POST /api/settings/import — validate pasted settings JSON and return it normalized."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from hypno.models.requests import SettingsImportRequest
from hypno.models.responses import SettingsImportResponse
from hypno.serialization.settings_io import SettingsImportError, export_settings, loads_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings")


@router.post("/import", response_model=SettingsImportResponse)
async def import_settings(req: SettingsImportRequest) -> SettingsImportResponse:
    try:
        settings, overlays = loads_settings(req.raw)
    except SettingsImportError as e:
        logger.warning("Rejected settings import: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return SettingsImportResponse(
        settings=export_settings(settings, overlays),
        text_count=len(overlays),
    )
