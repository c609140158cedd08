"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from hypno.engine.compositor import register_stages
from hypno.engine.registry import get_registry
from hypno.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    register_stages()
    return HealthResponse(
        status="ok",
        version="0.1.0",
        stages_registered=get_registry().count,
    )
