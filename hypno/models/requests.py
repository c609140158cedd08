"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RenderRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded source image (data URL prefix allowed)")
    settings: dict[str, Any] = Field(
        default_factory=lambda: {"spiral": {}, "text": []},
        description='Exported settings payload: {"spiral": {...}, "text": [...]}',
    )
    seed: int | None = Field(default=None, description="Seed for a reproducible sparkle field")


class LayoutRequest(BaseModel):
    image_width: int = Field(..., gt=0, description="Source image width in pixels")
    image_height: int = Field(..., gt=0, description="Source image height in pixels")
    settings: dict[str, Any] = Field(
        default_factory=lambda: {"spiral": {}, "text": []},
        description="Exported settings payload",
    )


class SettingsImportRequest(BaseModel):
    raw: str = Field(..., description="Settings JSON as pasted by the user")
