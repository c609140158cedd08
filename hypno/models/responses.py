"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class TextBoxResponse(BaseModel):
    index: int
    x: float
    y: float
    width: float
    height: float


class LayoutResponse(BaseModel):
    width: int
    height: int
    center: tuple[float, float] = (0.0, 0.0)
    text_boxes: list[TextBoxResponse] = Field(default_factory=list)


class SettingsImportResponse(BaseModel):
    settings: dict[str, Any]
    text_count: int = 0
