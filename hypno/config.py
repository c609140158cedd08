"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    hypno_env: str = "development"
    hypno_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Canvas
    max_canvas_size: int = 2048

    # Text metrics are authored against this canvas width
    text_reference_width: float = 1080.0
    font_path: str = ""

    # Stroke/sparkle rasterization supersampling factor (1 = off)
    supersample: int = 2

    guide_color: str = "#ffffff"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
