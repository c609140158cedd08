"""Tests for API endpoints."""

from __future__ import annotations

import base64
import io
import logging

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hypno.config import settings
from hypno.main import app, create_app
from tests.conftest import solid_image


client = TestClient(app)


def _b64(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 5


def test_render_png():
    response = client.post(
        "/api/render",
        json={
            "image": _b64(solid_image(120, 80)),
            "settings": {"spiral": {"aspectRatio": "1:1", "sparkleAmount": 50}, "text": [{"text": "hi"}]},
            "seed": 1,
        },
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.headers["x-canvas-size"] == "80x80"
    assert response.headers["x-stage-errors"] == "0"
    assert Image.open(io.BytesIO(response.content)).size == (80, 80)


def test_render_accepts_data_url():
    response = client.post(
        "/api/render",
        json={"image": "data:image/png;base64," + _b64(solid_image(10, 10)), "settings": {"spiral": {}, "text": []}},
    )
    assert response.status_code == 200


def test_render_is_reproducible_with_seed():
    body = {"image": _b64(solid_image(60, 60)), "settings": {"spiral": {}, "text": []}, "seed": 9}
    a = client.post("/api/render", json=body)
    b = client.post("/api/render", json=body)
    assert a.content == b.content


def test_render_rejects_bad_settings():
    response = client.post(
        "/api/render",
        json={"image": _b64(solid_image(10, 10)), "settings": {"spiral": {"spacing": "x"}, "text": []}},
    )
    assert response.status_code == 422


def test_render_rejects_bad_image():
    response = client.post("/api/render", json={"image": "not an image!"})
    assert response.status_code == 400


def test_layout():
    response = client.post(
        "/api/layout",
        json={
            "image_width": 1080,
            "image_height": 1920,
            "settings": {"spiral": {"aspectRatio": "1:1", "centerX": 0.25}, "text": [{"text": "a"}, {"x": 0.2}]},
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert (data["width"], data["height"]) == (1080, 1080)
    assert data["center"] == [270.0, 540.0]
    assert [b["index"] for b in data["text_boxes"]] == [0, 1]
    first = data["text_boxes"][0]
    assert first["x"] + first["width"] / 2 == pytest.approx(540.0)


def test_layout_rejects_zero_size():
    response = client.post("/api/layout", json={"image_width": 0, "image_height": 10})
    assert response.status_code == 422


def test_settings_import():
    raw = '{"spiral": {"spacing": 44}, "text": [{"text": "yo"}]}'
    response = client.post("/api/settings/import", json={"raw": raw})
    assert response.status_code == 200
    data = response.json()
    assert data["text_count"] == 1
    assert data["settings"]["spiral"]["spacing"] == 44
    assert data["settings"]["text"][0]["fontSize"] == 32


def test_settings_import_rejects_garbage():
    response = client.post("/api/settings/import", json={"raw": "{oops"})
    assert response.status_code == 422
    assert "Error parsing JSON" in response.json()["detail"]


def test_startup_logs_environment(caplog):
    caplog.set_level(logging.INFO, logger="hypno.main")
    create_app()
    assert f"env={settings.hypno_env}" in caplog.text
    assert "5 stages" in caplog.text
