"""Tests for the editing session (snapshot updates, pointer flow, import/export)."""

from __future__ import annotations

import io
import json

import numpy as np
import pytest
from PIL import Image

from hypno.engine.canvas import CanvasGeometry
from hypno.engine.session import EditorSession
from hypno.engine.updates import Update, UpdateError
from hypno.models.pattern import BlendMode
from hypno.serialization.settings_io import SettingsImportError


def test_load_image_sets_canvas_and_centers(session):
    assert session.canvas == CanvasGeometry(400, 300)
    assert (session.settings.center_x, session.settings.center_y) == (0.5, 0.5)


def test_snapshot_is_replaced_not_mutated(session):
    before = session.settings
    session.apply(Update("spiral.spacing", 42))
    assert before.spacing == 20
    assert session.settings.spacing == 42


def test_invalid_update_leaves_snapshot(session):
    before = session.settings
    with pytest.raises(UpdateError):
        session.apply([Update("spiral.spacing", 33), Update("spiral.noSuchField", 1)])
    assert session.settings is before


def test_aspect_ratio_change_recomputes_canvas_and_recenters(session):
    session.apply(Update("spiral.centerX", 0.1))
    session.apply(Update("spiral.aspectRatio", "1:1"))
    assert session.canvas == CanvasGeometry(300, 300)
    assert session.settings.center_x == 0.5


def test_add_text_uses_template_at_center(session):
    session.update_text_template(font_size=48, background_color="#00ff00")
    overlay = session.add_text()
    assert (overlay.x, overlay.y) == (0.5, 0.5)
    assert overlay.font_size == 48
    assert overlay.text == "TG:\nRFV34D"
    assert session.add_text("second").text == "second"
    assert [o.id for o in session.overlays][0] == overlay.id


def test_text_field_update_keeps_id(session):
    overlay = session.add_text()
    session.apply(Update(f"text.{overlay.id}.fontSize", 64))
    updated = session.get_text(overlay.id)
    assert updated is not None and updated.font_size == 64


def test_remove_text(session):
    a = session.add_text("a")
    b = session.add_text("b")
    session.remove_text(a.id)
    assert [o.id for o in session.overlays] == [b.id]
    assert session.get_text(a.id) is None


def test_drag_center(session):
    session.pointer_down(100, 75)
    assert session.controller.is_dragging_center
    session.pointer_move(300, 150)
    assert (session.settings.center_x, session.settings.center_y) == (0.75, 0.5)
    session.pointer_up()
    assert not session.controller.is_dragging_center


def test_drag_text_preserves_grab_offset(session):
    overlay = session.add_text()
    session.pointer_down(205, 155)  # 5px off the anchor at (200, 150)
    assert session.controller.dragging_text_id == overlay.id
    session.pointer_move(105, 80)
    moved = session.get_text(overlay.id)
    assert moved.x == pytest.approx(0.25)
    assert moved.y == pytest.approx(0.25)
    assert session.settings.center_x == 0.5


def test_overlapping_texts_pick_last_added(session):
    session.add_text("A")
    b = session.add_text("B")
    session.pointer_down(200, 150)
    assert session.controller.dragging_text_id == b.id


def test_hover_cursor(session):
    session.add_text()
    session.pointer_move(200, 150)
    assert session.cursor == "grab"
    session.pointer_move(5, 5)
    assert session.cursor == "crosshair"


def test_render_without_image_is_none(measurer):
    s = EditorSession(measurer=measurer)
    assert s.render() is None
    assert s.export_image() is None


def test_render_and_export(session):
    session.add_text()
    frame = session.render()
    assert frame.size == (400, 300)
    png = session.export_image()
    assert png.startswith(b"\x89PNG")


def test_export_has_no_guide_marker(session):
    session.pointer_down(10, 10)
    assert session.render_context().completed_stages[-1] == "S5"
    exported = Image.open(io.BytesIO(session.export_image()))
    assert np.asarray(exported).max() == 128


def test_settings_round_trip(session, measurer, gray_image):
    session.apply([Update("spiral.spacing", 55), Update("spiral.blendMode", "screen")])
    session.add_text("hello")
    raw = session.export_settings_json()

    other = EditorSession(measurer=measurer)
    other.load_image(gray_image)
    other.import_settings(raw)
    assert other.settings.spacing == 55
    assert other.settings.blend_mode is BlendMode.SCREEN
    assert [o.text for o in other.overlays] == ["hello"]
    assert other.overlays[0].id != session.overlays[0].id


def test_exported_json_uses_wire_keys(session):
    session.add_text()
    data = json.loads(session.export_settings_json())
    assert set(data) == {"spiral", "text"}
    assert "sparkleAmount" in data["spiral"]
    assert "id" not in data["text"][0]
    assert data["text"][0]["fontSize"] == 32


def test_bad_import_leaves_state(session):
    session.add_text()
    before = (session.settings, list(session.overlays))
    with pytest.raises(SettingsImportError):
        session.import_settings('{"spiral": {"spacing": "wide"}, "text": []}')
    with pytest.raises(SettingsImportError):
        session.import_settings("not json")
    assert (session.settings, session.overlays) == before


def test_import_with_new_ratio_resizes_canvas(session):
    session.import_settings('{"spiral": {"aspectRatio": "1:1"}, "text": []}')
    assert session.canvas == CanvasGeometry(300, 300)


def test_import_fills_missing_text_fields_from_default_style(session):
    session.update_text_template(font_size=99, color="#ff0000")
    session.import_settings('{"spiral": {}, "text": [{"text": "x"}]}')
    imported = session.overlays[0]
    assert imported.font_size == 32
    assert imported.color == "#000000"
    # The template still applies to labels added afterwards
    assert session.add_text().font_size == 99
