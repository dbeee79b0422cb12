from __future__ import annotations

import json

import pytest

from hud_config.classifier import ConfigClassifier
from hud_config.defaults import default_document
from hud_config.document import DocumentImportError
from hud_config.exchange import read_document
from hud_config.store import DocumentStore
from hud_layout.anchors import place_box
from hud_layout.drag import DragController, SurfaceRect
from hud_layout.modules import HUD_SECTION, derive_hud_modules, find_module
from hud_layout.snap import SnapEngine

SURFACE = SurfaceRect(left=0.0, top=0.0, width=640.0, height=360.0)


def _session():
    store = DocumentStore(default_document("v6"))

    def modules():
        return derive_hud_modules(store.section(HUD_SECTION))

    drag = DragController(store, modules, surface_provider=lambda: SURFACE)
    snap = SnapEngine(store, modules)
    return store, drag, snap, modules


def test_drag_snap_undo_redo_export(tmp_path):
    store, drag, snap, modules = _session()
    original = json.dumps(store.document, sort_keys=True)

    drag.press("hotbar")
    for x in range(320, 620, 30):
        drag.move(x, 300)
    drag.move(630, 350)
    drag.release()

    section = store.section(HUD_SECTION)
    assert section["$hotbar_anchor|default"] == "bottom_right"
    assert section["$hotbar_offset|default"] == [-10, -10]

    hotbar = find_module(modules(), "hotbar")
    box = place_box(
        section["$hotbar_anchor|default"],
        section["$hotbar_offset|default"],
        SURFACE.width,
        SURFACE.height,
        hotbar.width,
        hotbar.height,
    )
    assert (box.x + box.width, box.y + box.height) == (630.0, 350.0)

    assert snap.snap_to_anchor(drag.selected_id, "top_middle") is True
    assert store.section(HUD_SECTION)["$hotbar_offset|default"] == [0, 0]
    assert len(store.history.past) == 2

    store.undo()
    assert store.section(HUD_SECTION)["$hotbar_anchor|default"] == "bottom_right"
    store.undo()
    assert json.dumps(store.document, sort_keys=True) == original
    store.redo()
    store.redo()
    assert store.section(HUD_SECTION)["$hotbar_anchor|default"] == "top_middle"

    exported = tmp_path / "config.json"
    store.export_to(exported)
    assert read_document(exported) == store.document


def test_classification_follows_imported_document():
    store, _drag, _snap, _modules = _session()
    classifier = ConfigClassifier()
    before = classifier.classify(store.section(HUD_SECTION))
    assert "coordinates" in before.groups

    store.import_text(json.dumps({HUD_SECTION: {"$radar": True, "$radar_range|default": 64, "$zoom|default": 2}}))
    after = classifier.classify(store.section(HUD_SECTION))

    assert list(after.groups) == ["radar"]
    assert after.groups["radar"].children == ("$radar_range|default",)
    assert after.standalones == ("$zoom|default",)


def test_disabling_module_mid_drag_keeps_document_consistent():
    store, drag, _snap, _modules = _session()
    drag.press("coordinates")
    drag.move(10, 10)
    store.import_text(json.dumps({HUD_SECTION: {}}))

    assert drag.move(20, 20) is None
    drag.release()
    assert store.section(HUD_SECTION) == {}


def _hud_store():
    store = DocumentStore({"sec": {"$hud": True, "$hud_anchor|default": "top_left", "$hud_offset|default": [0, 0]}})
    drag = DragController(
        store,
        lambda: derive_hud_modules(store.section("sec")),
        section="sec",
        surface_provider=lambda: SurfaceRect(left=0.0, top=0.0, width=300.0, height=150.0),
    )
    return store, drag


def test_hud_dragged_near_origin_stays_top_left():
    store, drag = _hud_store()
    drag.press("hud")
    drag.move(5, 5)
    drag.release()

    assert store.section("sec")["$hud_anchor|default"] == "top_left"
    assert store.section("sec")["$hud_offset|default"] == [5, 5]


def test_hud_dragged_near_far_corner_pins_bottom_right():
    store, drag = _hud_store()
    drag.press("hud")
    drag.move(295, 145)
    drag.release()

    assert store.section("sec")["$hud_anchor|default"] == "bottom_right"
    assert store.section("sec")["$hud_offset|default"] == [-5, -5]
    store.undo()
    assert store.section("sec")["$hud_offset|default"] == [0, 0]


def test_garbage_import_changes_nothing():
    store, _drag = _hud_store()
    store.apply_tracked(["sec", "$hud"], False)
    snapshot = (json.dumps(store.document), store.history.past, store.history.future)

    with pytest.raises(DocumentImportError):
        store.import_text("not valid json")

    assert (json.dumps(store.document), store.history.past, store.history.future) == snapshot
