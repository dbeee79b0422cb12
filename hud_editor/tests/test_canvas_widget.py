from __future__ import annotations

import pytest
from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QMouseEvent

from hud_config.defaults import default_document
from hud_config.store import DocumentStore
from hud_editor.canvas import HudCanvasWidget, module_boxes, snap_anchor_at
from hud_layout.drag import DragController
from hud_layout.modules import HUD_SECTION, derive_hud_modules
from hud_layout.snap import SnapEngine


def _mouse(kind: QEvent.Type, x: float, y: float, button=Qt.MouseButton.LeftButton) -> QMouseEvent:
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseMove else button
    return QMouseEvent(kind, QPointF(x, y), QPointF(x, y), button, buttons, Qt.KeyboardModifier.NoModifier)


def _canvas():
    store = DocumentStore(default_document("v6"))

    def modules():
        return derive_hud_modules(store.section(HUD_SECTION))

    drag = DragController(store, modules)
    snap = SnapEngine(store, modules)
    canvas = HudCanvasWidget(store, drag, snap, modules)
    canvas.resize(300, 150)
    canvas.show()
    return canvas, store, drag


def test_snap_cells_leave_gaps_between_them():
    assert snap_anchor_at(150, 75, 300, 150) == "middle"
    assert snap_anchor_at(10, 140, 300, 150) == "bottom_left"
    assert snap_anchor_at(100, 75, 300, 150) is None


def test_hidden_modules_have_no_box():
    section = default_document("v6")[HUD_SECTION]
    ids = [module.id for module, _box in module_boxes(section, derive_hud_modules(section), 300, 150)]
    assert "coordinates" in ids
    assert "fps" not in ids


@pytest.mark.pyqt_required
def test_drag_gesture_writes_placement_and_one_undo_step(qt_app):
    canvas, store, drag = _canvas()
    try:
        canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 10, 10))
        assert drag.dragging_id == "coordinates"
        assert canvas.pointer_attached is True

        canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 200, 100))
        canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 295, 145))
        canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 295, 145))

        section = store.section(HUD_SECTION)
        assert section["$coordinates_anchor|default"] == "bottom_right"
        assert section["$coordinates_offset|default"] == [-5, -5]
        assert canvas.pointer_attached is False
        assert drag.selected_id == "coordinates"
        assert len(store.history.past) == 1

        store.undo()
        assert store.section(HUD_SECTION)["$coordinates_anchor|default"] == "top_left"
        assert store.section(HUD_SECTION)["$coordinates_offset|default"] == [4, 4]
    finally:
        canvas.close()


@pytest.mark.pyqt_required
def test_click_without_motion_selects_without_history(qt_app):
    canvas, store, drag = _canvas()
    try:
        canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 10, 10))
        canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 10, 10))

        assert drag.selected_id == "coordinates"
        assert canvas.snap_grid_visible() is True
        assert store.can_undo is False
    finally:
        canvas.close()


@pytest.mark.pyqt_required
def test_snap_cell_click_pins_selected_module(qt_app):
    canvas, store, drag = _canvas()
    try:
        drag.select("coordinates")
        canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 150, 75))

        section = store.section(HUD_SECTION)
        assert section["$coordinates_anchor|default"] == "middle"
        assert section["$coordinates_offset|default"] == [0, 0]
        assert len(store.history.past) == 1

        canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 200, 30))
        assert drag.selected_id is None
        assert canvas.snap_grid_visible() is False
    finally:
        canvas.close()


@pytest.mark.pyqt_required
def test_right_click_is_ignored(qt_app):
    canvas, store, drag = _canvas()
    try:
        canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 10, 10, Qt.MouseButton.RightButton))
        assert drag.is_dragging is False
        assert drag.selected_id is None
    finally:
        canvas.close()
