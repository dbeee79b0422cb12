"""Visual HUD canvas: paints modules and turns mouse input into drag/snap edits."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from PyQt6.QtCore import QPointF, QRectF, QSize, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from hud_config.store import DocumentStore
from hud_layout.anchors import ANCHORS, BoxRect, normalise_anchor, normalise_offset, place_box
from hud_layout.drag import DragController, EndHandler, MoveHandler, SurfaceRect
from hud_layout.modules import HUDModule
from hud_layout.snap import SnapEngine

_UI_LOGGER = logging.getLogger("HUDEditor.UI")

_SURFACE_COLOR = QColor(0, 0, 0, 110)
_GRID_COLOR = QColor(114, 137, 218, 40)
_MODULE_COLOR = QColor(40, 43, 48, 210)
_SELECTED_BORDER = QColor(114, 137, 218)
_DRAGGING_FILL = QColor(114, 137, 218)
_IDLE_BORDER = QColor(255, 255, 255, 40)

SNAP_CELL_MARGIN = 6


def snap_cell_rects(width: float, height: float) -> List[tuple[str, BoxRect]]:
    """Snap grid cells in anchor order, inset so the gaps between them stay clickable."""

    cell_w = width / 3
    cell_h = height / 3
    cells: List[tuple[str, BoxRect]] = []
    for index, anchor in enumerate(ANCHORS):
        row, column = divmod(index, 3)
        cells.append(
            (
                anchor,
                BoxRect(
                    x=column * cell_w + SNAP_CELL_MARGIN,
                    y=row * cell_h + SNAP_CELL_MARGIN,
                    width=cell_w - 2 * SNAP_CELL_MARGIN,
                    height=cell_h - 2 * SNAP_CELL_MARGIN,
                ),
            )
        )
    return cells


def snap_anchor_at(x: float, y: float, width: float, height: float) -> Optional[str]:
    """Anchor of the snap grid cell under a surface-relative point, if any."""

    for anchor, rect in snap_cell_rects(width, height):
        if rect.contains(x, y):
            return anchor
    return None


def module_boxes(
    section: dict,
    modules: Sequence[HUDModule],
    width: float,
    height: float,
) -> List[tuple[HUDModule, BoxRect]]:
    """Boxes of visible modules in paint order (hidden toggles are skipped)."""

    boxes: List[tuple[HUDModule, BoxRect]] = []
    for module in modules:
        if not section.get(module.toggle_key):
            continue
        anchor = normalise_anchor(section.get(module.anchor_key))
        offset = normalise_offset(section.get(module.offset_key))
        boxes.append((module, place_box(anchor, offset, width, height, module.width, module.height)))
    return boxes


class HudCanvasWidget(QWidget):
    """Canvas view; doubles as the pointer source for the drag controller."""

    def __init__(
        self,
        store: DocumentStore,
        drag: DragController,
        snap: SnapEngine,
        modules_provider: Callable[[], Sequence[HUDModule]],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._drag = drag
        self._snap = snap
        self._modules = modules_provider
        self._on_move: Optional[MoveHandler] = None
        self._on_end: Optional[EndHandler] = None
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        self.setMinimumSize(160, 90)
        self._drag.set_pointer(self)
        self._drag.set_surface_provider(self.surface_rect)
        self._drag.add_listener(self.update)
        self._store.add_listener(self._handle_document_changed)

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(640, 360)

    def hasHeightForWidth(self) -> bool:  # type: ignore[override]
        return True

    def heightForWidth(self, width: int) -> int:  # type: ignore[override]
        return int(width * 9 / 16)

    def surface_rect(self) -> SurfaceRect:
        return SurfaceRect(left=0.0, top=0.0, width=float(self.width()), height=float(self.height()))

    def _section(self) -> dict:
        return self._store.section(self._drag.section)

    def _handle_document_changed(self, _document: dict) -> None:
        self.update()

    # Pointer subscription ------------------------------------------------
    def attach(self, on_move: MoveHandler, on_end: EndHandler) -> None:
        self._on_move = on_move
        self._on_end = on_end
        self.grabMouse()

    def detach(self) -> None:
        self._on_move = None
        self._on_end = None
        self.releaseMouse()

    @property
    def pointer_attached(self) -> bool:
        return self._on_move is not None

    # Hit testing ---------------------------------------------------------
    def module_at(self, x: float, y: float) -> Optional[HUDModule]:
        boxes = module_boxes(self._section(), self._modules(), self.width(), self.height())
        selected = self._drag.selected_id
        # Selected module paints on top, so it wins hit tests.
        boxes.sort(key=lambda item: item[0].id == selected)
        for module, box in reversed(boxes):
            if box.contains(x, y):
                return module
        return None

    def snap_grid_visible(self) -> bool:
        return self._drag.selected_id is not None and not self._drag.is_dragging

    # Events --------------------------------------------------------------
    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            QWidget.mousePressEvent(self, event)
            return
        pos = event.position()
        module = self.module_at(pos.x(), pos.y())
        if module is not None:
            self._drag.press(module.id)
            event.accept()
            return
        if self.snap_grid_visible():
            anchor = snap_anchor_at(pos.x(), pos.y(), self.width(), self.height())
            if anchor is not None:
                _UI_LOGGER.debug("Snap grid cell clicked: %s", anchor)
                self._snap.snap_to_anchor(self._drag.selected_id, anchor)
                event.accept()
                return
        self._drag.clear_selection()
        event.accept()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        handler = self._on_move
        if handler is not None:
            pos = event.position()
            handler(pos.x(), pos.y())
            event.accept()
            return
        QWidget.mouseMoveEvent(self, event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        handler = self._on_end
        if handler is not None:
            handler()
            event.accept()
            return
        QWidget.mouseReleaseEvent(self, event)

    # Painting ------------------------------------------------------------
    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            width = float(self.width())
            height = float(self.height())
            painter.fillRect(QRectF(0.0, 0.0, width, height), _SURFACE_COLOR)
            self._paint_grid(painter, width, height)
            if self.snap_grid_visible():
                self._paint_snap_grid(painter, width, height)
            self._paint_modules(painter, width, height)
        finally:
            painter.end()

    def _paint_grid(self, painter: QPainter, width: float, height: float) -> None:
        painter.setPen(QPen(_GRID_COLOR, 1))
        spacing = 20
        for x in range(0, int(width) + 1, spacing):
            for y in range(0, int(height) + 1, spacing):
                painter.drawPoint(QPointF(x, y))

    def _paint_snap_grid(self, painter: QPainter, width: float, height: float) -> None:
        painter.setPen(QPen(QColor(114, 137, 218, 60), 1))
        painter.setBrush(QColor(114, 137, 218, 14))
        for _anchor, rect in snap_cell_rects(width, height):
            painter.drawRoundedRect(QRectF(rect.x, rect.y, rect.width, rect.height), 10, 10)

    def _paint_modules(self, painter: QPainter, width: float, height: float) -> None:
        boxes = module_boxes(self._section(), self._modules(), width, height)
        selected = self._drag.selected_id
        dragging = self._drag.dragging_id
        boxes.sort(key=lambda item: (item[0].id == dragging, item[0].id == selected))
        font = QFont(self.font())
        font.setPointSize(7)
        font.setBold(True)
        painter.setFont(font)
        for module, box in boxes:
            rect = QRectF(box.x, box.y, box.width, box.height)
            if module.id == dragging:
                painter.setBrush(_DRAGGING_FILL)
                painter.setPen(QPen(QColor("white"), 1.5))
            elif module.id == selected:
                painter.setBrush(_MODULE_COLOR)
                painter.setPen(QPen(_SELECTED_BORDER, 1.5))
            else:
                painter.setBrush(_MODULE_COLOR)
                painter.setPen(QPen(_IDLE_BORDER, 1))
            painter.drawRoundedRect(rect, 6, 6)
            painter.setPen(QColor("white") if module.id in {dragging, selected} else QColor(160, 160, 170))
            painter.drawText(rect, int(Qt.AlignmentFlag.AlignCenter), module.id)
