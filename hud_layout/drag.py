"""Pointer drag state machine that turns free-form motion into anchor + offset."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from hud_layout.anchors import anchor_from_zones
from hud_layout.modules import HUD_SECTION, HUDModule, find_module

_LOGGER = logging.getLogger("HUDEditor.Layout")

MoveHandler = Callable[[float, float], None]
EndHandler = Callable[[], None]


class DocumentWriter(Protocol):
    def apply_silent(self, path: Sequence[str], value: object) -> None: ...

    def checkpoint(self) -> bool: ...


class PointerSubscription(Protocol):
    """Source of global pointer events, only listened to while a drag is active."""

    def attach(self, on_move: MoveHandler, on_end: EndHandler) -> None: ...

    def detach(self) -> None: ...


@dataclass(frozen=True)
class SurfaceRect:
    """Bounding box of the drag surface in the same space as pointer events."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class DragPlacement:
    anchor: str
    offset: Tuple[int, int]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_point(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    return max(0.0, min(float(width), x)), max(0.0, min(float(height), y))


def _axis_zone(value: float, extent: float, low: str, high: str) -> str:
    if value < extent / 3:
        return low
    if value > (extent / 3) * 2:
        return high
    return "middle"


def classify_zone(x: float, y: float, width: float, height: float) -> Tuple[str, str]:
    """Return (vertical, horizontal) zones of an already clamped position."""

    return _axis_zone(y, height, "top", "bottom"), _axis_zone(x, width, "left", "right")


def _axis_offset(value: float, extent: float, zone: str) -> float:
    if zone in {"left", "top"}:
        return value
    if zone in {"right", "bottom"}:
        return -(extent - value)
    return value - extent / 2


def compute_drag_placement(x: float, y: float, width: float, height: float) -> DragPlacement:
    """Map a surface-relative pointer position onto the 9-anchor grid plus offset."""

    cx, cy = clamp_point(x, y, width, height)
    vertical, horizontal = classify_zone(cx, cy, width, height)
    offset_x = _axis_offset(cx, width, horizontal)
    offset_y = _axis_offset(cy, height, vertical)
    return DragPlacement(
        anchor=anchor_from_zones(vertical, horizontal),
        offset=(round_half_up(offset_x), round_half_up(offset_y)),
    )


class DragController:
    """Owns drag/selection state for one canvas and writes placements to the document."""

    def __init__(
        self,
        writer: DocumentWriter,
        modules_provider: Callable[[], Sequence[HUDModule]],
        *,
        section: str = HUD_SECTION,
        pointer: Optional[PointerSubscription] = None,
        surface_provider: Optional[Callable[[], SurfaceRect]] = None,
    ) -> None:
        self._writer = writer
        self._modules = modules_provider
        self._section = section
        self._pointer = pointer
        self._surface_provider = surface_provider
        self._dragging_id: Optional[str] = None
        self._selected_id: Optional[str] = None
        self._moved = False
        self._attached = False
        self._listeners: List[Callable[[], None]] = []

    @property
    def section(self) -> str:
        return self._section

    @property
    def dragging_id(self) -> Optional[str]:
        return self._dragging_id

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def is_dragging(self) -> bool:
        return self._dragging_id is not None

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def set_pointer(self, pointer: Optional[PointerSubscription]) -> None:
        if self._attached:
            self._detach()
        self._pointer = pointer

    def set_surface_provider(self, provider: Optional[Callable[[], SurfaceRect]]) -> None:
        self._surface_provider = provider

    def select(self, module_id: Optional[str]) -> None:
        if module_id == self._selected_id:
            return
        self._selected_id = module_id
        self._notify()

    def clear_selection(self) -> None:
        self.select(None)

    def press(self, module_id: str) -> None:
        if self._dragging_id is not None:
            self.release()
        self._dragging_id = module_id
        self._selected_id = module_id
        self._moved = False
        self._attach()
        _LOGGER.debug("Drag started for module=%s", module_id)
        self._notify()

    def move(self, x: float, y: float, surface: Optional[SurfaceRect] = None) -> Optional[DragPlacement]:
        module_id = self._dragging_id
        if module_id is None:
            return None
        if surface is None and self._surface_provider is not None:
            surface = self._surface_provider()
        if surface is None:
            return None
        module = find_module(self._modules(), module_id)
        if module is None:
            _LOGGER.debug("Drag frame ignored; module %s no longer present", module_id)
            return None
        placement = compute_drag_placement(x - surface.left, y - surface.top, surface.width, surface.height)
        self._writer.apply_silent([self._section, module.anchor_key], placement.anchor)
        self._writer.apply_silent([self._section, module.offset_key], list(placement.offset))
        self._moved = True
        _LOGGER.debug(
            "Drag frame module=%s anchor=%s offset=%s",
            module_id,
            placement.anchor,
            placement.offset,
        )
        return placement

    def release(self) -> None:
        module_id = self._dragging_id
        if module_id is None:
            self._detach()
            return
        self._dragging_id = None
        self._detach()
        if self._moved:
            self._writer.checkpoint()
        _LOGGER.debug("Drag finished for module=%s moved=%s", module_id, self._moved)
        self._moved = False
        self._notify()

    def _attach(self) -> None:
        if self._pointer is None or self._attached:
            return
        self._pointer.attach(self._on_pointer_move, self.release)
        self._attached = True

    def _detach(self) -> None:
        if self._pointer is None or not self._attached:
            return
        self._attached = False
        self._pointer.detach()

    def _on_pointer_move(self, x: float, y: float) -> None:
        self.move(x, y)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                _LOGGER.exception("Drag listener failed")
