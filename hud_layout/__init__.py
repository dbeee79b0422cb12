from .anchors import (
    ANCHORS,
    BoxRect,
    EdgeMargins,
    anchor_base_style,
    anchor_from_zones,
    anchor_reference_point,
    anchor_zones,
    apply_offset,
    normalise_anchor,
    normalise_offset,
    place_box,
    resolve_point,
)
from .drag import DragController, DragPlacement, SurfaceRect, classify_zone, clamp_point, compute_drag_placement
from .modules import HUD_SECTION, HUDModule, derive_hud_modules, find_module
from .snap import SnapEngine

__all__ = [
    "ANCHORS",
    "BoxRect",
    "EdgeMargins",
    "anchor_base_style",
    "anchor_from_zones",
    "anchor_reference_point",
    "anchor_zones",
    "apply_offset",
    "normalise_anchor",
    "normalise_offset",
    "place_box",
    "resolve_point",
    "DragController",
    "DragPlacement",
    "SurfaceRect",
    "classify_zone",
    "clamp_point",
    "compute_drag_placement",
    "HUD_SECTION",
    "HUDModule",
    "derive_hud_modules",
    "find_module",
    "SnapEngine",
]
