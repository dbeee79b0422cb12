"""Anchor/offset coordinate helpers for HUD placement (pure, no Qt)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

ANCHORS: Tuple[str, ...] = (
    "top_left",
    "top_middle",
    "top_right",
    "left_middle",
    "middle",
    "right_middle",
    "bottom_left",
    "bottom_middle",
    "bottom_right",
)
DEFAULT_ANCHOR = "top_left"

_ANCHOR_ZONES: Dict[str, Tuple[str, str]] = {
    "top_left": ("top", "left"),
    "top_middle": ("top", "middle"),
    "top_right": ("top", "right"),
    "left_middle": ("middle", "left"),
    "middle": ("middle", "middle"),
    "right_middle": ("middle", "right"),
    "bottom_left": ("bottom", "left"),
    "bottom_middle": ("bottom", "middle"),
    "bottom_right": ("bottom", "right"),
}

Offset = Tuple[float, float]


@dataclass(frozen=True)
class EdgeMargins:
    """Edge-relative margins derived from an (anchor, offset) pair."""

    left: Optional[float] = None
    right: Optional[float] = None
    top: Optional[float] = None
    bottom: Optional[float] = None


@dataclass(frozen=True)
class BoxRect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


def is_anchor(value: object) -> bool:
    return isinstance(value, str) and value in _ANCHOR_ZONES


def normalise_anchor(value: object) -> str:
    """Return a valid anchor, falling back to top_left for anything unrecognised."""

    if is_anchor(value):
        return value  # type: ignore[return-value]
    return DEFAULT_ANCHOR


def normalise_offset(value: object) -> Offset:
    """Return a numeric (dx, dy) pair; wrong arity or non-numeric members give (0, 0)."""

    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return 0.0, 0.0
    coords = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return 0.0, 0.0
        number = float(item)
        if not math.isfinite(number):
            return 0.0, 0.0
        coords.append(number)
    return coords[0], coords[1]


def anchor_zones(anchor: object) -> Tuple[str, str]:
    """Return (vertical, horizontal) zone names for an anchor."""

    return _ANCHOR_ZONES[normalise_anchor(anchor)]


def anchor_from_zones(vertical: str, horizontal: str) -> str:
    if vertical == "middle" and horizontal == "middle":
        return "middle"
    if vertical == "middle":
        return f"{horizontal}_middle"
    if horizontal == "middle":
        return f"{vertical}_middle"
    return f"{vertical}_{horizontal}"


def anchor_base_style(anchor: object) -> Dict[str, object]:
    """CSS-like base placement for an anchor before any offset is applied."""

    token = anchor if is_anchor(anchor) else None
    if token == "top_middle":
        return {"top": 0, "left": "50%", "transform": "translateX(-50%)"}
    if token == "top_right":
        return {"top": 0, "right": 0}
    if token == "left_middle":
        return {"top": "50%", "left": 0, "transform": "translateY(-50%)"}
    if token == "middle":
        return {"top": "50%", "left": "50%", "transform": "translate(-50%, -50%)"}
    if token == "right_middle":
        return {"top": "50%", "right": 0, "transform": "translateY(-50%)"}
    if token == "bottom_left":
        return {"bottom": 0, "left": 0}
    if token == "bottom_middle":
        return {"bottom": 0, "left": "50%", "transform": "translateX(-50%)"}
    if token == "bottom_right":
        return {"bottom": 0, "right": 0}
    return {"top": 0, "left": 0}


def apply_offset(anchor: object, offset: object) -> EdgeMargins:
    """Translate an offset into margins measured from the edge the anchor is pinned to."""

    token = normalise_anchor(anchor)
    dx, dy = normalise_offset(offset)
    left = right = top = bottom = None
    if ("left" in token or "middle" in token) and "right" not in token:
        left = dx
    if "right" in token:
        right = -dx
    if "top" in token or ("middle" in token and "bottom" not in token):
        top = dy
    if "bottom" in token:
        bottom = -dy
    return EdgeMargins(left=left, right=right, top=top, bottom=bottom)


def anchor_reference_point(anchor: object, width: float, height: float) -> Tuple[float, float]:
    vertical, horizontal = anchor_zones(anchor)
    if horizontal == "left":
        ref_x = 0.0
    elif horizontal == "right":
        ref_x = float(width)
    else:
        ref_x = width / 2.0
    if vertical == "top":
        ref_y = 0.0
    elif vertical == "bottom":
        ref_y = float(height)
    else:
        ref_y = height / 2.0
    return ref_x, ref_y


def resolve_point(anchor: object, offset: object, width: float, height: float) -> Tuple[float, float]:
    """Reconstruct a surface position from an (anchor, offset) pair."""

    ref_x, ref_y = anchor_reference_point(anchor, width, height)
    dx, dy = normalise_offset(offset)
    return ref_x + dx, ref_y + dy


def _axis_origin(style: Dict[str, object], near: str, far: str, extent: float, size: float) -> float:
    if near in style:
        if style[near] == "50%":
            return extent / 2.0 - size / 2.0
        return 0.0
    if far in style:
        return extent - size
    return 0.0


def place_box(
    anchor: object,
    offset: object,
    surface_width: float,
    surface_height: float,
    box_width: float,
    box_height: float,
) -> BoxRect:
    """Return the on-surface rectangle for an element pinned at anchor+offset."""

    style = anchor_base_style(anchor)
    margins = apply_offset(anchor, offset)
    x = _axis_origin(style, "left", "right", surface_width, box_width)
    y = _axis_origin(style, "top", "bottom", surface_height, box_height)
    if margins.left is not None:
        x += margins.left
    elif margins.right is not None:
        x -= margins.right
    if margins.top is not None:
        y += margins.top
    elif margins.bottom is not None:
        y -= margins.bottom
    return BoxRect(x=x, y=y, width=float(box_width), height=float(box_height))
