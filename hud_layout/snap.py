"""Snapping the selected module to one of the nine anchors."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence, Tuple

from hud_layout.anchors import ANCHORS, is_anchor
from hud_layout.modules import HUD_SECTION, HUDModule, find_module

_LOGGER = logging.getLogger("HUDEditor.Layout")


class TrackedWriter(Protocol):
    def apply_tracked_many(self, updates: Sequence[Tuple[Sequence[str], object]]) -> None: ...


class SnapEngine:
    """Pins the selected module to one of the 9 anchors with a zero offset."""

    def __init__(
        self,
        writer: TrackedWriter,
        modules_provider: Callable[[], Sequence[HUDModule]],
        *,
        section: str = HUD_SECTION,
    ) -> None:
        self._writer = writer
        self._modules = modules_provider
        self._section = section

    def snap_to_anchor(self, selected_id: Optional[str], anchor: str) -> bool:
        if not is_anchor(anchor):
            raise ValueError(f"Unknown anchor {anchor!r}; expected one of {', '.join(ANCHORS)}")
        module = find_module(self._modules(), selected_id)
        if module is None:
            _LOGGER.debug("Snap ignored; no module selected (selection=%s)", selected_id)
            return False
        self._writer.apply_tracked_many(
            [
                ([self._section, module.anchor_key], anchor),
                ([self._section, module.offset_key], [0, 0]),
            ]
        )
        _LOGGER.debug("Snapped module=%s to anchor=%s", module.id, anchor)
        return True
