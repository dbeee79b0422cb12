"""HUD module discovery from the designated HUD section."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

HUD_SECTION = "mod_menu_config@gc.pnl"
ANCHOR_SUFFIX = "_anchor|default"
OFFSET_SUFFIX = "_offset|default"

# id -> (width, height, icon)
HUD_SIZES: Dict[str, Tuple[int, int, str]] = {
    "coordinates": (120, 40, "fa-location-dot"),
    "clockcompass": (48, 48, "fa-compass"),
    "hotbar": (182, 22, "fa-grip"),
    "chunkmap": (64, 64, "fa-map"),
    "playerlist": (100, 120, "fa-users"),
    "mainhandhud": (40, 40, "fa-hand"),
    "armorhud": (40, 80, "fa-shield"),
    "keystrokes": (72, 72, "fa-keyboard"),
    "fps": (56, 18, "fa-gauge"),
    "cps": (56, 18, "fa-computer-mouse"),
    "debughud": (140, 90, "fa-bug"),
    "potionhud": (90, 60, "fa-flask"),
    "mobileshortcuts": (88, 24, "fa-mobile"),
}
DEFAULT_SIZE: Tuple[int, int, str] = (64, 32, "fa-cube")


@dataclass(frozen=True)
class HUDModule:
    id: str
    toggle_key: str
    anchor_key: str
    offset_key: str
    width: int
    height: int
    icon: str


def is_toggle_key(key: str, value: object) -> bool:
    """Bare boolean toggle: ``$name`` with no internal separator."""

    return key.startswith("$") and isinstance(value, bool) and "_" not in key


def derive_hud_modules(section: Optional[Mapping[str, object]]) -> List[HUDModule]:
    """Scan a section for toggles that carry anchor/offset siblings."""

    modules: List[HUDModule] = []
    if not isinstance(section, Mapping):
        return modules
    for key, value in section.items():
        if not is_toggle_key(key, value):
            continue
        base = key[1:]
        anchor_key = f"${base}{ANCHOR_SUFFIX}"
        offset_key = f"${base}{OFFSET_SUFFIX}"
        if anchor_key not in section or offset_key not in section:
            continue
        width, height, icon = HUD_SIZES.get(base, DEFAULT_SIZE)
        modules.append(
            HUDModule(
                id=base,
                toggle_key=key,
                anchor_key=anchor_key,
                offset_key=offset_key,
                width=width,
                height=height,
                icon=icon,
            )
        )
    return modules


def find_module(modules: Sequence[HUDModule], module_id: Optional[str]) -> Optional[HUDModule]:
    if module_id is None:
        return None
    for module in modules:
        if module.id == module_id:
            return module
    return None
