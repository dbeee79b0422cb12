"""Default configuration documents, one per supported schema version."""

from __future__ import annotations

import copy
from typing import Any, Dict, Tuple

from hud_config.document import Document

VERSIONS: Tuple[str, ...] = ("v4", "v5", "v6")
DEFAULT_VERSION = "v6"
NAMESPACE = "gc"


def _hud(base: str, anchor: str, offset: Tuple[int, int], *, enabled: bool = True) -> Dict[str, Any]:
    return {
        f"${base}": enabled,
        f"${base}_anchor|default": anchor,
        f"${base}_offset|default": list(offset),
    }


def _mod_menu_v4() -> Dict[str, Any]:
    section: Dict[str, Any] = {}
    section.update(_hud("coordinates", "top_left", (4, 4)))
    section.update(
        {
            "$coordinates_opacity|default": 0.8,
            "$hide_vanillacordinates": False,
        }
    )
    section.update(_hud("hotbar", "bottom_middle", (0, -2)))
    section.update({"$hide_hotbar_background": False})
    section.update(_hud("fps", "top_right", (-4, 4), enabled=False))
    section.update(
        {
            "$hide_bossbar": False,
            "$crosshair_scale|default": 1.0,
            "$ui_scale|default": 1.0,
        }
    )
    return section


def _mod_menu_v5() -> Dict[str, Any]:
    section = _mod_menu_v4()
    section.update(_hud("clockcompass", "top_middle", (0, 4)))
    section.update(
        {
            "$clockcompass_size|default": [32, 32],
            "$show_clock_compass_text": True,
        }
    )
    section.update(_hud("chunkmap", "top_right", (-4, 28), enabled=False))
    section.update(
        {
            "$chunkmap_opacity|default": 0.6,
            "$hide_slime_chunks": True,
        }
    )
    section.update(
        {
            "$scoreboard_opacity|default": 0.5,
            "$hide_scoreboard_numbers": False,
            "$xp_bar_text_color|default": "#80ff20",
        }
    )
    return section


def _mod_menu_v6() -> Dict[str, Any]:
    section = _mod_menu_v5()
    section.update(
        {
            "$coordinates_background_opacity|default": 0.35,
            "$show_chunkcoordinates": False,
            "$show_nethercoordinates": True,
        }
    )
    section.update(_hud("playerlist", "right_middle", (-4, 0), enabled=False))
    section.update({"$hide_playeravatars": False, "$playerlist_mobile_button": True})
    section.update(_hud("mainhandhud", "bottom_right", (-96, -4)))
    section.update(
        {
            "$mainhandhud_slot_opacity|default": 0.7,
            "$mainhand_durability_toggle_index|default": 0,
        }
    )
    section.update(_hud("keystrokes", "bottom_left", (4, -4), enabled=False))
    section.update(_hud("cps", "left_middle", (4, 0), enabled=False))
    section.update(_hud("debughud", "top_left", (4, 48), enabled=False))
    section.update(
        {
            "$show_glacierversion": True,
            "$show_os_type": True,
            "$show_platform": True,
            "$show_gamemode": True,
            "$show_world_name": False,
            "$show_day_counter": True,
            "$show_moon_phase": False,
        }
    )
    section.update(
        {
            "$mobileshortcuts": True,
            "$f1button_offset|default": [0, 0],
            "$f8button_offset|default": [36, 0],
            "$hotbar_left_button": True,
            "$hotbar_right_button": True,
            "$show_hotbar_numbers": True,
            "$hotbar_toggle_index|default": 1,
        }
    )
    section.update(
        {
            "$bossbar_y_offset|default": 12,
            "$crosshair_color|default": "#ffffff",
            "$xp_percentage": False,
            "$saturation_display": True,
            "$nightshift_strength|default": 0.25,
            "$hide_item_name": False,
            "$hide_jukebox_popup": False,
            "$hide_tip_text": False,
            "$hide_actionbar": False,
            "$toast_duration|default": 3,
            "$chat_width|default": 320,
        }
    )
    return section


def _start_screen() -> Dict[str, Any]:
    return {
        "$show_splash_text": True,
        "$background_blur|default": 0.4,
        "$title_offset|default": [0, -24],
        "$title_size|default": [256, 64],
    }


def _pause_menu() -> Dict[str, Any]:
    return {
        "$show_quick_settings": True,
        "$menu_opacity|default": 0.85,
        "$button_text|default": "Resume",
    }


def _container() -> Dict[str, Any]:
    return {
        "$container_opacity|default": 0.9,
        "$show_item_count": True,
        "$slot_size|default": [18, 18],
    }


def _build(version: str) -> Document:
    if version == "v4":
        mod_menu = _mod_menu_v4()
    elif version == "v5":
        mod_menu = _mod_menu_v5()
    else:
        mod_menu = _mod_menu_v6()
    document: Document = {
        "namespace": NAMESPACE,
        "mod_menu_config@gc.pnl": mod_menu,
        "start_screen@gc.pnl": _start_screen(),
        "pause_menu@gc.pnl": _pause_menu(),
    }
    if version != "v4":
        document["container_config@gc.pnl"] = _container()
    return document


DEFAULT_DOCUMENTS: Dict[str, Document] = {version: _build(version) for version in VERSIONS}


def default_document(version: str) -> Document:
    """Return an independent copy of a version's default document."""

    if version not in DEFAULT_DOCUMENTS:
        raise KeyError(f"Unknown configuration version {version!r}; expected one of {', '.join(VERSIONS)}")
    return copy.deepcopy(DEFAULT_DOCUMENTS[version])
