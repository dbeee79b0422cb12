"""Pure presentation helpers shared by the form view."""

from __future__ import annotations

import re
from typing import Mapping, Tuple

from hud_config.classifier import Classification, ConfigGroup
from hud_config.document import ValueKind, describe_value

_LABEL_PATTERN = re.compile(r"_|\|default")


def field_label(key: str) -> str:
    return _LABEL_PATTERN.sub(" ", key.replace("$", "", 1)).strip()


def group_label(group_id: str) -> str:
    return group_id.replace("_", " ")


def section_label(name: str) -> str:
    if "mod_menu" in name:
        return "Mod Menu"
    if "start_screen" in name:
        return "Start Screen"
    if "pause_menu" in name:
        return "Pause Menu"
    if "container" in name:
        return "Container"
    return name.split("_")[0]


def control_kind(key: str, value: object) -> str:
    """Pick the editor control for a field: pair, toggle, slider, number, text or unsupported."""

    kind = describe_value(value)
    if kind is ValueKind.PAIR:
        return "pair"
    if kind is ValueKind.BOOLEAN:
        return "toggle"
    if kind is ValueKind.NUMBER:
        return "slider" if "opacity" in key else "number"
    if kind is ValueKind.STRING:
        return "text"
    return "unsupported"


def pair_axis_labels(key: str) -> Tuple[str, str]:
    return ("W", "H") if "size" in key else ("X", "Y")


def group_enabled(section: Mapping[str, object], group: ConfigGroup) -> bool:
    if not group.root:
        return True
    return section.get(group.root) is True


def filter_classification(result: Classification, term: str) -> Classification:
    """Keep groups whose id or children match ``term`` and standalones that match it."""

    needle = (term or "").strip().lower()
    if not needle:
        return result
    groups = {
        group_id: group
        for group_id, group in result.groups.items()
        if needle in group_id.lower() or any(needle in child.lower() for child in group.children)
    }
    standalones = tuple(key for key in result.standalones if needle in key.lower())
    return Classification(groups=groups, standalones=standalones)
