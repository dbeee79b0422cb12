from __future__ import annotations

from hud_config.classifier import Classification, ConfigGroup
from hud_config.presentation import (
    control_kind,
    field_label,
    filter_classification,
    group_enabled,
    group_label,
    pair_axis_labels,
    section_label,
)


def test_field_label_strips_markers():
    assert field_label("$coordinates_opacity|default") == "coordinates opacity"
    assert field_label("$hide_bossbar") == "hide bossbar"


def test_group_and_section_labels():
    assert group_label("text_visibility") == "text visibility"
    assert section_label("mod_menu_config@gc.pnl") == "Mod Menu"
    assert section_label("container_config@gc.pnl") == "Container"
    assert section_label("hud_overrides@gc.pnl") == "hud"


def test_control_kind_per_value():
    assert control_kind("$fps", True) == "toggle"
    assert control_kind("$fps_offset|default", [1, 2]) == "pair"
    assert control_kind("$menu_opacity|default", 0.5) == "slider"
    assert control_kind("$chat_width|default", 320) == "number"
    assert control_kind("$button_text|default", "Resume") == "text"
    assert control_kind("$weird", [1, 2, 3]) == "unsupported"


def test_pair_axis_labels_follow_key():
    assert pair_axis_labels("$slot_size|default") == ("W", "H")
    assert pair_axis_labels("$fps_offset|default") == ("X", "Y")


def test_group_enabled_requires_true_root():
    rooted = ConfigGroup(id="fps", root="$fps", children=())
    synthetic = ConfigGroup(id="bossbar", root="", children=())
    assert group_enabled({"$fps": True}, rooted) is True
    assert group_enabled({"$fps": 1}, rooted) is False
    assert group_enabled({}, synthetic) is True


def test_filter_matches_group_ids_children_and_standalones():
    result = Classification(
        groups={
            "fps": ConfigGroup(id="fps", root="$fps", children=("$fps_anchor|default",)),
            "bossbar": ConfigGroup(id="bossbar", root="", children=("$hide_bossbar",)),
        },
        standalones=("$ui_scale|default", "$chat_width|default"),
    )

    filtered = filter_classification(result, "BOSS")
    assert list(filtered.groups) == ["bossbar"]
    assert filtered.standalones == ()

    assert filter_classification(result, "scale").standalones == ("$ui_scale|default",)
    assert filter_classification(result, "  ") is result
